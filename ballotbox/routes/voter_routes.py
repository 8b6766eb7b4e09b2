from fastapi import APIRouter, Depends

from ..dependencies import get_engine
from ..engine import ElectionEngine
from ..models.election_model import Voter
from ..models.vote_model import VoterIn
from ..security import get_current_caller

router = APIRouter(prefix="/voters", tags=["Voters"])


@router.post("", status_code=201)
def add_voter(
    voter: VoterIn, caller: str = Depends(get_current_caller), engine: ElectionEngine = Depends(get_engine)
):
    """Whitelist an address as a voter. Owner only, while voters are being registered."""
    engine.add_voter(caller, voter.address)
    return {"message": "Voter registered successfully!", "address": voter.address}


@router.get("/{address}", response_model=Voter)
def get_voter(address: str, caller: str = Depends(get_current_caller), engine: ElectionEngine = Depends(get_engine)):
    return engine.get_voter(caller, address)
