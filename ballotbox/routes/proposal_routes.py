from fastapi import APIRouter, Depends

from ..dependencies import get_engine
from ..engine import ElectionEngine
from ..models.election_model import Proposal
from ..models.vote_model import ProposalIn
from ..schemas import ProposalCreatedOut
from ..security import get_current_caller

router = APIRouter(prefix="/proposals", tags=["Proposals"])


@router.post("", status_code=201, response_model=ProposalCreatedOut)
def add_proposal(
    proposal: ProposalIn, caller: str = Depends(get_current_caller), engine: ElectionEngine = Depends(get_engine)
):
    proposal_id = engine.add_proposal(caller, proposal.description)
    return ProposalCreatedOut(proposal_id=proposal_id)


@router.get("/{proposal_id}", response_model=Proposal)
def get_one_proposal(
    proposal_id: int, caller: str = Depends(get_current_caller), engine: ElectionEngine = Depends(get_engine)
):
    return engine.get_one_proposal(caller, proposal_id)
