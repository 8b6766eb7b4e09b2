from fastapi import APIRouter, Depends

from ..dependencies import get_engine
from ..engine import ElectionEngine
from ..models.vote_model import VoteIn
from ..security import get_current_caller

vote_router = APIRouter(prefix="/vote", tags=["Vote"])


@vote_router.post("/cast")
def cast_vote(vote: VoteIn, caller: str = Depends(get_current_caller), engine: ElectionEngine = Depends(get_engine)):
    """
    Casts the caller's single vote for a proposal.
    Only registered voters, only while the voting session is open.
    """
    voter = engine.set_vote(caller, vote.proposal_id)
    return {
        "message": "Vote cast successfully!",
        "voter": caller,
        "proposalId": voter.voted_proposal_id,
    }
