from fastapi import APIRouter, Depends

from ..dependencies import get_engine
from ..engine import ElectionEngine
from ..models.election_model import WorkflowStatus
from ..schemas import ElectionStatusOut, WinnerOut
from ..security import get_current_caller

router = APIRouter(prefix="/election", tags=["Election"])


def _transition_response(status: WorkflowStatus) -> dict:
    return {
        "message": f"Workflow status changed to {status.label}",
        "workflowStatus": int(status),
        "workflowStatusName": status.label,
    }


@router.get("/status", response_model=ElectionStatusOut)
def get_status(engine: ElectionEngine = Depends(get_engine)):
    election = engine.status()
    return ElectionStatusOut(
        owner=election.owner,
        workflow_status=election.workflow_status,
        workflow_status_name=election.workflow_status.label,
        winning_proposal_id=election.winning_proposal_id,
    )


@router.post("/start-proposals-registering")
def start_proposals_registering(
    caller: str = Depends(get_current_caller), engine: ElectionEngine = Depends(get_engine)
):
    return _transition_response(engine.start_proposals_registration(caller))


@router.post("/end-proposals-registering")
def end_proposals_registering(
    caller: str = Depends(get_current_caller), engine: ElectionEngine = Depends(get_engine)
):
    return _transition_response(engine.end_proposals_registration(caller))


@router.post("/start-voting-session")
def start_voting_session(caller: str = Depends(get_current_caller), engine: ElectionEngine = Depends(get_engine)):
    return _transition_response(engine.start_voting_session(caller))


@router.post("/end-voting-session")
def end_voting_session(caller: str = Depends(get_current_caller), engine: ElectionEngine = Depends(get_engine)):
    return _transition_response(engine.end_voting_session(caller))


@router.post("/tally-votes")
def tally_votes(caller: str = Depends(get_current_caller), engine: ElectionEngine = Depends(get_engine)):
    winning_proposal_id = engine.tally_votes(caller)
    response = _transition_response(WorkflowStatus.VOTES_TALLIED)
    response["winningProposalId"] = winning_proposal_id
    return response


@router.get("/winner", response_model=WinnerOut)
def get_winner(engine: ElectionEngine = Depends(get_engine)):
    election = engine.status()
    return WinnerOut(
        winning_proposal_id=election.winning_proposal_id,
        workflow_status=election.workflow_status,
        tallied=election.workflow_status == WorkflowStatus.VOTES_TALLIED,
    )
