from .election_model import Election, Proposal, Voter, WorkflowStatus
from .vote_model import ProposalIn, VoteIn, VoterIn

__all__ = [
    "Election",
    "Proposal",
    "ProposalIn",
    "VoteIn",
    "Voter",
    "VoterIn",
    "WorkflowStatus",
]
