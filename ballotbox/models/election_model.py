from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class WorkflowStatus(IntEnum):
    REGISTERING_VOTERS = 0
    PROPOSALS_REGISTRATION_STARTED = 1
    PROPOSALS_REGISTRATION_ENDED = 2
    VOTING_SESSION_STARTED = 3
    VOTING_SESSION_ENDED = 4
    VOTES_TALLIED = 5

    @property
    def label(self) -> str:
        # RegisteringVoters, ProposalsRegistrationStarted, ...
        return "".join(part.capitalize() for part in self.name.split("_"))


class Voter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_registered: bool = Field(default=False, alias="isRegistered")
    has_voted: bool = Field(default=False, alias="hasVoted")
    voted_proposal_id: int = Field(default=0, alias="votedProposalId")


class Proposal(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: str = Field(..., examples=["Build a bike lane on Main Street"])
    vote_count: int = Field(default=0, ge=0, alias="voteCount")


class Election(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    owner: str
    workflow_status: WorkflowStatus = Field(default=WorkflowStatus.REGISTERING_VOTERS, alias="workflowStatus")
    winning_proposal_id: int = Field(default=0, alias="winningProposalId")
