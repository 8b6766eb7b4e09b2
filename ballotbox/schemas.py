from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, constr

from .models.election_model import WorkflowStatus


class AccountBase(BaseModel):
    address: str = Field(..., min_length=1)


class AccountCreate(AccountBase):
    password: str = Field(..., min_length=6)


class AccountOut(AccountBase):
    status: str
    created_at: datetime


class StatusUpdateRequest(BaseModel):
    status: constr(pattern="^(approved|rejected)$")


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class ElectionStatusOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    owner: str
    workflow_status: WorkflowStatus = Field(..., alias="workflowStatus")
    workflow_status_name: str = Field(..., alias="workflowStatusName")
    winning_proposal_id: int = Field(..., alias="winningProposalId")


class WinnerOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    winning_proposal_id: int = Field(..., alias="winningProposalId")
    workflow_status: WorkflowStatus = Field(..., alias="workflowStatus")
    # False until votes are tallied; a 0 winner before that is only the default.
    tallied: bool


class ProposalCreatedOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    proposal_id: int = Field(..., alias="proposalId")
