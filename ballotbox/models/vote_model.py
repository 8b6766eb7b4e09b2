from pydantic import BaseModel, ConfigDict, Field


class VoteIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    proposal_id: int = Field(..., alias="proposalId", examples=[1])


class ProposalIn(BaseModel):
    description: str = Field(..., examples=["Build a bike lane on Main Street"])


class VoterIn(BaseModel):
    address: str = Field(..., min_length=1, examples=["0x70997970C51812dc3A010C7d01b50e0d17dc79C8"])
