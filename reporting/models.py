# reporting/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class ExportModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ExportRelation(ExportModel):
    can_send_to_address: Optional[str] = Field(alias="canSendToAddress")
    user_address: Optional[str] = Field(alias="userAddress")
    # always null; the raw limit goes to limitPercentage
    limit: None = None
    limit_percentage: str = Field(alias="limitPercentage")


class ExportTokenOwner(ExportModel):
    id: Optional[str]


class ExportToken(ExportModel):
    id: Optional[str]
    owner: ExportTokenOwner


class ExportBalance(ExportModel):
    amount: str
    token: ExportToken


class ExportSafe(ExportModel):
    id: str
    organization: bool
    outgoing: List[ExportRelation] = Field(default_factory=list)
    incoming: List[ExportRelation] = Field(default_factory=list)
    balances: List[ExportBalance] = Field(default_factory=list)


class ExportSnapshot(ExportModel):
    """Root of the exported document."""
    block_number: Optional[int] = Field(alias="blockNumber")
    safes: List[ExportSafe] = Field(default_factory=list)
