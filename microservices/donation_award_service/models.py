"""
Donation Award Service Data Models

Award tokens and registry read models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AwardToken(BaseModel):
    """A minted award token"""
    model_config = ConfigDict(from_attributes=True)

    token_id: int = Field(..., ge=1, description="Sequential token id")
    owner: str = Field(..., min_length=1, description="Account holding the token")
    token_uri: str = Field(..., description="Opaque metadata reference")
    minted_at: Optional[datetime] = None


class AwardRegistryInfo(BaseModel):
    """Registry identity and counters"""
    name: str
    symbol: str
    address: str
    owner: str
    token_count: int = Field(0, ge=0)


class AwardBalanceResponse(BaseModel):
    """Number of tokens held by an account"""
    account: str
    balance: int = Field(0, ge=0)


__all__ = [
    "AwardToken",
    "AwardRegistryInfo",
    "AwardBalanceResponse",
]
