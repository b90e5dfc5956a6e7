"""
Donation Service Data Models

Campaign ledger records and API request/response models.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Amounts are stored with at most this many fractional digits (wei precision)
AMOUNT_DECIMAL_PLACES = 18


# ====================
# Enums
# ====================


class CampaignStatus(str, Enum):
    """Campaign lifecycle status; NOT_FOUND is reported for unknown ids and never stored"""
    NOT_FOUND = "not_found"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ARCHIVED = "archived"


# ====================
# Core Models
# ====================


class Campaign(BaseModel):
    """Live campaign record"""
    model_config = ConfigDict(from_attributes=True)

    campaign_id: int = Field(..., ge=1)
    name: str
    description: str
    time_goal: datetime
    money_goal: Decimal = Field(..., gt=0, decimal_places=AMOUNT_DECIMAL_PLACES)
    balance: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=AMOUNT_DECIMAL_PLACES)
    campaign_manager: str
    token_uri: str = ""
    status: CampaignStatus = CampaignStatus.IN_PROGRESS

    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ArchivedCampaign(Campaign):
    """Campaign copied into the archive after withdrawal"""
    archive_id: int = Field(..., ge=1)
    status: CampaignStatus = CampaignStatus.ARCHIVED
    withdrawn_amount: Decimal = Field(default=Decimal("0"), ge=0)
    archived_at: Optional[datetime] = None


class HighestDonation(BaseModel):
    """Largest single donation seen across all campaigns"""
    donor: Optional[str] = None
    amount: Decimal = Decimal("0")
    campaign_id: Optional[int] = None


class DonationReceipt(BaseModel):
    """Outcome of an accepted donation"""
    campaign_id: int
    donor: str
    amount: Decimal
    balance: Decimal
    status: CampaignStatus
    awarded_token_id: Optional[int] = None


# ====================
# Request Models
# ====================


class CampaignCreateRequest(BaseModel):
    """Create campaign request; business checks happen in the service"""
    name: str
    description: str
    time_goal: datetime
    money_goal: Decimal
    token_uri: str = ""
    campaign_manager: str


class DonationRequest(BaseModel):
    """Donate request"""
    amount: Decimal


# ====================
# Response Models
# ====================


class CampaignCreatedResponse(BaseModel):
    campaign_id: int
    campaign: Campaign


class CampaignStatusResponse(BaseModel):
    campaign_id: int
    status: CampaignStatus


class CampaignListResponse(BaseModel):
    campaigns: List[Campaign] = Field(default_factory=list)
    total: int = 0


class AdminResponse(BaseModel):
    account: str
    is_admin: bool


class LedgerInfo(BaseModel):
    """Ledger identity and counters"""
    address: str
    owner: str
    donation_award_address: str
    campaign_identifier: int = 0
    archived_campaign_identifier: int = 0
    custody_balance: Decimal = Decimal("0")
    currency: str = "ETH"


class HealthResponse(BaseModel):
    status: str
    service: str
    port: int
    version: str


__all__ = [
    "AMOUNT_DECIMAL_PLACES",
    "CampaignStatus",
    "Campaign",
    "ArchivedCampaign",
    "HighestDonation",
    "DonationReceipt",
    "CampaignCreateRequest",
    "DonationRequest",
    "CampaignCreatedResponse",
    "CampaignStatusResponse",
    "CampaignListResponse",
    "AdminResponse",
    "LedgerInfo",
    "HealthResponse",
]
