"""
Donation Event Data Models

Event type definitions and payloads for donation ledger events.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# Event Type Definitions
# =============================================================================


class DonationEventType(str, Enum):
    """
    Events published by donation_service.

    Other services should reference these when subscribing.
    """
    # Admin events
    ADMIN_ASSIGNED = "ledger.admin.assigned"
    ADMIN_REVOKED = "ledger.admin.revoked"

    # Campaign lifecycle events
    CAMPAIGN_CREATED = "ledger.campaign.created"
    CAMPAIGN_TIME_GOAL_REACHED = "ledger.campaign.time_goal_reached"
    CAMPAIGN_ARCHIVED = "ledger.campaign.archived"

    # Funds events
    DONATION_CREATED = "ledger.donation.created"
    DONATOR_AWARDED = "ledger.donator.awarded"
    FUNDS_WITHDRAWED = "ledger.funds.withdrawed"


class DonationStreamConfig:
    """Subject layout for ledger events"""
    STREAM_NAME = "ledger-stream"
    SUBJECTS = ["ledger.>"]


# =============================================================================
# Event Data Models
# =============================================================================


class AdminAssignedEventData(BaseModel):
    admin: str


class AdminRevokedEventData(BaseModel):
    admin: str


class CampaignCreatedEventData(BaseModel):
    creator: str
    campaign_manager: str
    campaign_id: int = Field(..., ge=1)
    name: Optional[str] = None


class DonationCreatedEventData(BaseModel):
    donor: str
    amount: Decimal
    campaign_id: int


class CampaignTimeGoalReachedEventData(BaseModel):
    campaign_id: int


class DonatorAwardedEventData(BaseModel):
    donor: str
    campaign_id: int
    token_id: int = Field(..., ge=1)


class FundsWithdrawedEventData(BaseModel):
    campaign_id: int
    campaign_manager: str
    amount: Decimal


class CampaignArchivedEventData(BaseModel):
    archive_id: int = Field(..., ge=1)
    campaign_id: Optional[int] = None
