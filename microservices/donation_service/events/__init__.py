"""
Donation Service Events

Event models and publishers for the donation ledger.
"""

from .models import (
    DonationEventType,
    DonationStreamConfig,
    AdminAssignedEventData,
    AdminRevokedEventData,
    CampaignCreatedEventData,
    DonationCreatedEventData,
    CampaignTimeGoalReachedEventData,
    DonatorAwardedEventData,
    FundsWithdrawedEventData,
    CampaignArchivedEventData,
)
from .publishers import DonationEventPublisher

__all__ = [
    # Event Types
    "DonationEventType",
    "DonationStreamConfig",
    # Event Data Models
    "AdminAssignedEventData",
    "AdminRevokedEventData",
    "CampaignCreatedEventData",
    "DonationCreatedEventData",
    "CampaignTimeGoalReachedEventData",
    "DonatorAwardedEventData",
    "FundsWithdrawedEventData",
    "CampaignArchivedEventData",
    # Publisher
    "DonationEventPublisher",
]
