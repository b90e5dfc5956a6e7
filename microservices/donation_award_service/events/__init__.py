"""
Donation Award Service Events

Event models and publishers for the award registry.
"""

from .models import (
    AwardEventType,
    AwardStreamConfig,
    NFTMintedEventData,
    OwnershipTransferredEventData,
)
from .publishers import AwardEventPublisher

__all__ = [
    # Event Types
    "AwardEventType",
    "AwardStreamConfig",
    # Event Data Models
    "NFTMintedEventData",
    "OwnershipTransferredEventData",
    # Publisher
    "AwardEventPublisher",
]
