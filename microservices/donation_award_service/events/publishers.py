"""
Donation Award Event Publishers

Stages award registry events on the unit of work; they reach the event bus
once the surrounding transaction commits.
"""

import logging
from typing import Any, Dict, Optional

from core.nats_client import EventType, ServiceSource, create_event
from core.unit_of_work import UnitOfWork

from .models import (
    AwardEventType,
    NFTMintedEventData,
    OwnershipTransferredEventData,
)

logger = logging.getLogger(__name__)


class AwardEventPublisher:
    """Publisher for award registry events"""

    def __init__(self, unit_of_work: UnitOfWork, event_bus=None):
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.source = ServiceSource.DONATION_AWARD_SERVICE

    def publish(self, event_type: AwardEventType, data: Dict[str, Any]) -> None:
        """Stage an event for publication after commit"""
        if not self.event_bus:
            logger.debug(f"Event bus not configured, skipping publish: {event_type.value}")
            return

        event = create_event(EventType(event_type.value), self.source, data)
        self.unit_of_work.emit(event, self.event_bus)

    def publish_nft_minted(self, owner: str, token_id: int, token_uri: str) -> None:
        data = NFTMintedEventData(owner=owner, token_id=token_id, token_uri=token_uri)
        self.publish(AwardEventType.NFT_MINTED, data.model_dump())

    def publish_ownership_transferred(self, previous_owner: str, new_owner: str) -> None:
        data = OwnershipTransferredEventData(previous_owner=previous_owner, new_owner=new_owner)
        self.publish(AwardEventType.OWNERSHIP_TRANSFERRED, data.model_dump())
