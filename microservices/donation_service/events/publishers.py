"""
Donation Event Publishers

Stages ledger events on the unit of work; the bus receives them in emission
order once the surrounding transaction commits.
"""

import logging
from decimal import Decimal
from typing import Any, Dict

from core.nats_client import EventType, ServiceSource, create_event
from core.unit_of_work import UnitOfWork

from .models import (
    DonationEventType,
    AdminAssignedEventData,
    AdminRevokedEventData,
    CampaignCreatedEventData,
    DonationCreatedEventData,
    CampaignTimeGoalReachedEventData,
    DonatorAwardedEventData,
    FundsWithdrawedEventData,
    CampaignArchivedEventData,
)

logger = logging.getLogger(__name__)


class DonationEventPublisher:
    """Publisher for donation ledger events"""

    def __init__(self, unit_of_work: UnitOfWork, event_bus=None):
        self.unit_of_work = unit_of_work
        self.event_bus = event_bus
        self.source = ServiceSource.DONATION_SERVICE

    def publish(self, event_type: DonationEventType, data: Dict[str, Any]) -> None:
        """
        Stage an event for publication after commit.

        Args:
            event_type: The event type enum
            data: Event data payload
        """
        if not self.event_bus:
            logger.debug(f"Event bus not configured, skipping publish: {event_type.value}")
            return

        event = create_event(EventType(event_type.value), self.source, data)
        self.unit_of_work.emit(event, self.event_bus)

    # ====================
    # Admin Events
    # ====================

    def publish_admin_assigned(self, admin: str) -> None:
        self.publish(
            DonationEventType.ADMIN_ASSIGNED,
            AdminAssignedEventData(admin=admin).model_dump(),
        )

    def publish_admin_revoked(self, admin: str) -> None:
        self.publish(
            DonationEventType.ADMIN_REVOKED,
            AdminRevokedEventData(admin=admin).model_dump(),
        )

    # ====================
    # Campaign Events
    # ====================

    def publish_campaign_created(
        self, creator: str, campaign_manager: str, campaign_id: int, name: str
    ) -> None:
        data = CampaignCreatedEventData(
            creator=creator,
            campaign_manager=campaign_manager,
            campaign_id=campaign_id,
            name=name,
        )
        self.publish(DonationEventType.CAMPAIGN_CREATED, data.model_dump())

    def publish_time_goal_reached(self, campaign_id: int) -> None:
        self.publish(
            DonationEventType.CAMPAIGN_TIME_GOAL_REACHED,
            CampaignTimeGoalReachedEventData(campaign_id=campaign_id).model_dump(),
        )

    def publish_campaign_archived(self, archive_id: int, campaign_id: int) -> None:
        self.publish(
            DonationEventType.CAMPAIGN_ARCHIVED,
            CampaignArchivedEventData(archive_id=archive_id, campaign_id=campaign_id).model_dump(),
        )

    # ====================
    # Funds Events
    # ====================

    def publish_donation_created(self, donor: str, amount: Decimal, campaign_id: int) -> None:
        data = DonationCreatedEventData(donor=donor, amount=amount, campaign_id=campaign_id)
        self.publish(DonationEventType.DONATION_CREATED, data.model_dump())

    def publish_donator_awarded(self, donor: str, campaign_id: int, token_id: int) -> None:
        data = DonatorAwardedEventData(donor=donor, campaign_id=campaign_id, token_id=token_id)
        self.publish(DonationEventType.DONATOR_AWARDED, data.model_dump())

    def publish_funds_withdrawed(
        self, campaign_id: int, campaign_manager: str, amount: Decimal
    ) -> None:
        data = FundsWithdrawedEventData(
            campaign_id=campaign_id,
            campaign_manager=campaign_manager,
            amount=amount,
        )
        self.publish(DonationEventType.FUNDS_WITHDRAWED, data.model_dump())
