"""
NATS event bus for the donation ledger

Events are wrapped in the platform envelope (id, type, source, subject,
timestamp, data, metadata, version) and published to NATS JetStream with the
event type as subject. Ledger events go to ``ledger-stream`` and registry
events to ``award-stream``.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import nats
from nats.aio.client import Client as NATS
from nats.js import JetStreamContext


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that keeps Decimal amounts exact"""
    def default(self, obj):
        if isinstance(obj, Decimal):
            return str(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event types published by the ledger and the award registry"""

    # Admin Events
    ADMIN_ASSIGNED = "ledger.admin.assigned"
    ADMIN_REVOKED = "ledger.admin.revoked"

    # Campaign Events
    CAMPAIGN_CREATED = "ledger.campaign.created"
    CAMPAIGN_TIME_GOAL_REACHED = "ledger.campaign.time_goal_reached"
    CAMPAIGN_ARCHIVED = "ledger.campaign.archived"

    # Donation Events
    DONATION_CREATED = "ledger.donation.created"
    DONATOR_AWARDED = "ledger.donator.awarded"
    FUNDS_WITHDRAWED = "ledger.funds.withdrawed"

    # Award Registry Events
    NFT_MINTED = "award.nft.minted"
    OWNERSHIP_TRANSFERRED = "award.ownership.transferred"


class ServiceSource(Enum):
    """Services that publish events"""

    DONATION_SERVICE = "donation_service"
    DONATION_AWARD_SERVICE = "donation_award_service"


class Event:
    """Event model"""

    def __init__(
        self,
        event_type: EventType,
        source: ServiceSource,
        data: Dict[str, Any],
        subject: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ):
        self.id = str(uuid.uuid4())
        self.type = event_type.value
        self.source = source.value
        self.data = data
        self.subject = subject
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.metadata = metadata or {}
        self.version = "1.0.0"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "source": self.source,
            "subject": self.subject,
            "timestamp": self.timestamp,
            "data": self.data,
            "metadata": self.metadata,
            "version": self.version,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), cls=DecimalEncoder)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        event = cls.__new__(cls)
        event.id = data.get("id")
        event.type = data.get("type")
        event.source = data.get("source")
        event.subject = data.get("subject")
        event.timestamp = data.get("timestamp")
        event.data = data.get("data", {})
        event.metadata = data.get("metadata", {})
        event.version = data.get("version", "1.0.0")
        return event

    def __repr__(self) -> str:
        return f"Event(type={self.type!r}, data={self.data!r})"


class NATSEventBus:
    """
    NATS JetStream event bus.

    Publishing never raises: failures are logged and reported as False so a
    committed ledger operation is not undone by a broker outage.
    """

    STREAM_PREFIXES = ("ledger", "award")

    def __init__(self, service_name: str, servers: str = "nats://localhost:4222"):
        self.service_name = service_name
        self.servers = servers
        self._nc: Optional[NATS] = None
        self._js: Optional[JetStreamContext] = None
        self._subscriptions: Dict[str, Any] = {}
        self._is_connected = False

        logger.info(f"NATS EventBus initialized: {servers}")

    async def connect(self):
        """Connect to NATS and make sure the ledger streams exist"""
        try:
            self._nc = await nats.connect(servers=self.servers, name=self.service_name)
            self._js = self._nc.jetstream()
            self._is_connected = True
            logger.info(f"Connected to NATS at {self.servers} as {self.service_name}")
        except Exception as e:
            logger.error(f"Failed to connect to NATS: {e}")
            raise

        for prefix in self.STREAM_PREFIXES:
            await self.create_stream(self._get_stream_name_for_event(prefix), [f"{prefix}.>"])

    async def create_stream(self, name: str, subjects: List[str]) -> bool:
        """Create a JetStream stream; an existing stream is kept as is"""
        try:
            await self._js.add_stream(name=name, subjects=subjects)
            logger.debug(f"Stream '{name}' ready")
            return True
        except Exception as e:
            logger.debug(f"Stream creation note: {e}")
            return False

    def _get_stream_name_for_event(self, event_type: str) -> str:
        prefix = event_type.split(".")[0]
        return f"{prefix}-stream"

    async def publish_event(self, event: Event) -> bool:
        """Publish an event to JetStream under its type as subject"""
        if not self._is_connected or not self._js:
            logger.error("Not connected to NATS")
            return False

        try:
            ack = await self._js.publish(
                event.type,
                event.to_json().encode(),
                headers={"event_id": event.id, "source": event.source},
            )
            logger.info(f"Published event {event.type} [{event.id}] to stream {ack.stream}, seq={ack.seq}")
            return True
        except Exception as e:
            logger.error(f"Error publishing event {event.id}: {e}")
            return False

    async def subscribe_to_events(
        self, pattern: str, handler: Callable, durable: Optional[str] = None
    ) -> Optional[str]:
        """
        Subscribe to events with a subject pattern.

        Args:
            pattern: Subject pattern (e.g., "ledger.campaign.*" or "ledger.>")
            handler: Async callback receiving the decoded Event
            durable: Optional durable consumer name
        """
        if not self._is_connected or not self._js:
            logger.error("Not connected to NATS")
            return None

        async def message_handler(msg):
            try:
                event = Event.from_dict(json.loads(msg.data.decode()))
                await handler(event)
                await msg.ack()
            except Exception as e:
                logger.error(f"Handler for {pattern} failed: {e}")
                await msg.nak()

        self._subscriptions[pattern] = await self._js.subscribe(
            pattern, cb=message_handler, durable=durable, manual_ack=True
        )
        logger.info(f"Subscribed to {pattern} (JetStream consumer)")
        return durable or pattern

    async def unsubscribe(self, pattern: str) -> bool:
        subscription = self._subscriptions.pop(pattern, None)
        if subscription is None:
            return False
        await subscription.unsubscribe()
        return True

    async def close(self):
        """Drain subscriptions and close the connection"""
        self._subscriptions.clear()
        if self._nc and self._is_connected:
            await self._nc.drain()
        self._is_connected = False
        logger.info("Disconnected from NATS")

    @property
    def is_connected(self) -> bool:
        return self._is_connected


# Singleton instance
_event_bus: Optional[NATSEventBus] = None


async def get_event_bus(service_name: str, servers: str = "nats://localhost:4222") -> NATSEventBus:
    """
    Get or create the process-wide event bus.

    Args:
        service_name: Name of the service using the event bus
        servers: NATS server URL

    Returns:
        Connected NATSEventBus instance
    """
    global _event_bus

    if _event_bus is None or not _event_bus.is_connected:
        bus = NATSEventBus(service_name=service_name, servers=servers)
        await bus.connect()
        _event_bus = bus

    return _event_bus


def create_event(
    event_type: EventType,
    source: ServiceSource,
    data: Dict[str, Any],
    subject: Optional[str] = None,
    metadata: Optional[Dict[str, str]] = None,
) -> Event:
    """Create an Event instance"""
    return Event(
        event_type=event_type,
        source=source,
        data=data,
        subject=subject,
        metadata=metadata,
    )
