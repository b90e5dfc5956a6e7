"""
Core Module for the Donation Ledger

Shared infrastructure for the ledger and award registry services.

COMPONENTS:
    - config/: environment-driven configuration (python-dotenv + dataclasses)
    - logger.py: service logger setup
    - nats_client.py: NATS JetStream event bus and event envelope
    - unit_of_work.py: atomic multi-component operations

USAGE:
    from core.config import get_settings
    from core.nats_client import get_event_bus
"""

from .nats_client import Event, EventType, NATSEventBus, ServiceSource, create_event, get_event_bus
from .logger import setup_service_logger
from .unit_of_work import TransactionError, UnitOfWork

__all__ = [
    "Event",
    "EventType",
    "NATSEventBus",
    "ServiceSource",
    "create_event",
    "get_event_bus",
    "setup_service_logger",
    "TransactionError",
    "UnitOfWork",
]
