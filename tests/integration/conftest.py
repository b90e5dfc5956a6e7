"""
Integration Test Fixtures

Deploys the full ledger stack on a NATSEventBus whose nats-py connection is
mocked; subscribers record every event delivered under ``ledger.>`` and
``award.>`` after the JSON round trip.
"""

import os
import sys
from typing import List

import pytest
import pytest_asyncio

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from core.config import LedgerConfig
from core import nats_client as nats_module
from core.nats_client import Event, NATSEventBus
from microservices.donation_service.factory import deploy_donation_ledger
from tests.component.mocks import MockNATSConnection
from tests.contracts.donation.data_contract import LEDGER_ADDRESS, OWNER, REGISTRY_ADDRESS


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: multi-component flows over the event bus")


class EventRecorder:
    """Subscriber that keeps delivered events in order"""

    def __init__(self):
        self.events: List[Event] = []

    async def __call__(self, event: Event) -> None:
        self.events.append(event)

    @property
    def types(self) -> List[str]:
        return [e.type for e in self.events]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def integration_config() -> LedgerConfig:
    return LedgerConfig(
        owner_account=OWNER,
        ledger_address=LEDGER_ADDRESS,
        award_registry_address=REGISTRY_ADDRESS,
    )


@pytest.fixture
def nats_connection(monkeypatch) -> MockNATSConnection:
    """Route nats.connect to a mocked connection and reset the shared bus"""
    connection = MockNATSConnection()

    async def fake_connect(servers, name=None, **kwargs):
        return connection

    monkeypatch.setattr(nats_module.nats, "connect", fake_connect)
    monkeypatch.setattr(nats_module, "_event_bus", None)
    return connection


@pytest_asyncio.fixture
async def event_bus(nats_connection):
    bus = NATSEventBus(service_name="donation_integration")
    await bus.connect()
    yield bus
    await bus.close()


@pytest_asyncio.fixture
async def recorder(event_bus) -> EventRecorder:
    recorder = EventRecorder()
    await event_bus.subscribe_to_events("ledger.>", recorder)
    await event_bus.subscribe_to_events("award.>", recorder)
    return recorder


@pytest_asyncio.fixture
async def deployed(integration_config, event_bus, recorder):
    """Ledger deployed on the shared bus; deployment events are cleared"""
    ledger = await deploy_donation_ledger(config=integration_config, event_bus=event_bus)
    recorder.clear()
    return ledger
