"""
Component Test Fixtures for Donation Service

Deploys the ledger and award registry in-process with a manual clock and a
recording event bus.
"""

import asyncio
import os
import sys
from decimal import Decimal

import pytest
import pytest_asyncio

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from core.config import LedgerConfig
from microservices.donation_service.factory import deploy_donation_ledger
from tests.contracts.donation.data_contract import (
    DonationTestDataFactory,
    DONOR_1,
    LEDGER_ADDRESS,
    MANAGER,
    OWNER,
    REGISTRY_ADDRESS,
)


@pytest.fixture
def ledger_config() -> LedgerConfig:
    """Ledger configuration with fixed accounts"""
    return LedgerConfig(
        owner_account=OWNER,
        ledger_address=LEDGER_ADDRESS,
        award_registry_address=REGISTRY_ADDRESS,
    )


@pytest.fixture
def factory() -> DonationTestDataFactory:
    return DonationTestDataFactory()


@pytest_asyncio.fixture
async def ledger(ledger_config, mock_event_bus, clock):
    """Deployed ledger; deployment events are cleared"""
    service = await deploy_donation_ledger(
        config=ledger_config,
        event_bus=mock_event_bus,
        clock=clock,
    )
    mock_event_bus.clear()
    return service


@pytest_asyncio.fixture
async def campaign_id(ledger, clock, factory):
    """One IN_PROGRESS campaign (goal 3, deadline in 5 minutes) managed by MANAGER"""
    cid = await ledger.create_campaign(
        OWNER, **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER)
    )
    ledger.event_bus.clear()
    return cid


@pytest_asyncio.fixture
async def completed_campaign_id(ledger, campaign_id):
    """Campaign completed by reaching its money goal"""
    await ledger.donate(DONOR_1, campaign_id, Decimal("3"))
    ledger.event_bus.clear()
    return campaign_id


@pytest.fixture
def sync_ledger(ledger_config, mock_event_bus, clock):
    """Deployed ledger for synchronous TestClient tests"""
    service = asyncio.run(
        deploy_donation_ledger(config=ledger_config, event_bus=mock_event_bus, clock=clock)
    )
    mock_event_bus.clear()
    return service


@pytest.fixture
def client(sync_ledger):
    """FastAPI test client bound to a freshly deployed ledger"""
    from fastapi.testclient import TestClient
    from microservices.donation_service.main import app, get_service

    app.dependency_overrides[get_service] = lambda: sync_ledger
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
