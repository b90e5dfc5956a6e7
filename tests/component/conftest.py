"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── donation/        Ledger service and HTTP API
    ├── donation_award/  Award registry service
    └── mocks/           Mock implementations

Usage:
    pytest tests/component -v
    pytest tests/component/donation -v
"""
import os
import sys

import pytest

# Set testing environment BEFORE any imports
os.environ["ENV"] = "testing"
os.environ["ENVIRONMENT"] = "testing"

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from tests.component.mocks import ManualClock, MockEventBus


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )


# =============================================================================
# Shared Mocks
# =============================================================================

@pytest.fixture
def mock_event_bus() -> MockEventBus:
    """Mock event bus"""
    return MockEventBus()


@pytest.fixture
def clock() -> ManualClock:
    """Manual clock starting at the contract genesis time"""
    return ManualClock()
