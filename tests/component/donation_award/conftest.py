"""
Component Test Fixtures for Donation Award Service
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from microservices.donation_award_service.factory import create_award_service
from tests.contracts.donation.data_contract import OWNER


@pytest.fixture
def award_service(mock_event_bus, clock):
    """Fresh registry owned by OWNER"""
    return create_award_service(owner=OWNER, event_bus=mock_event_bus, clock=clock)
