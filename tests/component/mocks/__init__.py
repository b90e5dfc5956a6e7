"""
Component Test Mocks

Shared mock implementations for component testing.
"""

from .clock_mock import ManualClock
from .nats_mock import MockEventBus, MockJetStream, MockNATSConnection

__all__ = [
    'ManualClock',
    'MockEventBus',
    'MockJetStream',
    'MockNATSConnection',
]
