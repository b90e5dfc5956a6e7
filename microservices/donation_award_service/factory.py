"""
Donation Award Service Factory

Builds the award registry with its in-memory repository.

Usage:
    from .factory import create_award_service
    registry = create_award_service(owner="0xdeployer", event_bus=bus)
"""
from typing import Optional

from core.config import LedgerConfig
from core.unit_of_work import UnitOfWork

from .award_service import AwardService


def create_award_service(
    owner: str,
    config: Optional[LedgerConfig] = None,
    event_bus=None,
    unit_of_work: Optional[UnitOfWork] = None,
    clock=None,
) -> AwardService:
    """
    Create AwardService owned by ``owner``.

    Args:
        owner: Initial registry owner (the deployer)
        config: Ledger configuration; supplies registry address, name and symbol
        event_bus: Event bus for publishing events
        unit_of_work: Execution context shared with the ledger
        clock: Optional time source

    Returns:
        Configured AwardService instance
    """
    from .award_repository import AwardRepository

    config = config or LedgerConfig()
    return AwardService(
        repository=AwardRepository(owner=owner),
        unit_of_work=unit_of_work,
        event_bus=event_bus,
        address=config.award_registry_address,
        name=config.award_name,
        symbol=config.award_symbol,
        clock=clock,
    )
