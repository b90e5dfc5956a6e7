"""
Donation Service Factory

Bootstraps the ledger and its award registry in the required order:

1. create the award registry, owned by the deployer
2. create the ledger with the registry, owned by the deployer
3. transfer registry ownership to the ledger so it becomes the only minter

Both components share one unit of work and one event bus.
"""

import logging
from typing import Optional

from core.config import LedgerConfig
from core.nats_client import NATSEventBus, get_event_bus
from core.unit_of_work import UnitOfWork

from microservices.donation_award_service.award_service import AwardService
from microservices.donation_award_service.factory import create_award_service

from .donation_service import DonationService

logger = logging.getLogger(__name__)


async def deploy_donation_ledger(
    config: Optional[LedgerConfig] = None,
    event_bus=None,
    clock=None,
    treasury=None,
) -> DonationService:
    """
    Deploy the award registry and the ledger, then hand minting to the ledger.

    Args:
        config: Ledger configuration; owner account, addresses and switches
        event_bus: Event bus shared by both components
        clock: Optional time source shared by both components
        treasury: Optional custody implementation

    Returns:
        DonationService whose ``award_registry`` is owned by the ledger
    """
    from .donation_repository import DonationRepository
    from .treasury import Treasury

    config = config or LedgerConfig()
    deployer = config.owner_account
    unit_of_work = UnitOfWork()

    award_registry = create_award_service(
        owner=deployer,
        config=config,
        event_bus=event_bus,
        unit_of_work=unit_of_work,
        clock=clock,
    )

    ledger = DonationService(
        repository=DonationRepository(),
        treasury=treasury or Treasury(),
        award_registry=award_registry,
        owner=deployer,
        unit_of_work=unit_of_work,
        event_bus=event_bus,
        address=config.ledger_address,
        clock=clock,
        withdraw_checks_time_goal=config.withdraw_checks_time_goal,
        currency=config.currency,
    )

    await award_registry.transfer_ownership(deployer, ledger.address)
    logger.info(
        f"Donation ledger deployed at {ledger.address}, award registry "
        f"{award_registry.address} owned by the ledger"
    )
    return ledger


class DonationServiceFactory:
    """Factory for creating donation service components"""

    def __init__(self, config: Optional[LedgerConfig] = None):
        self.config = config or LedgerConfig.from_env()
        self._event_bus: Optional[NATSEventBus] = None
        self._service: Optional[DonationService] = None

    async def initialize(self) -> None:
        """Initialize all components"""
        logger.info("Initializing Donation Service components...")

        if self.config.nats_enabled:
            try:
                self._event_bus = await get_event_bus(
                    self.config.service_name, servers=self.config.nats_servers
                )
                logger.info("Event bus initialized successfully")
            except Exception as e:
                logger.warning(f"Failed to initialize event bus: {e}. Continuing without event publishing.")
                self._event_bus = None
        else:
            logger.info("NATS disabled, events will not be published")

        self._service = await deploy_donation_ledger(
            config=self.config,
            event_bus=self._event_bus,
        )

        logger.info("Donation Service components initialized")

    async def close(self) -> None:
        """Close all components"""
        logger.info("Closing Donation Service components...")

        if self._event_bus:
            await self._event_bus.close()

        logger.info("Donation Service components closed")

    @property
    def service(self) -> DonationService:
        """Get donation service"""
        if not self._service:
            raise RuntimeError("Factory not initialized. Call initialize() first.")
        return self._service

    @property
    def award_service(self) -> AwardService:
        """Get award registry service"""
        return self.service.award_registry

    @property
    def event_bus(self) -> Optional[NATSEventBus]:
        """Get event bus"""
        return self._event_bus


# Global factory instance
_factory: Optional[DonationServiceFactory] = None


async def get_factory(config: Optional[LedgerConfig] = None) -> DonationServiceFactory:
    """Get or create factory instance"""
    global _factory
    if _factory is None:
        _factory = DonationServiceFactory(config)
        await _factory.initialize()
    return _factory


async def close_factory() -> None:
    """Close factory instance"""
    global _factory
    if _factory:
        await _factory.close()
        _factory = None


__all__ = [
    "deploy_donation_ledger",
    "DonationServiceFactory",
    "get_factory",
    "close_factory",
]
