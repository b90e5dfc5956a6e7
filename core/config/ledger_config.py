#!/usr/bin/env python3
"""Donation ledger configuration

Settings shared by the donation ledger and the award registry:
- service identity and HTTP binding
- deployer (owner) account used when the ledger is bootstrapped
- award token collection metadata
- ledger behaviour switches
"""
import os
from dataclasses import dataclass, field
from typing import Optional

from .logging_config import LoggingConfig

def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class LedgerConfig:
    """Donation ledger settings"""

    # ===========================================
    # Service identity
    # ===========================================
    service_name: str = "donation_service"
    service_host: str = "0.0.0.0"
    service_port: int = 8260
    environment: str = "development"
    debug: bool = False

    # ===========================================
    # Deployment
    # ===========================================
    owner_account: str = "0x0000000000000000000000000000000000000001"
    ledger_address: str = "donation-ledger"
    award_registry_address: str = "donation-award-registry"

    # ===========================================
    # Award collection
    # ===========================================
    award_name: str = "DonationAwardContract"
    award_symbol: str = "DWNFT"

    # ===========================================
    # Ledger behaviour
    # ===========================================
    currency: str = "ETH"
    withdraw_checks_time_goal: bool = True

    # ===========================================
    # NATS (native - port 4222)
    # ===========================================
    nats_enabled: bool = True
    nats_host: str = "localhost"
    nats_port: int = 4222
    nats_url: Optional[str] = None

    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> 'LedgerConfig':
        """Load ledger configuration from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            service_name=os.getenv("SERVICE_NAME", "donation_service"),
            service_host=os.getenv("SERVICE_HOST", "0.0.0.0"),
            service_port=_int(os.getenv("SERVICE_PORT", "8260"), 8260),
            environment=env,
            debug=_bool(os.getenv("DEBUG", "false")),

            owner_account=os.getenv("LEDGER_OWNER_ACCOUNT", "0x0000000000000000000000000000000000000001"),
            ledger_address=os.getenv("LEDGER_ADDRESS", "donation-ledger"),
            award_registry_address=os.getenv("AWARD_REGISTRY_ADDRESS", "donation-award-registry"),

            award_name=os.getenv("AWARD_NAME", "DonationAwardContract"),
            award_symbol=os.getenv("AWARD_SYMBOL", "DWNFT"),

            currency=os.getenv("LEDGER_CURRENCY", "ETH"),
            withdraw_checks_time_goal=_bool(os.getenv("LEDGER_WITHDRAW_CHECKS_TIME_GOAL", "true")),

            nats_enabled=_bool(os.getenv("NATS_ENABLED", "true")),
            nats_host=os.getenv("NATS_HOST", "localhost"),
            nats_port=_int(os.getenv("NATS_PORT", "4222"), 4222),
            nats_url=os.getenv("NATS_URL"),

            logging=LoggingConfig.from_env(),
        )

    @property
    def nats_servers(self) -> str:
        """NATS server URL; NATS_URL wins over host and port"""
        return self.nats_url or f"nats://{self.nats_host}:{self.nats_port}"
