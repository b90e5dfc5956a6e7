"""
Unit tests for ledger configuration
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from core.config import LedgerConfig, LoggingConfig, reload_settings

pytestmark = pytest.mark.unit


class TestLedgerConfig:

    def test_defaults(self):
        config = LedgerConfig()

        assert config.service_name == "donation_service"
        assert config.award_name == "DonationAwardContract"
        assert config.award_symbol == "DWNFT"
        assert config.withdraw_checks_time_goal is True
        assert config.currency == "ETH"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LEDGER_OWNER_ACCOUNT", "0xdeployer")
        monkeypatch.setenv("SERVICE_PORT", "9100")
        monkeypatch.setenv("LEDGER_WITHDRAW_CHECKS_TIME_GOAL", "false")
        monkeypatch.setenv("AWARD_SYMBOL", "TEST")

        config = LedgerConfig.from_env()

        assert config.owner_account == "0xdeployer"
        assert config.service_port == 9100
        assert config.withdraw_checks_time_goal is False
        assert config.award_symbol == "TEST"

    def test_nats_servers(self, monkeypatch):
        monkeypatch.delenv("NATS_URL", raising=False)
        monkeypatch.setenv("NATS_HOST", "nats")
        monkeypatch.setenv("NATS_PORT", "4333")

        assert LedgerConfig.from_env().nats_servers == "nats://nats:4333"

        monkeypatch.setenv("NATS_URL", "nats://broker:4222")
        assert LedgerConfig.from_env().nats_servers == "nats://broker:4222"

    def test_bad_port_falls_back(self, monkeypatch):
        monkeypatch.setenv("SERVICE_PORT", "not-a-port")

        assert LedgerConfig.from_env().service_port == 8260

    def test_reload_settings(self, monkeypatch):
        monkeypatch.setenv("LEDGER_CURRENCY", "DAI")

        assert reload_settings().currency == "DAI"

        monkeypatch.delenv("LEDGER_CURRENCY")
        assert reload_settings().currency == "ETH"


class TestLoggingConfig:

    def test_level_follows_environment(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("ENV", "production")

        assert LoggingConfig.from_env().log_level == "INFO"

    def test_format(self):
        assert LoggingConfig().log_format == "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
