#!/usr/bin/env python3
"""Configuration for the donation ledger

Configuration hierarchy:
- ledger_config: ledger service identity, deployment accounts, award collection
- logging_config: logging configuration
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .ledger_config import LedgerConfig

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)

# Create global settings instance
settings = LedgerConfig.from_env()

def get_settings() -> LedgerConfig:
    """Get global settings instance"""
    return settings

def reload_settings() -> LedgerConfig:
    """Reload settings from environment"""
    global settings
    settings = LedgerConfig.from_env()
    return settings

__all__ = [
    'LedgerConfig',
    'LoggingConfig',
    'get_settings',
    'reload_settings',
    'settings',
]
