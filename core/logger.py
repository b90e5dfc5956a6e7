#!/usr/bin/env python3
"""Service logger setup"""
import logging
import sys
from typing import Optional

from .config.logging_config import LoggingConfig


def setup_service_logger(
    service_name: str,
    level: Optional[str] = None,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure root logging once for a service and return its named logger.

    Args:
        service_name: Logger name, usually the service package name
        level: Log level override (e.g. "INFO"); defaults to the config level
        config: Logging configuration; loaded from the environment when omitted

    Returns:
        Logger for the service
    """
    config = config or LoggingConfig.from_env()
    log_level = getattr(logging, (level or config.log_level).upper(), logging.INFO)

    root = logging.getLogger()
    if not getattr(root, "_donation_configured", False):
        formatter = logging.Formatter(config.log_format)
        if config.enable_console:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(formatter)
            root.addHandler(handler)
        if config.log_file:
            file_handler = logging.FileHandler(config.log_file)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        root._donation_configured = True

    root.setLevel(log_level)
    logger = logging.getLogger(service_name)
    logger.setLevel(log_level)
    return logger
