"""
Logging setup - one root configuration, namespaced loggers per module.

Text output for local runs, JSON (python-json-logger) for deployments:
    LOG_FORMAT=json uvicorn placement_hub.main:app
"""

import logging
import sys

from pythonjsonlogger import jsonlogger

from placement_hub.core.config import get_settings

ROOT_LOGGER_NAME = "placement_hub"
TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_configured = False


def setup_logging(level: str = None, fmt: str = None) -> logging.Logger:
    """Configure the package logger once. Safe to call repeatedly."""
    global _configured
    settings = get_settings()
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _configured:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    if (fmt or settings.log_format) == "json":
        handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel((level or settings.log_level).upper())
    logger.propagate = False
    _configured = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child of the package logger, e.g. get_logger("content")."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
