"""Logging helpers shared by the service and CLI."""

from .logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
