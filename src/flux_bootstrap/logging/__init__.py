"""Logging configuration for flux_bootstrap."""

from flux_bootstrap.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
