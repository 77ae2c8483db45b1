"""Logging setup."""

from proptree.observability.logger import configure, get_logger, setup_logging

__all__ = ["configure", "get_logger", "setup_logging"]
