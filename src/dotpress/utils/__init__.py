"""Shared utilities for dotpress."""

from dotpress.utils.logger import get_logger

__all__ = ["get_logger"]
