"""Utility modules for the wall-space geometry engine."""

from wallspace.utils.logging_utils import setup_logging

__all__ = ["setup_logging"]
