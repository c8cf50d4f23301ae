"""
Logging module for cmdkit commands.
This module provides the root logger setup used by the command driver.
"""

from .setup import setup_logging, MainFormatter

__all__ = ["setup_logging", "MainFormatter"]
