"""
Core utilities and configuration for Teşvik Portal.

This package provides core functionality including logging configuration,
domain errors, database setup, and other shared utilities.
"""

from tesvik_portal.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
