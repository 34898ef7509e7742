"""
Core utilities and configuration for the vendor policy loader.

This package provides the settings model and logging configuration shared by
the policy subpackage.
"""

from vendor_policy.core.config import PolicyReference, Settings, settings
from vendor_policy.core.logging_config import get_logger, setup_logging

__all__ = ["PolicyReference", "Settings", "get_logger", "settings", "setup_logging"]
