"""
Binding Core - Shared Infrastructure.

Provides:
- Signal: Synchronous observer primitive used for change notification
- BinderSettings / ConfigManager: Pydantic-backed configuration
- setup_logging: Loguru sink configuration
- BindingError and its subclasses
"""
from .events import Signal
from .config import BinderSettings, ConfigManager
from .logging import setup_logging
from .errors import (
    BindingError,
    BindingResolutionError,
    ConversionError,
    ConfigurationError,
    TeardownError,
)

__all__ = [
    # Events
    "Signal",

    # Configuration
    "BinderSettings",
    "ConfigManager",

    # Logging
    "setup_logging",

    # Errors
    "BindingError",
    "BindingResolutionError",
    "ConversionError",
    "ConfigurationError",
    "TeardownError",
]
