"""
Shared infrastructure for the FitConnect store.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- exceptions: Base exception classes
- result: Ok/Err values returned by store writes
- models: The session user

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings, configure_logging
from .exceptions import (
    FitConnectError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    ConflictError,
    GatewayError,
)
from .models import CurrentUser, UserRole
from .result import Ok, Err, Result

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "FitConnectError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "ConflictError",
    "GatewayError",
    "CurrentUser",
    "UserRole",
    "Ok",
    "Err",
    "Result",
]
