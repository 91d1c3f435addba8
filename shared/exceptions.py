"""
Base exception classes for the FitConnect store.

Module exceptions inherit from these bases. Every error can render itself
as the alert a screen shows the user (title and message) plus a stable
code and details for the caller.
"""

from typing import Optional, Any


class FitConnectError(Exception):
    """
    Base exception for all FitConnect errors.

    Subclasses set ``alert_title`` to change the heading of the alert
    shown for them.
    """

    alert_title = "Error"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_alert(self) -> tuple[str, str]:
        """(title, message) pair for the screen alert."""
        return self.alert_title, self.message

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "title": self.alert_title,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(FitConnectError):
    """Referenced entity not found."""

    alert_title = "Not found"


class ValidationError(FitConnectError):
    """Input validation failed."""

    alert_title = "Invalid input"


class AuthenticationError(FitConnectError):
    """No (or the wrong) session identity for the operation."""

    alert_title = "Login required"


class ConflictError(FitConnectError):
    """Operation conflicts with the current state."""


class GatewayError(FitConnectError):
    """A third-party gateway (payments, uploads) failed."""

    alert_title = "Service unavailable"

    def __init__(
        self,
        message: str,
        gateway: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.gateway = gateway
        self.details["gateway"] = gateway
