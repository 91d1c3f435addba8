"""
Messaging module exceptions.
"""

from shared.exceptions import FitConnectError, ValidationError, AuthenticationError


class MessagingError(FitConnectError):
    """Base exception for messaging errors."""

    pass


class LoginRequiredError(MessagingError, AuthenticationError):
    """Raised when a chat is opened without knowing the client."""

    def __init__(self, message: str = "Please log in to start a chat."):
        super().__init__(message, code="LOGIN_REQUIRED")


class EmptyMessageError(MessagingError, ValidationError):
    """Raised when there is neither text nor an attachment to send."""

    def __init__(self):
        super().__init__("Nothing to send", code="EMPTY_MESSAGE")


class AttachmentTooLargeError(MessagingError, ValidationError):
    """Raised when an attachment exceeds the size limit."""

    def __init__(self, name: str, size: int, limit: int):
        super().__init__(
            f"{name} is too large. Each file must be {limit // (1024 * 1024)} MB or less.",
            code="ATTACHMENT_TOO_LARGE",
            details={"name": name, "size": size, "limit": limit},
        )
