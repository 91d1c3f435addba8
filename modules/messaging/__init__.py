"""
Messaging module.

Opens client/provider chats and sends text and attachments through the
store.

Public API:
- MessagingService: Chat resolution and sending
- Messaging exceptions: EmptyMessageError, AttachmentTooLargeError, etc.
"""

from .exceptions import (
    MessagingError,
    LoginRequiredError,
    EmptyMessageError,
    AttachmentTooLargeError,
)
from .service import MessagingService

__all__ = [
    "MessagingService",
    "MessagingError",
    "LoginRequiredError",
    "EmptyMessageError",
    "AttachmentTooLargeError",
]
