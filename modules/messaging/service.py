"""
Messaging service.

The chat-screen collaborator: resolves or creates the chat for a
client/provider pair before anything is sent, checks attachment shape,
and sends text and attachments as store messages.
"""

import logging
from typing import Iterable, Optional

from shared.config import Settings, get_settings
from modules.store.interfaces import IAppStore
from modules.store.models import Attachment, Chat, Message

from .exceptions import (
    LoginRequiredError,
    EmptyMessageError,
    AttachmentTooLargeError,
)

logger = logging.getLogger(__name__)


class MessagingService:
    """Opens chats and sends messages through the store."""

    def __init__(self, store: IAppStore, settings: Optional[Settings] = None):
        self._store = store
        self._settings = settings or get_settings()

    def open_chat(self, provider_id: str, client_id: Optional[str] = None) -> Chat:
        """
        Get the chat between a client and a provider, creating it if needed.

        Args:
            provider_id: Provider to talk to
            client_id: Client side of the chat; defaults to the session user

        Raises:
            LoginRequiredError: If no client is given and nobody is logged in
            DanglingReferenceError: If the provider does not exist
        """
        if client_id is None:
            user = self._store.state.current_user
            if user is None:
                raise LoginRequiredError()
            client_id = user.id
        return self._store.start_chat(client_id, provider_id).unwrap()

    def sender_id(self) -> str:
        """Session user, or the demo client when nobody is logged in."""
        user = self._store.state.current_user
        return user.id if user else self._settings.demo_client_id

    def check_attachments(self, attachments: Iterable[Attachment]) -> None:
        limit = self._settings.max_attachment_size_bytes
        for attachment in attachments:
            if attachment.size is not None and attachment.size > limit:
                raise AttachmentTooLargeError(attachment.name, attachment.size, limit)

    def send(
        self,
        chat_id: str,
        text: str = "",
        attachments: Iterable[Attachment] = (),
    ) -> tuple[Message, ...]:
        """
        Send text and attachments to a chat.

        Text goes out as one message, then each attachment as its own
        message, so the chat shows every picked image.

        Returns:
            Created messages in sending order

        Raises:
            EmptyMessageError: If there is nothing to send
            AttachmentTooLargeError: If an attachment exceeds the size limit
            DanglingReferenceError: If the chat does not exist
        """
        text = text.strip()
        attachments = tuple(attachments)
        if not text and not attachments:
            raise EmptyMessageError()
        self.check_attachments(attachments)

        sender = self.sender_id()
        sent = []
        if text:
            sent.append(self._store.add_message(chat_id, sender, text).unwrap())
        for attachment in attachments:
            sent.append(
                self._store.add_message(chat_id, sender, "", attachment).unwrap()
            )

        logger.debug(f"Sent {len(sent)} message(s) to {chat_id}")
        return tuple(sent)
