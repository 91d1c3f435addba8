"""Tests for the messaging service."""

import pytest

from shared.config import Settings
from modules.messaging.service import MessagingService
from modules.store.service import AppStore
from modules.messaging.exceptions import (
    LoginRequiredError,
    EmptyMessageError,
    AttachmentTooLargeError,
)
from modules.store.models import Attachment, MessageKind
from modules.store.exceptions import DanglingReferenceError


@pytest.fixture
def service(store, settings):
    return MessagingService(store, settings)


def make_image(attachment_id: str = "a1", size: int = 1024) -> Attachment:
    """Helper to create an image attachment."""
    return Attachment(
        id=attachment_id,
        name=f"{attachment_id}.jpg",
        uri=f"file:///{attachment_id}.jpg",
        size=size,
        kind=MessageKind.IMAGE,
    )


class TestOpenChat:
    def test_reuses_existing_chat(self, service, store, demo_client):
        """The session user's existing chat is returned."""
        store.set_current_user(demo_client)
        assert service.open_chat("p2").id == "chat2"

    def test_creates_chat_on_demand(self, service, store, client_user):
        """A first contact creates the chat before sending."""
        store.set_current_user(client_user)
        chat = service.open_chat("p1")
        assert chat.client_id == "c1"
        assert service.open_chat("p1") == chat

    def test_explicit_client(self, service):
        """A client id can be given without a session."""
        chat = service.open_chat("p3", client_id="c7")
        assert chat.client_id == "c7"

    def test_requires_client(self, service):
        """Without a session or client id there is no chat."""
        with pytest.raises(LoginRequiredError):
            service.open_chat("p1")

    def test_unknown_provider(self, service):
        """The store's rejection is raised."""
        with pytest.raises(DanglingReferenceError):
            service.open_chat("p404", client_id="c1")

    def test_configured_demo_client_owns_seed_chats(self, clock):
        """Without a session, the fallback sender is the owner of the seed chats."""
        settings = Settings(demo_client_id="guest")
        store = AppStore(clock=clock, settings=settings)
        service = MessagingService(store, settings)

        assert service.sender_id() == "guest"
        assert service.open_chat("p1", client_id=service.sender_id()).id == "chat1"


class TestSend:
    def test_send_text(self, service, store, demo_client):
        """Text is trimmed and sent as one message."""
        store.set_current_user(demo_client)
        (message,) = service.send("chat1", "  Sounds good  ")
        assert message.text == "Sounds good"
        assert message.sender_id == "demo_client"
        assert store.state.find_chat("chat1").last_message == "Sounds good"

    def test_send_without_session_uses_demo_client(self, service):
        """Anonymous sends come from the demo client."""
        (message,) = service.send("chat1", "hi")
        assert message.sender_id == "demo_client"

    def test_send_text_and_images(self, service, store):
        """Text first, then one message per attachment."""
        messages = service.send("chat2", "Lunch", [make_image("a1"), make_image("a2")])

        assert [m.kind for m in messages] == [MessageKind.TEXT, MessageKind.IMAGE, MessageKind.IMAGE]
        assert [m.attachment.id for m in messages[1:]] == ["a1", "a2"]
        assert store.messages_for_chat("chat2")[-3:] == messages

    def test_send_only_attachment(self, service):
        """Attachments alone are enough."""
        messages = service.send("chat2", "   ", [make_image()])
        assert len(messages) == 1
        assert messages[0].text == ""

    def test_empty_message(self, service, store):
        """Nothing to send is an error and writes nothing."""
        before = store.state
        with pytest.raises(EmptyMessageError):
            service.send("chat1", "   ")
        assert store.state is before

    def test_attachment_too_large(self, service, store, settings):
        """Oversized attachments reject the whole send."""
        before = store.state
        too_big = make_image("big", size=settings.max_attachment_size_bytes + 1)
        with pytest.raises(AttachmentTooLargeError) as exc_info:
            service.send("chat1", "look", [make_image("ok"), too_big])
        assert exc_info.value.details["name"] == "big.jpg"
        assert store.state is before

    def test_size_limit_from_settings(self, store):
        """The limit is configurable."""
        service = MessagingService(store, Settings(max_attachment_size_bytes=10))
        with pytest.raises(AttachmentTooLargeError):
            service.send("chat1", attachments=[make_image(size=11)])

    def test_unknown_size_is_accepted(self, service):
        """Attachments without a known size pass the check."""
        attachment = Attachment(id="a9", name="doc.pdf")
        (message,) = service.send("chat1", attachments=[attachment])
        assert message.kind == MessageKind.FILE

    def test_unknown_chat(self, service, store):
        """Sending to a missing chat raises and writes nothing."""
        before = store.state
        with pytest.raises(DanglingReferenceError):
            service.send("does_not_exist", "hi")
        assert store.state is before
