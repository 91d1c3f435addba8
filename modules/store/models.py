"""
Store module data models.

These models define the domain entities held by the store. All of them
are immutable: the store replaces entities instead of mutating them, and
consumers only ever see snapshots.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class ProviderRole(str, Enum):
    """Kinds of provider offering packages."""

    COACH = "coach"
    NUTRITIONIST = "nutritionist"


class SubscriptionStatus(str, Enum):
    """Subscription lifecycle status."""

    ACTIVE = "active"        # Created by a confirmed purchase
    EXPIRED = "expired"      # Package duration ran out (terminal)
    CANCELLED = "cancelled"  # Ended by the user (terminal)


class TaskStatus(str, Enum):
    """Task completion status."""

    PENDING = "pending"
    COMPLETED = "completed"


class MessageKind(str, Enum):
    """What a chat message carries."""

    TEXT = "text"
    IMAGE = "image"
    FILE = "file"


class ChatFilter(str, Enum):
    """Chat list partitions by subscription state."""

    ALL = "all"
    SUBSCRIBED = "subscribed"
    NOT_SUBSCRIBED = "not_subscribed"


class RoleFilter(str, Enum):
    """Provider directory role filter."""

    ALL = "all"
    COACH = "coach"
    NUTRITIONIST = "nutritionist"


class Provider(BaseModel):
    """A coach or nutritionist listed in the directory."""

    id: str = Field(..., description="Provider ID")
    full_name: str = Field(..., description="Display name")
    role: ProviderRole = Field(..., description="Provider role")
    title: str = Field(..., description="Professional title")
    years_of_experience: int = Field(..., ge=0)
    languages: tuple[str, ...] = Field(default_factory=tuple)
    specialties: tuple[str, ...] = Field(default_factory=tuple)
    price_per_month: Decimal = Field(..., ge=0, description="Monthly price")
    currency: str = Field(..., description="ISO currency code, e.g. EGP")

    model_config = {"frozen": True}


class Package(BaseModel):
    """A purchasable offering owned by one provider."""

    id: str = Field(..., description="Package ID")
    provider_id: str = Field(..., description="Owning provider ID")
    title: str
    description: str
    price: Decimal = Field(..., ge=0, description="Package price")
    currency: str
    duration_in_days: int = Field(..., ge=1)

    model_config = {"frozen": True}


class Subscription(BaseModel):
    """
    A client's purchase of a package from a provider.

    ``provider_id`` always equals the package's provider. Only ``active``
    subscriptions can change status.
    """

    id: str = Field(..., description="Subscription ID")
    client_id: str = Field(..., description="Subscribing client ID")
    provider_id: str = Field(..., description="Provider ID")
    package_id: str = Field(..., description="Purchased package ID")
    status: SubscriptionStatus = Field(default=SubscriptionStatus.ACTIVE)
    started_at: datetime = Field(..., description="When the subscription started")
    ends_at: datetime = Field(..., description="When the package duration runs out")
    ended_at: Optional[datetime] = Field(
        None,
        description="When the subscription left the active state",
    )

    model_config = {"frozen": True}

    @property
    def is_active(self) -> bool:
        return self.status == SubscriptionStatus.ACTIVE


class Task(BaseModel):
    """A dated assignment from a provider to its subscribed clients."""

    id: str = Field(..., description="Task ID")
    provider_id: str = Field(..., description="Assigning provider ID")
    title: str
    description: Optional[str] = None
    date: str = Field(..., description="Calendar day key (YYYY-MM-DD)")
    status: TaskStatus = Field(default=TaskStatus.PENDING)

    model_config = {"frozen": True}


class Chat(BaseModel):
    """
    A conversation between one client and one provider.

    ``last_message`` and ``last_message_at`` cache the newest message.
    """

    id: str = Field(..., description="Chat ID")
    client_id: str
    provider_id: str
    last_message: str = ""
    last_message_at: datetime

    model_config = {"frozen": True}


class Attachment(BaseModel):
    """A picked image or file, as resolved by the attachment picker."""

    id: str
    name: str
    uri: Optional[str] = None
    size: Optional[int] = Field(None, ge=0, description="Size in bytes")
    kind: MessageKind = Field(default=MessageKind.FILE)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_kind(self) -> "Attachment":
        """Attachments are images or files, never text."""
        if self.kind == MessageKind.TEXT:
            raise ValueError("Attachment kind must be image or file")
        return self


class Message(BaseModel):
    """A single chat message, optionally carrying one attachment."""

    id: str = Field(..., description="Message ID")
    chat_id: str
    sender_id: str
    text: str = ""
    created_at: datetime
    kind: MessageKind = Field(default=MessageKind.TEXT)
    attachment: Optional[Attachment] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_kind(self) -> "Message":
        """Kind is text without an attachment, else the attachment's kind."""
        expected = self.attachment.kind if self.attachment else MessageKind.TEXT
        if self.kind != expected:
            raise ValueError(
                f"Message kind {self.kind.value} does not match "
                f"{'attachment' if self.attachment else 'text'} content"
            )
        return self
