"""
Immutable snapshot of everything the store holds.

Writes never modify an AppState in place; they derive a new one with
``model_copy(update=...)`` and swap it in as a whole.
"""

from typing import Optional
from pydantic import BaseModel, Field

from shared.models import CurrentUser

from .models import Provider, Package, Subscription, Task, Chat, Message


class AppState(BaseModel):
    """Session identity plus all entity collections."""

    current_user: Optional[CurrentUser] = None
    current_provider_id: Optional[str] = Field(
        None,
        description="Provider whose tasks are unlocked for the current client",
    )

    providers: tuple[Provider, ...] = Field(default_factory=tuple)
    packages: tuple[Package, ...] = Field(default_factory=tuple)
    tasks: tuple[Task, ...] = Field(default_factory=tuple)
    subscriptions: tuple[Subscription, ...] = Field(default_factory=tuple)
    chats: tuple[Chat, ...] = Field(default_factory=tuple)
    messages: tuple[Message, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    def find_provider(self, provider_id: str) -> Optional[Provider]:
        return next((p for p in self.providers if p.id == provider_id), None)

    def find_package(self, package_id: str) -> Optional[Package]:
        return next((p for p in self.packages if p.id == package_id), None)

    def find_subscription(self, subscription_id: str) -> Optional[Subscription]:
        return next((s for s in self.subscriptions if s.id == subscription_id), None)

    def find_task(self, task_id: str) -> Optional[Task]:
        return next((t for t in self.tasks if t.id == task_id), None)

    def find_chat(self, chat_id: str) -> Optional[Chat]:
        return next((c for c in self.chats if c.id == chat_id), None)

    def find_chat_for_pair(self, client_id: str, provider_id: str) -> Optional[Chat]:
        """First chat between the client and the provider, if any."""
        return next(
            (
                c for c in self.chats
                if c.client_id == client_id and c.provider_id == provider_id
            ),
            None,
        )
