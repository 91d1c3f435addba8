"""
Store module interface.

Screens and collaborators should depend on IAppStore, not the concrete
implementation. This keeps them testable with fakes.
"""

from datetime import datetime
from typing import Callable, Optional, Protocol, runtime_checkable

from shared.models import CurrentUser
from shared.result import Result

from .models import (
    Attachment,
    Chat,
    ChatFilter,
    Message,
    Package,
    Provider,
    RoleFilter,
    Subscription,
    Task,
    TaskStatus,
)
from .state import AppState


Listener = Callable[[AppState, AppState], None]
Selector = Callable[[AppState], object]


@runtime_checkable
class IAppStore(Protocol):
    """
    Interface for the application state store.

    Writes return a Result and either fully apply or leave the state
    untouched. Reads work on the latest committed snapshot.
    """

    @property
    def state(self) -> AppState:
        """The latest committed snapshot."""
        ...

    def today(self) -> str:
        """Current calendar day key (YYYY-MM-DD) from the store clock."""
        ...

    def watch(
        self,
        listener: Listener,
        selector: Optional[Selector] = None,
    ) -> Callable[[], None]:
        """
        Register a change listener.

        Args:
            listener: Called with (new_state, old_state) after each write
            selector: Optional slice; the listener only runs when the
                selected value changes

        Returns:
            Callable that unregisters the listener
        """
        ...

    def set_current_user(self, user: Optional[CurrentUser]) -> Result:
        """Replace the session identity; None logs out."""
        ...

    def set_current_provider_id(self, provider_id: Optional[str]) -> Result:
        """Mark whose tasks are unlocked for the current client."""
        ...

    def subscribe(
        self,
        provider_id: str,
        package_id: str,
        client_id: Optional[str] = None,
    ) -> Result:
        """
        Record a purchase of a package by the current user.

        Args:
            client_id: When given, the purchase only goes through if this
                is still the current user.

        Returns:
            Ok(Subscription) with status active, or Err with
            MissingIdentityError, SessionChangedError,
            DanglingReferenceError or PackageProviderMismatchError
        """
        ...

    def add_message(
        self,
        chat_id: str,
        sender_id: str,
        text: str,
        attachment: Optional[Attachment] = None,
    ) -> Result:
        """
        Append a message and refresh the chat's last-message cache.

        Returns:
            Ok(Message), or Err(DanglingReferenceError) for an unknown chat
        """
        ...

    def start_chat(self, client_id: str, provider_id: str) -> Result:
        """Return the chat for the pair, creating it when missing."""
        ...

    def cancel_subscription(self, subscription_id: str) -> Result:
        ...

    def expire_subscription(self, subscription_id: str) -> Result:
        ...

    def expire_due_subscriptions(self, now: Optional[datetime] = None) -> Result:
        """Expire every active subscription whose package duration ran out."""
        ...

    def add_task(
        self,
        provider_id: str,
        title: str,
        date: str,
        description: Optional[str] = None,
    ) -> Result:
        ...

    def set_task_status(self, task_id: str, status: TaskStatus) -> Result:
        ...

    def chats_for_client(
        self,
        chat_filter: ChatFilter = ChatFilter.ALL,
        search: str = "",
        client_id: Optional[str] = None,
    ) -> tuple[Chat, ...]:
        ...

    def filter_providers(
        self,
        role: RoleFilter = RoleFilter.ALL,
        search: str = "",
    ) -> tuple[Provider, ...]:
        ...

    def todays_tasks(self) -> tuple[Task, ...]:
        ...

    def tasks_for_date(self, date: str) -> tuple[Task, ...]:
        ...

    def messages_for_chat(self, chat_id: str) -> tuple[Message, ...]:
        ...

    def packages_for_provider(self, provider_id: str) -> tuple[Package, ...]:
        ...

    def visible_subscriptions(
        self,
        user: Optional[CurrentUser] = None,
    ) -> tuple[Subscription, ...]:
        ...
