"""
Store module.

Holds every domain entity (providers, packages, subscriptions, tasks,
chats, messages) plus the session identity, and exposes the writes and
derived queries every screen relies on.

Public API:
- IAppStore: Interface for store operations
- AppStore / get_store: In-memory implementation and its singleton
- AppState: Immutable snapshot of the store
- Entity models: Provider, Package, Subscription, Task, Chat, Message
- Store exceptions: carried in Err results, never raised by writes
"""

from .interfaces import IAppStore
from .models import (
    Attachment,
    Chat,
    ChatFilter,
    Message,
    MessageKind,
    Package,
    Provider,
    ProviderRole,
    RoleFilter,
    Subscription,
    SubscriptionStatus,
    Task,
    TaskStatus,
)
from .state import AppState
from .exceptions import (
    StoreError,
    MissingIdentityError,
    DanglingReferenceError,
    PackageProviderMismatchError,
    InvalidTransitionError,
    RoleChangeError,
    SessionChangedError,
)
from .service import AppStore, get_store, reset_store

__all__ = [
    # Interface
    "IAppStore",
    # Implementation
    "AppStore",
    "get_store",
    "reset_store",
    # Models
    "AppState",
    "Attachment",
    "Chat",
    "ChatFilter",
    "Message",
    "MessageKind",
    "Package",
    "Provider",
    "ProviderRole",
    "RoleFilter",
    "Subscription",
    "SubscriptionStatus",
    "Task",
    "TaskStatus",
    # Exceptions
    "StoreError",
    "MissingIdentityError",
    "DanglingReferenceError",
    "PackageProviderMismatchError",
    "InvalidTransitionError",
    "RoleChangeError",
    "SessionChangedError",
]
