"""
Application state store implementation.

AppStore owns every domain entity and is the only place allowed to change
them. Each write builds a new immutable AppState and commits it in a single
assignment, then notifies listeners. Failed writes commit nothing and
return an Err.
"""

import logging
import threading
import uuid
from collections import deque
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from shared.config import Settings, get_settings
from shared.models import CurrentUser
from shared.result import Ok, Err, Result

from . import queries
from .interfaces import IAppStore, Listener, Selector
from .models import (
    Attachment,
    Chat,
    ChatFilter,
    Message,
    MessageKind,
    Package,
    Provider,
    RoleFilter,
    Subscription,
    SubscriptionStatus,
    Task,
    TaskStatus,
)
from .exceptions import (
    StoreError,
    MissingIdentityError,
    DanglingReferenceError,
    PackageProviderMismatchError,
    InvalidTransitionError,
    RoleChangeError,
    SessionChangedError,
)
from .seed import build_seed_state, build_empty_state
from .state import AppState

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id(prefix: str) -> str:
    """Opaque, never-reused identifier."""
    return f"{prefix}_{uuid.uuid4().hex}"


class _Watcher:
    def __init__(self, listener: Listener, selector: Optional[Selector]):
        self.listener = listener
        self.selector = selector

    def wants(self, new: AppState, old: AppState) -> bool:
        if self.selector is None:
            return True
        return self.selector(new) != self.selector(old)


class AppStore(IAppStore):
    """
    In-memory domain store.

    Writes are serialized by a re-entrant lock, so a listener may dispatch
    a follow-up write. Reads return the committed snapshot without locking.
    """

    def __init__(
        self,
        state: Optional[AppState] = None,
        clock: Optional[Clock] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the store.

        Args:
            state: Initial snapshot. Defaults to the demo seed, or to an
                empty state when seeding is disabled in settings.
            clock: Returns the current aware datetime. Defaults to UTC now.
            settings: Optional settings; defaults to get_settings().
        """
        self._settings = settings or get_settings()
        self._clock = clock or utc_now
        if state is None:
            if self._settings.seed_demo_data:
                state = build_seed_state(
                    self._clock(), self._settings.demo_client_id
                )
            else:
                state = build_empty_state()
        self._state = state
        self._lock = threading.RLock()
        self._watchers: list[_Watcher] = []
        self._pending: deque[tuple[AppState, AppState]] = deque()
        self._notifying = False

    # ------------------------------------------------------------------
    # Snapshot and notification
    # ------------------------------------------------------------------

    @property
    def state(self) -> AppState:
        return self._state

    def today(self) -> str:
        return self._clock().date().isoformat()

    def watch(
        self,
        listener: Listener,
        selector: Optional[Selector] = None,
    ) -> Callable[[], None]:
        watcher = _Watcher(listener, selector)
        with self._lock:
            self._watchers.append(watcher)

        def unwatch() -> None:
            with self._lock:
                if watcher in self._watchers:
                    self._watchers.remove(watcher)

        return unwatch

    def _commit(self, new_state: AppState) -> None:
        """
        Swap in a new snapshot and notify listeners. Caller holds the lock.

        A write made by a listener is queued behind the notification in
        progress, so every listener sees commits in the order they happened
        and its last call carries the latest state.
        """
        old_state = self._state
        self._state = new_state
        self._pending.append((new_state, old_state))
        if self._notifying:
            return

        self._notifying = True
        try:
            while self._pending:
                new, old = self._pending.popleft()
                for watcher in list(self._watchers):
                    try:
                        if watcher.wants(new, old):
                            watcher.listener(new, old)
                    except Exception:
                        logger.exception("Store listener failed")
        finally:
            self._pending.clear()
            self._notifying = False

    def _reject(self, operation: str, error: StoreError) -> Err:
        logger.info(f"{operation} rejected: {error.message}")
        return Err(error)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def set_current_user(self, user: Optional[CurrentUser]) -> Result:
        with self._lock:
            current = self._state.current_user
            if (
                user is not None
                and current is not None
                and current.id == user.id
                and current.role != user.role
            ):
                return self._reject(
                    "set_current_user",
                    RoleChangeError(user.id, current.role.value, user.role.value),
                )

            if user is None:
                # Logging out also locks the previously unlocked provider
                self._commit(self._state.model_copy(
                    update={"current_user": None, "current_provider_id": None}
                ))
                logger.debug("Session cleared")
            else:
                self._commit(self._state.model_copy(update={"current_user": user}))
                logger.debug(f"Session user set: {user.id} ({user.role.value})")
            return Ok(user)

    def set_current_provider_id(self, provider_id: Optional[str]) -> Result:
        with self._lock:
            self._commit(self._state.model_copy(
                update={"current_provider_id": provider_id}
            ))
            return Ok(provider_id)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(
        self,
        provider_id: str,
        package_id: str,
        client_id: Optional[str] = None,
    ) -> Result:
        with self._lock:
            state = self._state
            user = state.current_user
            if user is None:
                return self._reject("subscribe", MissingIdentityError("subscribe"))
            if client_id is not None and user.id != client_id:
                return self._reject(
                    "subscribe", SessionChangedError(client_id, user.id)
                )
            if state.find_provider(provider_id) is None:
                return self._reject(
                    "subscribe", DanglingReferenceError("Provider", provider_id)
                )
            package = state.find_package(package_id)
            if package is None:
                return self._reject(
                    "subscribe", DanglingReferenceError("Package", package_id)
                )
            if package.provider_id != provider_id:
                return self._reject(
                    "subscribe",
                    PackageProviderMismatchError(
                        package_id, provider_id, package.provider_id
                    ),
                )

            now = self._clock()
            subscription = Subscription(
                id=new_id("sub"),
                client_id=user.id,
                provider_id=provider_id,
                package_id=package_id,
                status=SubscriptionStatus.ACTIVE,
                started_at=now,
                ends_at=now + timedelta(days=package.duration_in_days),
            )
            self._commit(state.model_copy(update={
                "subscriptions": state.subscriptions + (subscription,),
                "current_provider_id": provider_id,
            }))
            logger.info(
                f"Subscription {subscription.id} created: "
                f"{user.id} -> {provider_id} ({package_id})"
            )
            return Ok(subscription)

    def _end_subscription(
        self,
        subscription_id: str,
        target: SubscriptionStatus,
        operation: str,
    ) -> Result:
        with self._lock:
            state = self._state
            subscription = state.find_subscription(subscription_id)
            if subscription is None:
                return self._reject(
                    operation, DanglingReferenceError("Subscription", subscription_id)
                )
            if not subscription.is_active:
                return self._reject(
                    operation,
                    InvalidTransitionError(
                        subscription_id, subscription.status.value, target.value
                    ),
                )

            ended = subscription.model_copy(
                update={"status": target, "ended_at": self._clock()}
            )
            self._commit(state.model_copy(update={
                "subscriptions": tuple(
                    ended if s.id == subscription_id else s
                    for s in state.subscriptions
                ),
            }))
            logger.info(f"Subscription {subscription_id} is now {target.value}")
            return Ok(ended)

    def cancel_subscription(self, subscription_id: str) -> Result:
        return self._end_subscription(
            subscription_id, SubscriptionStatus.CANCELLED, "cancel_subscription"
        )

    def expire_subscription(self, subscription_id: str) -> Result:
        return self._end_subscription(
            subscription_id, SubscriptionStatus.EXPIRED, "expire_subscription"
        )

    def expire_due_subscriptions(self, now: Optional[datetime] = None) -> Result:
        with self._lock:
            now = now or self._clock()
            state = self._state
            due = {
                s.id for s in state.subscriptions
                if s.is_active and s.ends_at <= now
            }
            if not due:
                return Ok(())

            expired = []
            subscriptions = []
            for s in state.subscriptions:
                if s.id in due:
                    s = s.model_copy(
                        update={"status": SubscriptionStatus.EXPIRED, "ended_at": now}
                    )
                    expired.append(s)
                subscriptions.append(s)

            self._commit(state.model_copy(update={"subscriptions": tuple(subscriptions)}))
            logger.info(f"Expired {len(expired)} subscription(s)")
            return Ok(tuple(expired))

    # ------------------------------------------------------------------
    # Chats and messages
    # ------------------------------------------------------------------

    def start_chat(self, client_id: str, provider_id: str) -> Result:
        with self._lock:
            state = self._state
            if state.find_provider(provider_id) is None:
                return self._reject(
                    "start_chat", DanglingReferenceError("Provider", provider_id)
                )
            existing = state.find_chat_for_pair(client_id, provider_id)
            if existing is not None:
                return Ok(existing)

            chat = Chat(
                id=new_id("chat"),
                client_id=client_id,
                provider_id=provider_id,
                last_message="",
                last_message_at=self._clock(),
            )
            self._commit(state.model_copy(update={"chats": state.chats + (chat,)}))
            logger.info(f"Chat {chat.id} started: {client_id} <-> {provider_id}")
            return Ok(chat)

    def add_message(
        self,
        chat_id: str,
        sender_id: str,
        text: str,
        attachment: Optional[Attachment] = None,
    ) -> Result:
        with self._lock:
            state = self._state
            chat = state.find_chat(chat_id)
            if chat is None:
                return self._reject(
                    "add_message", DanglingReferenceError("Chat", chat_id)
                )

            created_at = self._next_message_time(state, chat_id)
            message = Message(
                id=new_id("msg"),
                chat_id=chat_id,
                sender_id=sender_id,
                text=text,
                created_at=created_at,
                kind=attachment.kind if attachment else MessageKind.TEXT,
                attachment=attachment,
            )
            updated_chat = chat.model_copy(update={
                "last_message": message.text,
                "last_message_at": message.created_at,
            })
            # Message and chat cache land in the same snapshot
            self._commit(state.model_copy(update={
                "messages": state.messages + (message,),
                "chats": tuple(
                    updated_chat if c.id == chat_id else c for c in state.chats
                ),
            }))
            logger.debug(f"Message {message.id} added to {chat_id}")
            return Ok(message)

    def _next_message_time(self, state: AppState, chat_id: str) -> datetime:
        """Clock time, bumped past the chat's newest message if needed."""
        now = self._clock()
        latest = max(
            (m.created_at for m in state.messages if m.chat_id == chat_id),
            default=None,
        )
        if latest is not None and now <= latest:
            return latest + timedelta(microseconds=1)
        return now

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def add_task(
        self,
        provider_id: str,
        title: str,
        date: str,
        description: Optional[str] = None,
    ) -> Result:
        with self._lock:
            state = self._state
            if state.find_provider(provider_id) is None:
                return self._reject(
                    "add_task", DanglingReferenceError("Provider", provider_id)
                )
            task = Task(
                id=new_id("task"),
                provider_id=provider_id,
                title=title,
                description=description,
                date=date,
                status=TaskStatus.PENDING,
            )
            self._commit(state.model_copy(update={"tasks": state.tasks + (task,)}))
            logger.debug(f"Task {task.id} assigned by {provider_id} for {date}")
            return Ok(task)

    def set_task_status(self, task_id: str, status: TaskStatus) -> Result:
        with self._lock:
            state = self._state
            task = state.find_task(task_id)
            if task is None:
                return self._reject(
                    "set_task_status", DanglingReferenceError("Task", task_id)
                )
            updated = task.model_copy(update={"status": TaskStatus(status)})
            self._commit(state.model_copy(update={
                "tasks": tuple(updated if t.id == task_id else t for t in state.tasks),
            }))
            return Ok(updated)

    # ------------------------------------------------------------------
    # Derived queries over the current snapshot
    # ------------------------------------------------------------------

    def chats_for_client(
        self,
        chat_filter: ChatFilter = ChatFilter.ALL,
        search: str = "",
        client_id: Optional[str] = None,
    ) -> tuple[Chat, ...]:
        state = self._state
        if client_id is None:
            if state.current_user is None:
                return ()
            client_id = state.current_user.id
        return queries.chats_for_client(state, client_id, ChatFilter(chat_filter), search)

    def filter_providers(
        self,
        role: RoleFilter = RoleFilter.ALL,
        search: str = "",
    ) -> tuple[Provider, ...]:
        return queries.filter_providers(self._state, role, search)

    def todays_tasks(self) -> tuple[Task, ...]:
        return queries.todays_tasks(self._state, self.today())

    def tasks_for_date(self, date: str) -> tuple[Task, ...]:
        return queries.tasks_for_date(self._state, date)

    def messages_for_chat(self, chat_id: str) -> tuple[Message, ...]:
        return queries.messages_for_chat(self._state, chat_id)

    def packages_for_provider(self, provider_id: str) -> tuple[Package, ...]:
        return queries.packages_for_provider(self._state, provider_id)

    def visible_subscriptions(
        self,
        user: Optional[CurrentUser] = None,
    ) -> tuple[Subscription, ...]:
        state = self._state
        return queries.subscriptions_for_user(state, user or state.current_user)


# Module-level instance getter
_store_instance: Optional[AppStore] = None


def get_store() -> AppStore:
    """Get the process-wide store."""
    global _store_instance
    if _store_instance is None:
        _store_instance = AppStore()
    return _store_instance


def reset_store() -> None:
    """Reset the store singleton (for testing)."""
    global _store_instance
    _store_instance = None
