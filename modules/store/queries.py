"""
Derived queries over a store snapshot.

Every function here is pure: it reads an AppState and returns a tuple
computed from the base collections. Nothing is cached, so results are
always consistent with the snapshot they were given.
"""

from typing import Optional

from shared.models import CurrentUser

from .models import (
    Chat,
    ChatFilter,
    Message,
    Package,
    Provider,
    RoleFilter,
    Subscription,
    Task,
)
from .state import AppState


def _matches_name(full_name: str, search: str) -> bool:
    needle = search.strip().lower()
    if not needle:
        return True
    return needle in full_name.lower()


def active_provider_ids(state: AppState, client_id: str) -> frozenset[str]:
    """Providers the client currently holds an active subscription with."""
    return frozenset(
        s.provider_id
        for s in state.subscriptions
        if s.client_id == client_id and s.is_active
    )


def chats_for_client(
    state: AppState,
    client_id: str,
    chat_filter: ChatFilter = ChatFilter.ALL,
    search: str = "",
) -> tuple[Chat, ...]:
    """
    The client's chats, partitioned by subscription state.

    Args:
        state: Snapshot to read
        client_id: Client whose chats to list
        chat_filter: ``subscribed`` keeps chats whose provider has an active
            subscription of the client, ``not_subscribed`` keeps the rest
        search: Optional case-insensitive match on the provider's name

    Returns:
        Matching chats in insertion order
    """
    subscribed = active_provider_ids(state, client_id)
    names = {p.id: p.full_name for p in state.providers}

    result = []
    for chat in state.chats:
        if chat.client_id != client_id:
            continue
        if chat_filter == ChatFilter.SUBSCRIBED and chat.provider_id not in subscribed:
            continue
        if chat_filter == ChatFilter.NOT_SUBSCRIBED and chat.provider_id in subscribed:
            continue
        if not _matches_name(names.get(chat.provider_id, ""), search):
            continue
        result.append(chat)
    return tuple(result)


def filter_providers(
    state: AppState,
    role: RoleFilter = RoleFilter.ALL,
    search: str = "",
) -> tuple[Provider, ...]:
    """Providers matching the role filter and a case-insensitive name search."""
    role = RoleFilter(role)
    return tuple(
        p for p in state.providers
        if (role == RoleFilter.ALL or p.role.value == role.value)
        and _matches_name(p.full_name, search)
    )


def todays_tasks(state: AppState, today: str) -> tuple[Task, ...]:
    """Tasks of the unlocked provider dated today."""
    if state.current_provider_id is None:
        return ()
    return tuple(
        t for t in state.tasks
        if t.provider_id == state.current_provider_id and t.date == today
    )


def tasks_for_date(state: AppState, date: str) -> tuple[Task, ...]:
    return tuple(t for t in state.tasks if t.date == date)


def messages_for_chat(state: AppState, chat_id: str) -> tuple[Message, ...]:
    """Messages of one chat, oldest first. Ties keep insertion order."""
    # sorted() is stable, and messages are stored in insertion order
    return tuple(sorted(
        (m for m in state.messages if m.chat_id == chat_id),
        key=lambda m: m.created_at,
    ))


def packages_for_provider(state: AppState, provider_id: str) -> tuple[Package, ...]:
    return tuple(p for p in state.packages if p.provider_id == provider_id)


def subscriptions_for_user(
    state: AppState,
    user: Optional[CurrentUser],
) -> tuple[Subscription, ...]:
    """
    Subscriptions a user may see.

    Providers see the subscriptions sold by them, clients see their own.
    """
    if user is None:
        return ()
    if user.is_provider:
        return tuple(s for s in state.subscriptions if s.provider_id == user.id)
    return tuple(s for s in state.subscriptions if s.client_id == user.id)
