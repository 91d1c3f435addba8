"""Tests for store module interfaces."""

import pytest

from modules.store.interfaces import IAppStore
from modules.store.service import AppStore


class TestIAppStore:
    def test_protocol_is_runtime_checkable(self, store):
        """Should be able to check if instance implements protocol."""
        assert isinstance(store, IAppStore)

    def test_store_implements_interface(self, store):
        """AppStore should implement all interface methods."""
        for name in (
            "today",
            "watch",
            "set_current_user",
            "set_current_provider_id",
            "subscribe",
            "add_message",
            "start_chat",
            "cancel_subscription",
            "expire_subscription",
            "expire_due_subscriptions",
            "add_task",
            "set_task_status",
            "chats_for_client",
            "filter_providers",
            "todays_tasks",
            "tasks_for_date",
            "messages_for_chat",
            "packages_for_provider",
            "visible_subscriptions",
        ):
            assert callable(getattr(store, name)), name

    def test_state_is_a_property(self):
        """state should be exposed read-only."""
        assert isinstance(AppStore.state, property)
        assert AppStore.state.fset is None
