"""Tests for derived store queries."""

import pytest
from datetime import timedelta

from shared.models import CurrentUser, UserRole
from modules.store import queries
from modules.store.models import (
    Chat,
    ChatFilter,
    Message,
    RoleFilter,
    Subscription,
    SubscriptionStatus,
    Task,
)
from modules.store.seed import build_seed_state


def make_subscription(
    sub_id: str,
    client_id: str,
    provider_id: str,
    package_id: str,
    status: SubscriptionStatus,
    now,
) -> Subscription:
    """Helper to create a subscription."""
    return Subscription(
        id=sub_id,
        client_id=client_id,
        provider_id=provider_id,
        package_id=package_id,
        status=status,
        started_at=now,
        ends_at=now + timedelta(days=30),
    )


@pytest.fixture
def state(clock):
    """Seed plus subscriptions and an extra chat for demo_client."""
    now = clock()
    seed = build_seed_state(now)
    return seed.model_copy(update={
        "subscriptions": (
            make_subscription("s1", "demo_client", "p1", "pack1", SubscriptionStatus.ACTIVE, now),
            make_subscription("s2", "demo_client", "p3", "pack4", SubscriptionStatus.CANCELLED, now),
            make_subscription("s3", "other_client", "p2", "pack3", SubscriptionStatus.ACTIVE, now),
        ),
        "chats": seed.chats + (
            Chat(id="chat3", client_id="demo_client", provider_id="p3", last_message_at=now),
            Chat(id="chat4", client_id="other_client", provider_id="p2", last_message_at=now),
        ),
    })


class TestActiveProviderIds:
    def test_only_active_subscriptions_count(self, state):
        """Cancelled subscriptions do not unlock a provider."""
        assert queries.active_provider_ids(state, "demo_client") == {"p1"}

    def test_other_clients_ignored(self, state):
        """Subscriptions of other clients do not count."""
        assert queries.active_provider_ids(state, "other_client") == {"p2"}
        assert queries.active_provider_ids(state, "nobody") == frozenset()


class TestChatsForClient:
    def test_all_returns_only_clients_chats(self, state):
        """The all filter lists every chat of the client and nothing else."""
        chats = queries.chats_for_client(state, "demo_client")
        assert [c.id for c in chats] == ["chat1", "chat2", "chat3"]

    def test_subscribed(self, state):
        """Subscribed keeps chats with an actively subscribed provider."""
        chats = queries.chats_for_client(state, "demo_client", ChatFilter.SUBSCRIBED)
        assert [c.id for c in chats] == ["chat1"]

    def test_not_subscribed(self, state):
        """Not subscribed keeps the rest, including cancelled providers."""
        chats = queries.chats_for_client(state, "demo_client", ChatFilter.NOT_SUBSCRIBED)
        assert [c.id for c in chats] == ["chat2", "chat3"]

    def test_partitions_are_complementary(self, state):
        """Subscribed and not subscribed split the client's chats exactly."""
        everything = set(queries.chats_for_client(state, "demo_client"))
        subscribed = set(queries.chats_for_client(state, "demo_client", ChatFilter.SUBSCRIBED))
        rest = set(queries.chats_for_client(state, "demo_client", ChatFilter.NOT_SUBSCRIBED))
        assert subscribed | rest == everything
        assert subscribed & rest == set()

    def test_filter_accepts_string(self, state):
        """Filters can be passed as plain strings."""
        chats = queries.chats_for_client(state, "demo_client", "subscribed")
        assert [c.id for c in chats] == ["chat1"]

    def test_search_by_provider_name(self, state):
        """Search matches the provider's name, ignoring case."""
        chats = queries.chats_for_client(state, "demo_client", search="SARA")
        assert [c.id for c in chats] == ["chat2"]

    def test_blank_search_matches_all(self, state):
        """Whitespace-only search does not filter."""
        assert len(queries.chats_for_client(state, "demo_client", search="   ")) == 3


class TestFilterProviders:
    def test_all(self, state):
        """No filters returns every provider."""
        assert len(queries.filter_providers(state)) == 3

    def test_role_only(self, state):
        """Role filter keeps matching providers."""
        coaches = queries.filter_providers(state, RoleFilter.COACH)
        assert [p.id for p in coaches] == ["p1", "p3"]

    def test_coach_and_name(self, state):
        """Coach plus 'ali' finds no coach named like Sara Ali."""
        providers = queries.filter_providers(state, RoleFilter.COACH, "ali")
        assert providers == ()

    def test_nutritionist_and_name_case_insensitive(self, state):
        """Name match ignores case."""
        providers = queries.filter_providers(state, "nutritionist", "ALI")
        assert [p.id for p in providers] == ["p2"]

    def test_name_only(self, state):
        """Substring match anywhere in the name."""
        providers = queries.filter_providers(state, search="hass")
        assert [p.id for p in providers] == ["p1"]

    def test_coach_ali_matches_coach_names(self, state):
        """Coaches whose name contains 'ali' in any case are returned."""
        extra = state.providers[0].model_copy(update={"id": "p4", "full_name": "ALIa Coach"})
        richer = state.model_copy(update={"providers": state.providers + (extra,)})
        providers = queries.filter_providers(richer, RoleFilter.COACH, "ali")
        assert [p.id for p in providers] == ["p4"]


class TestTasks:
    def test_todays_tasks_without_unlocked_provider(self, state, today):
        """Nothing is unlocked before subscribing."""
        assert queries.todays_tasks(state, today) == ()

    def test_todays_tasks_for_unlocked_provider(self, state, today):
        """Only the unlocked provider's tasks for today."""
        unlocked = state.model_copy(update={"current_provider_id": "p1"})
        tasks = queries.todays_tasks(unlocked, today)
        assert [t.id for t in tasks] == ["t1", "t2"]

    def test_todays_tasks_uses_calendar_day(self, state, today):
        """Tasks dated another day are excluded."""
        tomorrow_task = Task(id="t9", provider_id="p1", title="Rest", date="2099-01-01")
        unlocked = state.model_copy(update={
            "current_provider_id": "p1",
            "tasks": state.tasks + (tomorrow_task,),
        })
        assert "t9" not in [t.id for t in queries.todays_tasks(unlocked, today)]

    def test_tasks_for_date(self, state, today):
        """Date filter ignores the provider."""
        assert len(queries.tasks_for_date(state, today)) == 3
        assert queries.tasks_for_date(state, "1999-12-31") == ()


class TestMessagesForChat:
    def test_sorted_by_created_at(self, state):
        """Messages come back oldest first."""
        messages = queries.messages_for_chat(state, "chat1")
        assert [m.id for m in messages] == ["m1", "m2", "m4"]

    def test_out_of_order_insertions_are_sorted(self, state, clock):
        """Later-inserted but older messages sort first."""
        older = Message(
            id="m0",
            chat_id="chat1",
            sender_id="p1",
            text="Welcome!",
            created_at=clock() - timedelta(hours=1),
        )
        richer = state.model_copy(update={"messages": state.messages + (older,)})
        assert queries.messages_for_chat(richer, "chat1")[0].id == "m0"

    def test_ties_keep_insertion_order(self, state, clock):
        """Identical timestamps keep insertion order."""
        same_time = clock()
        tied = tuple(
            Message(id=f"tie{i}", chat_id="chat3", sender_id="c", text=str(i), created_at=same_time)
            for i in range(5)
        )
        richer = state.model_copy(update={"messages": state.messages + tied})
        assert [m.id for m in queries.messages_for_chat(richer, "chat3")] == [
            "tie0", "tie1", "tie2", "tie3", "tie4",
        ]

    def test_unknown_chat(self, state):
        """Unknown chats have no messages."""
        assert queries.messages_for_chat(state, "nope") == ()


class TestPackagesForProvider:
    def test_packages_for_provider(self, state):
        """Should return the provider's packages only."""
        assert [p.id for p in queries.packages_for_provider(state, "p1")] == ["pack1", "pack2"]
        assert queries.packages_for_provider(state, "p404") == ()


class TestSubscriptionsForUser:
    def test_client_sees_own(self, state):
        """Clients see subscriptions they bought."""
        client = CurrentUser(id="demo_client", role=UserRole.CLIENT, full_name="D", email="d@x.io")
        assert [s.id for s in queries.subscriptions_for_user(state, client)] == ["s1", "s2"]

    def test_provider_sees_sold(self, state):
        """Providers see subscriptions sold by them."""
        provider = CurrentUser(id="p2", role=UserRole.NUTRITIONIST, full_name="S", email="s@x.io")
        assert [s.id for s in queries.subscriptions_for_user(state, provider)] == ["s3"]

    def test_no_user(self, state):
        """Nobody logged in sees nothing."""
        assert queries.subscriptions_for_user(state, None) == ()
