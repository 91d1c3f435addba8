"""
Demo data loaded into the store at startup.

State is ephemeral: every process starts again from this catalogue.
Seed chats cache the text and time of their newest seed message.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from shared.config import get_settings

from .models import (
    Provider,
    ProviderRole,
    Package,
    Task,
    TaskStatus,
    Chat,
    Message,
)
from .state import AppState


def _providers() -> tuple[Provider, ...]:
    return (
        Provider(
            id="p1",
            full_name="Ahmed Hassan",
            role=ProviderRole.COACH,
            title="Fitness Coach",
            years_of_experience=5,
            languages=("EN", "AR"),
            specialties=("weight loss", "strength"),
            price_per_month=Decimal("1200"),
            currency="EGP",
        ),
        Provider(
            id="p2",
            full_name="Sara Ali",
            role=ProviderRole.NUTRITIONIST,
            title="Clinical Nutritionist",
            years_of_experience=7,
            languages=("AR",),
            specialties=("diabetes", "weight management"),
            price_per_month=Decimal("900"),
            currency="EGP",
        ),
        Provider(
            id="p3",
            full_name="John Doe",
            role=ProviderRole.COACH,
            title="Online Personal Trainer",
            years_of_experience=3,
            languages=("EN",),
            specialties=("muscle gain",),
            price_per_month=Decimal("1000"),
            currency="EGP",
        ),
    )


def _packages() -> tuple[Package, ...]:
    return (
        Package(
            id="pack1",
            provider_id="p1",
            title="4 Weeks Fat Loss",
            description="Custom workouts + weekly check-ins.",
            price=Decimal("800"),
            currency="EGP",
            duration_in_days=28,
        ),
        Package(
            id="pack2",
            provider_id="p1",
            title="12 Weeks Transformation",
            description="Full plan, nutrition guidance and chat support.",
            price=Decimal("2200"),
            currency="EGP",
            duration_in_days=84,
        ),
        Package(
            id="pack3",
            provider_id="p2",
            title="Nutrition Plan (1 month)",
            description="Meal plan + adjustments every week.",
            price=Decimal("900"),
            currency="EGP",
            duration_in_days=30,
        ),
        Package(
            id="pack4",
            provider_id="p3",
            title="Muscle Gain Coaching",
            description="Hypertrophy program, weekly updates.",
            price=Decimal("1000"),
            currency="EGP",
            duration_in_days=30,
        ),
    )


def _tasks(today: str) -> tuple[Task, ...]:
    return (
        Task(
            id="t1",
            provider_id="p1",
            title="Morning workout",
            description="30 min cardio + stretching",
            date=today,
            status=TaskStatus.PENDING,
        ),
        Task(
            id="t2",
            provider_id="p1",
            title="Evening workout",
            description="Upper body strength session",
            date=today,
            status=TaskStatus.PENDING,
        ),
        Task(
            id="t3",
            provider_id="p2",
            title="Log today meals",
            description="Send photos of breakfast, lunch, dinner",
            date=today,
            status=TaskStatus.PENDING,
        ),
    )


def _conversations(
    now: datetime,
    client_id: str,
) -> tuple[tuple[Chat, ...], tuple[Message, ...]]:
    history = (
        ("m1", "chat1", "p1", "Hi, how was your workout today?", 30),
        ("m2", "chat1", client_id, "It was great, I finished all sets.", 25),
        ("m4", "chat1", "p1", "See you tomorrow at the gym!", 20),
        ("m3", "chat2", "p2", "Remember to drink enough water.", 15),
        ("m5", "chat2", "p2", "Please send your meals photos.", 10),
    )
    messages = tuple(
        Message(
            id=message_id,
            chat_id=chat_id,
            sender_id=sender_id,
            text=text,
            created_at=now - timedelta(minutes=minutes_ago),
        )
        for message_id, chat_id, sender_id, text, minutes_ago in history
    )

    chats = []
    for chat_id, provider_id in (("chat1", "p1"), ("chat2", "p2")):
        newest = [m for m in messages if m.chat_id == chat_id][-1]
        chats.append(Chat(
            id=chat_id,
            client_id=client_id,
            provider_id=provider_id,
            last_message=newest.text,
            last_message_at=newest.created_at,
        ))

    return tuple(chats), messages


def build_seed_state(now: datetime, client_id: Optional[str] = None) -> AppState:
    """
    Build the demo catalogue.

    Args:
        now: Current time; seed tasks are dated on its calendar day and
            seed messages are spread over the half hour before it.
        client_id: Owner of the seed chats. Defaults to the configured
            demo client.

    Returns:
        AppState with no session user and no subscriptions
    """
    chats, messages = _conversations(now, client_id or get_settings().demo_client_id)
    return AppState(
        providers=_providers(),
        packages=_packages(),
        tasks=_tasks(now.date().isoformat()),
        subscriptions=(),
        chats=chats,
        messages=messages,
    )


def build_empty_state() -> AppState:
    """State with no entities at all."""
    return AppState()
