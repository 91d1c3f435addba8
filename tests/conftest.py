"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta

from shared.config import Settings, get_settings
from shared.models import CurrentUser, UserRole
from modules.store.service import AppStore, reset_store
from modules.store.seed import build_seed_state


# Fixed point in time for deterministic tests
FIXED_NOW = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)


class FakeClock:
    """
    Controllable clock for the store.

    Returns the same instant until advanced, which makes timestamp
    collisions easy to reproduce.
    """

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the store and settings singletons before and after each test."""
    reset_store()
    get_settings.cache_clear()
    yield
    reset_store()
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Default settings."""
    return Settings()


@pytest.fixture
def clock() -> FakeClock:
    """A clock frozen at FIXED_NOW."""
    return FakeClock()


@pytest.fixture
def store(clock, settings) -> AppStore:
    """A store loaded with the demo seed at FIXED_NOW."""
    return AppStore(state=build_seed_state(clock()), clock=clock, settings=settings)


@pytest.fixture
def client_user() -> CurrentUser:
    """A logged-in client."""
    return CurrentUser(
        id="c1",
        role=UserRole.CLIENT,
        full_name="Mona Client",
        email="mona@example.com",
    )


@pytest.fixture
def demo_client() -> CurrentUser:
    """The client the seed chats belong to."""
    return CurrentUser(
        id="demo_client",
        role=UserRole.CLIENT,
        full_name="Demo User",
        email="demo@example.com",
    )


@pytest.fixture
def coach_user() -> CurrentUser:
    """Provider p1 logged in as a coach."""
    return CurrentUser(
        id="p1",
        role=UserRole.COACH,
        full_name="Ahmed Hassan",
        email="ahmed@example.com",
        title="Fitness Coach",
        years_of_experience=5,
        languages=("EN", "AR"),
        specialties=("weight loss", "strength"),
    )


@pytest.fixture
def today() -> str:
    """Calendar day of FIXED_NOW."""
    return FIXED_NOW.date().isoformat()
