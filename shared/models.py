"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """Roles a session user can hold."""

    CLIENT = "client"
    COACH = "coach"
    NUTRITIONIST = "nutritionist"


class CurrentUser(BaseModel):
    """
    The user of the current session.

    Supplied by the auth collaborator after login or registration and
    trusted as-is by the store. Provider-only fields are filled in for
    coaches and nutritionists.
    """

    id: str = Field(..., description="User ID")
    role: UserRole = Field(..., description="Session role, fixed for the session")
    full_name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    phone: Optional[str] = Field(None, description="Phone number")
    age: Optional[int] = Field(None, ge=0, description="Age in years")

    # Provider-only fields
    title: Optional[str] = Field(None, description="Professional title")
    years_of_experience: Optional[int] = Field(None, ge=0)
    languages: tuple[str, ...] = Field(default_factory=tuple)
    specialties: tuple[str, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    @property
    def is_provider(self) -> bool:
        """Whether the user is a coach or nutritionist."""
        return self.role in (UserRole.COACH, UserRole.NUTRITIONIST)
