"""
Store module exceptions.

The store never raises these for domain failures. A failed write returns
``Err(error)`` carrying one of them and leaves the state unchanged, so
callers can decide how to surface the problem.
"""

from shared.exceptions import (
    FitConnectError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    ConflictError,
)


class StoreError(FitConnectError):
    """Base exception for store write failures."""

    pass


class MissingIdentityError(StoreError, AuthenticationError):
    """Raised when an operation needs a session user and none is set."""

    def __init__(self, operation: str):
        super().__init__(
            f"A current user is required for {operation}",
            code="MISSING_IDENTITY",
            details={"operation": operation},
        )


class DanglingReferenceError(StoreError, NotFoundError):
    """Raised when a write references an entity that does not exist."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            f"{entity} not found: {entity_id}",
            code="DANGLING_REFERENCE",
            details={"entity": entity, "id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id


class PackageProviderMismatchError(StoreError, ValidationError):
    """Raised when a package is bought from a provider that does not own it."""

    def __init__(self, package_id: str, provider_id: str, owner_id: str):
        super().__init__(
            f"Package {package_id} belongs to {owner_id}, not {provider_id}",
            code="PACKAGE_PROVIDER_MISMATCH",
            details={
                "package_id": package_id,
                "provider_id": provider_id,
                "owner_id": owner_id,
            },
        )


class InvalidTransitionError(StoreError, ValidationError):
    """Raised when a subscription status change is not allowed."""

    def __init__(self, subscription_id: str, current: str, target: str):
        super().__init__(
            f"Cannot move subscription {subscription_id} from {current} to {target}",
            code="INVALID_TRANSITION",
            details={
                "subscription_id": subscription_id,
                "current": current,
                "target": target,
            },
        )


class RoleChangeError(StoreError, ValidationError):
    """Raised when the session user's role would change mid-session."""

    def __init__(self, user_id: str, current_role: str, new_role: str):
        super().__init__(
            f"Role of {user_id} is fixed to {current_role} for this session",
            code="ROLE_CHANGE",
            details={
                "user_id": user_id,
                "current_role": current_role,
                "new_role": new_role,
            },
        )


class SessionChangedError(StoreError, ConflictError):
    """Raised when a write was started for a user who is no longer logged in."""

    def __init__(self, expected_user_id: str, current_user_id: str):
        super().__init__(
            f"Session changed from {expected_user_id} to {current_user_id}",
            code="SESSION_CHANGED",
            details={
                "expected_user_id": expected_user_id,
                "current_user_id": current_user_id,
            },
        )
