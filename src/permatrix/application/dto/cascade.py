"""Cascade DTOs - per-user outcome of pushing a role preset."""

from dataclasses import dataclass
from enum import StrEnum


class CascadeStatus(StrEnum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class CascadeOutcome:
    """Result of applying a role preset to one user."""

    user_id: int
    status: CascadeStatus
    reason: str | None = None
    error: str | None = None  # exception class name on failure

    @property
    def succeeded(self) -> bool:
        return self.status is CascadeStatus.SUCCESS

    @classmethod
    def success(cls, user_id: int, reason: str | None = None) -> "CascadeOutcome":
        return cls(user_id=user_id, status=CascadeStatus.SUCCESS, reason=reason)

    @classmethod
    def failure(cls, user_id: int, exc: Exception) -> "CascadeOutcome":
        return cls(
            user_id=user_id,
            status=CascadeStatus.FAILURE,
            reason=str(exc),
            error=type(exc).__name__,
        )
