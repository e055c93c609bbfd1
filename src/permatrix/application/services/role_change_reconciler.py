"""Role-change reconciler for one user create/edit session.

Decides, each time the working role changes, whether the working grants
come from the new role's preset or from the user's stored override.

Edit-mode sessions capture the stored role, override and locations once
(`load_original`). Until then role changes are deferred. Switching back to
the stored role restores the stored override verbatim, whatever presets were
adopted in between. Every role change takes a new request number; a
resolution response is applied only if no later role change has started,
even when the operator has since come back to the same role.
"""

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from permatrix.application.ports import PresetResolver
from permatrix.domain.entities import UserAccess
from permatrix.domain.exceptions import NotFound, TransportFailure, ValidationError
from permatrix.domain.value_objects import GrantSet

logger = logging.getLogger(__name__)


class SessionMode(StrEnum):
    CREATE = "create"
    EDIT = "edit"


class ReconcilerState(StrEnum):
    UNINITIALIZED = "uninitialized"
    TRACKING = "tracking"


class ReconcileOutcome(StrEnum):
    ADOPTED_PRESET = "adopted_preset"
    RESTORED_ORIGINAL = "restored_original"
    DEFERRED = "deferred"
    CLEARED_NO_ROLE = "cleared_no_role"
    CLEARED_NOT_FOUND = "cleared_not_found"
    CLEARED_TRANSPORT_FAILURE = "cleared_transport_failure"
    STALE_DISCARDED = "stale_discarded"


@dataclass(frozen=True)
class ReconcileResult:
    """What one role change did to the working state."""

    outcome: ReconcileOutcome
    role_id: int
    message: str | None = None


@dataclass
class WorkingState:
    """Form-side values the reconciler owns."""

    role_id: int = 0
    grants: GrantSet = field(default_factory=GrantSet)
    location_ids: tuple[int, ...] = ()


class RoleChangeReconciler:
    """State machine driven by discrete role-change events."""

    def __init__(
        self,
        resolver: PresetResolver,
        mode: SessionMode = SessionMode.CREATE,
    ) -> None:
        self._resolver = resolver
        self._mode = mode
        self._state = (
            ReconcilerState.TRACKING
            if mode is SessionMode.CREATE
            else ReconcilerState.UNINITIALIZED
        )
        self._original_role_id: int | None = None
        self._original_override: GrantSet | None = None
        self._original_location_ids: tuple[int, ...] = ()
        self._request_seq = 0
        self.working = WorkingState()

    @property
    def mode(self) -> SessionMode:
        return self._mode

    @property
    def state(self) -> ReconcilerState:
        return self._state

    @property
    def original_role_id(self) -> int | None:
        return self._original_role_id

    @property
    def original_override(self) -> GrantSet | None:
        return self._original_override

    def load_original(self, access: UserAccess) -> None:
        """Capture the stored snapshot of an edited user and start tracking."""
        if self._mode is not SessionMode.EDIT:
            raise ValidationError("Only edit sessions carry a stored snapshot")
        self._original_role_id = access.role_id
        self._original_override = access.override
        self._original_location_ids = access.location_ids
        self.working = WorkingState(
            role_id=access.role_id,
            grants=access.override,
            location_ids=access.location_ids,
        )
        self._state = ReconcilerState.TRACKING

    async def change_role(self, new_role_id: int) -> ReconcileResult:
        """Handle the working role switching to new_role_id."""
        # Bumped before any await so late responses can detect supersession.
        self._request_seq += 1
        request = self._request_seq
        self.working.role_id = new_role_id

        if self._state is ReconcilerState.UNINITIALIZED:
            return self._finish(ReconcileOutcome.DEFERRED, new_role_id)

        if self._mode is SessionMode.EDIT and new_role_id == self._original_role_id:
            self.working.grants = self._original_override or GrantSet()
            self.working.location_ids = self._original_location_ids
            return self._finish(ReconcileOutcome.RESTORED_ORIGINAL, new_role_id)

        if new_role_id <= 0:
            self.working.grants = GrantSet()
            return self._finish(ReconcileOutcome.CLEARED_NO_ROLE, new_role_id)

        try:
            defaults = await self._resolver.resolve(new_role_id)
        except NotFound as e:
            if self._is_stale(request):
                return self._finish(ReconcileOutcome.STALE_DISCARDED, new_role_id)
            self.working.grants = GrantSet()
            return self._finish(
                ReconcileOutcome.CLEARED_NOT_FOUND, new_role_id, str(e)
            )
        except TransportFailure as e:
            if self._is_stale(request):
                return self._finish(ReconcileOutcome.STALE_DISCARDED, new_role_id)
            self.working.grants = GrantSet()
            return self._finish(
                ReconcileOutcome.CLEARED_TRANSPORT_FAILURE,
                new_role_id,
                f"Could not load defaults for role {new_role_id}: {e}",
            )

        if self._is_stale(request):
            return self._finish(ReconcileOutcome.STALE_DISCARDED, new_role_id)

        self.working.grants = defaults.grants
        self.working.location_ids = defaults.location_ids
        return self._finish(ReconcileOutcome.ADOPTED_PRESET, new_role_id)

    def _is_stale(self, request: int) -> bool:
        return request != self._request_seq

    def _finish(
        self, outcome: ReconcileOutcome, role_id: int, message: str | None = None
    ) -> ReconcileResult:
        extra = {"role_id": role_id, "outcome": outcome.value}
        if outcome is ReconcileOutcome.STALE_DISCARDED:
            logger.debug("Discarded stale resolution for role %s", role_id, extra=extra)
        elif outcome is ReconcileOutcome.CLEARED_TRANSPORT_FAILURE:
            logger.warning("Working grants cleared: %s", message, extra=extra)
        elif outcome is ReconcileOutcome.CLEARED_NOT_FOUND:
            logger.info("Working grants cleared: %s", message, extra=extra)
        else:
            logger.debug("Role change to %s: %s", role_id, outcome.value, extra=extra)
        return ReconcileResult(outcome=outcome, role_id=role_id, message=message)
