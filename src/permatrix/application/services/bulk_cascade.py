"""Bulk cascade propagator - push a role preset to users holding the role.

Best effort per user: each target gets its own outcome and one failing
user never stops the others. Targets outside the role's user listing are
rejected without being touched.
"""

import asyncio
import logging
from collections.abc import Iterable

from permatrix.application.dto.cascade import CascadeOutcome
from permatrix.application.dto.role_defaults import RoleDefaults
from permatrix.application.ports import PresetResolver
from permatrix.domain.exceptions import (
    NotFound,
    PermatrixError,
    ScopeViolation,
    TransportFailure,
)

logger = logging.getLogger(__name__)


class BulkCascadePropagator:
    """Replaces grants and/or locations of many users with a role's preset."""

    def __init__(
        self,
        gateway_factory: type,
        resolver: PresetResolver,
        concurrency: int = 8,
    ) -> None:
        self._gateway_factory = gateway_factory
        self._resolver = resolver
        self._concurrency = max(1, concurrency)

    async def cascade(
        self,
        role_id: int,
        target_user_ids: Iterable[int],
        apply_permissions: bool,
        apply_locations: bool,
        defaults: RoleDefaults | None = None,
    ) -> list[CascadeOutcome]:
        """Apply the role's preset to each target; one outcome per target.

        `defaults` skips the preset lookup when the caller already holds the
        preset it just saved.
        """
        targets = list(dict.fromkeys(target_user_ids))
        if not targets:
            return []
        if not apply_permissions and not apply_locations:
            return [CascadeOutcome.success(uid, "nothing to apply") for uid in targets]

        if defaults is None:
            try:
                defaults = await self._resolver.resolve(role_id)
            except (NotFound, TransportFailure) as e:
                logger.warning(
                    "Cascade for role %s aborted before any user: %s",
                    role_id,
                    e,
                    extra={"role_id": role_id},
                )
                return [CascadeOutcome.failure(uid, e) for uid in targets]

        async with self._gateway_factory() as api:
            try:
                eligible = {u.id for u in await api.users.list_by_role(role_id)}
            except PermatrixError as e:
                logger.warning(
                    "Could not list users of role %s: %s",
                    role_id,
                    e,
                    extra={"role_id": role_id},
                )
                return [CascadeOutcome.failure(uid, e) for uid in targets]

            semaphore = asyncio.Semaphore(self._concurrency)

            async def apply_one(user_id: int) -> CascadeOutcome:
                if user_id not in eligible:
                    return self._failed(
                        role_id,
                        user_id,
                        ScopeViolation(f"User {user_id} does not hold role {role_id}"),
                    )
                async with semaphore:
                    try:
                        access = await api.users.get_access(user_id)
                        if access is None:
                            raise NotFound(f"User {user_id} not found")
                        if access.role_id != role_id:
                            raise ScopeViolation(
                                f"User {user_id} holds role {access.role_id}, "
                                f"not {role_id}"
                            )
                        await api.users.update_access(
                            user_id,
                            location_ids=defaults.location_ids
                            if apply_locations
                            else None,
                            grants=defaults.grants if apply_permissions else None,
                        )
                    except PermatrixError as e:
                        return self._failed(role_id, user_id, e)
                return CascadeOutcome.success(user_id)

            outcomes = await asyncio.gather(*(apply_one(uid) for uid in targets))

        succeeded = sum(1 for o in outcomes if o.succeeded)
        logger.info(
            "Cascaded role %s to %d/%d users (permissions=%s, locations=%s)",
            role_id,
            succeeded,
            len(outcomes),
            apply_permissions,
            apply_locations,
            extra={"role_id": role_id},
        )
        return list(outcomes)

    @staticmethod
    def _failed(role_id: int, user_id: int, exc: Exception) -> CascadeOutcome:
        logger.warning(
            "Cascade of role %s to user %s failed: %s",
            role_id,
            user_id,
            exc,
            extra={"role_id": role_id, "user_id": user_id},
        )
        return CascadeOutcome.failure(user_id, exc)
