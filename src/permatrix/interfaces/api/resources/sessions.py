"""Edit session resources - role changes and matrix toggles of one user form."""

from typing import Any

import falcon.asgi

from permatrix.application.services.edit_session import EditSession
from permatrix.application.services.role_change_reconciler import SessionMode
from permatrix.application.use_cases.catalog.load_catalog import LoadCatalogUseCase
from permatrix.application.use_cases.user.load_user_access import LoadUserAccessUseCase
from permatrix.domain.exceptions import PermatrixError
from permatrix.domain.services.access import authorized_modules, has_module_permission
from permatrix.domain.services.matrix import filter_modules
from permatrix.infrastructure.sessions.memory_registry import InMemorySessionRegistry
from permatrix.interfaces.api.errors import bad_request, respond_error
from permatrix.interfaces.api.serializers import (
    module_to_dict,
    reconcile_to_dict,
    session_to_dict,
)


def _lookup(
    registry: InMemorySessionRegistry, resp: falcon.asgi.Response, session_id: str
) -> EditSession | None:
    session = registry.get(session_id)
    if session is None:
        resp.status = falcon.HTTP_404
        resp.media = {"error": f"Session {session_id} not found"}
    return session


class SessionsResource:
    """POST /v1/sessions - open a create or edit session."""

    def __init__(
        self,
        registry: InMemorySessionRegistry,
        load_user_access: LoadUserAccessUseCase,
    ) -> None:
        self._registry = registry
        self._load_user_access = load_user_access

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Body: {"mode": "create"} or {"mode": "edit", "user_id": N}."""
        try:
            body = await req.get_media()
            mode = SessionMode(body.get("mode", SessionMode.CREATE))
            user_id = int(body["user_id"]) if mode is SessionMode.EDIT else None
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            bad_request(resp, f"Invalid session request: {e}")
            return

        access = None
        if user_id is not None:
            try:
                access = await self._load_user_access.execute(user_id)
            except PermatrixError as e:
                respond_error(resp, e)
                return

        session = self._registry.create(mode, access)
        resp.media = session_to_dict(session)
        resp.status = falcon.HTTP_201


class SessionResource:
    """GET/DELETE /v1/sessions/{session_id}."""

    def __init__(self, registry: InMemorySessionRegistry) -> None:
        self._registry = registry

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, session_id: str
    ) -> None:
        session = _lookup(self._registry, resp, session_id)
        if session is None:
            return
        resp.media = session_to_dict(session)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, session_id: str
    ) -> None:
        if not self._registry.delete(session_id):
            resp.status = falcon.HTTP_404
            resp.media = {"error": f"Session {session_id} not found"}
            return
        resp.status = falcon.HTTP_204


class SessionRoleResource:
    """PUT /v1/sessions/{session_id}/role - change the working role."""

    def __init__(self, registry: InMemorySessionRegistry) -> None:
        self._registry = registry

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, session_id: str
    ) -> None:
        """Body: {"role_id": N}. Answers with the reconcile outcome."""
        session = _lookup(self._registry, resp, session_id)
        if session is None:
            return
        try:
            body = await req.get_media()
            role_id = int(body["role_id"])
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            bad_request(resp, f"Invalid role change: {e}")
            return

        result = await session.change_role(role_id)
        resp.media = reconcile_to_dict(result, session)
        resp.status = falcon.HTTP_200


class SessionLocationsResource:
    """PUT /v1/sessions/{session_id}/locations - replace the working locations."""

    def __init__(self, registry: InMemorySessionRegistry) -> None:
        self._registry = registry

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, session_id: str
    ) -> None:
        session = _lookup(self._registry, resp, session_id)
        if session is None:
            return
        try:
            body = await req.get_media()
            location_ids = [int(v) for v in body["location_ids"]]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            bad_request(resp, f"Invalid locations: {e}")
            return

        session.set_locations(location_ids)
        resp.media = session_to_dict(session)
        resp.status = falcon.HTTP_200


class SessionToggleResource:
    """POST /v1/sessions/{session_id}/toggle - flip a cell, row or column."""

    def __init__(
        self,
        registry: InMemorySessionRegistry,
        load_catalog: LoadCatalogUseCase,
    ) -> None:
        self._registry = registry
        self._load_catalog = load_catalog

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, session_id: str
    ) -> None:
        """Body: {kind: cell|row|column, module_id?, action_id?, query?}.

        Row toggles span every active action; column toggles span the active
        modules matching `query`.
        """
        session = _lookup(self._registry, resp, session_id)
        if session is None:
            return
        try:
            body: dict[str, Any] = await req.get_media()
            kind = body["kind"]
            if kind == "cell":
                module_id, action_id = int(body["module_id"]), int(body["action_id"])
            elif kind == "row":
                module_id = int(body["module_id"])
            elif kind == "column":
                action_id = int(body["action_id"])
            else:
                raise ValueError(f"unknown toggle kind {kind!r}")
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            bad_request(resp, f"Invalid toggle: {e}")
            return

        if kind == "cell":
            session.toggle_cell(module_id, action_id)
        else:
            try:
                catalog = await self._load_catalog.execute()
            except PermatrixError as e:
                respond_error(resp, e)
                return
            if kind == "row":
                session.toggle_row(module_id, catalog.action_ids)
            else:
                visible = filter_modules(catalog.modules, body.get("query"))
                session.toggle_column([m.id for m in visible], action_id)

        resp.media = session_to_dict(session)
        resp.status = falcon.HTTP_200


class SessionPayloadResource:
    """GET /v1/sessions/{session_id}/payload - user create/update fragment."""

    def __init__(self, registry: InMemorySessionRegistry) -> None:
        self._registry = registry

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, session_id: str
    ) -> None:
        session = _lookup(self._registry, resp, session_id)
        if session is None:
            return
        resp.media = session.payload()
        resp.status = falcon.HTTP_200


class SessionAccessResource:
    """GET /v1/sessions/{session_id}/access?module=&action= - check the working grants."""

    def __init__(
        self,
        registry: InMemorySessionRegistry,
        load_catalog: LoadCatalogUseCase,
    ) -> None:
        self._registry = registry
        self._load_catalog = load_catalog

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, session_id: str
    ) -> None:
        """Viewable modules; `allowed` answers for `module` alias and `action` name when given."""
        session = _lookup(self._registry, resp, session_id)
        if session is None:
            return
        try:
            catalog = await self._load_catalog.execute()
        except PermatrixError as e:
            respond_error(resp, e)
            return

        grants = session.working.grants
        media = {
            "modules": [
                module_to_dict(m)
                for m in authorized_modules(grants, catalog.modules, catalog.actions)
            ],
        }
        module_alias = req.get_param("module")
        if module_alias:
            media["allowed"] = has_module_permission(
                grants,
                catalog.modules,
                catalog.actions,
                module_alias,
                req.get_param("action") or "view",
            )
        resp.media = media
        resp.status = falcon.HTTP_200
