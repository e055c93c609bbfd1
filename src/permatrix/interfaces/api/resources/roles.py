"""Assignable roles resource."""

import falcon.asgi

from permatrix.application.use_cases.role.list_assignable_roles import (
    ListAssignableRolesUseCase,
)
from permatrix.domain.exceptions import PermatrixError
from permatrix.interfaces.api.errors import bad_request, respond_error
from permatrix.interfaces.api.serializers import visibility_to_dict


class AssignableRolesResource:
    """GET /v1/roles/assignable?admin_level=&current_role_id="""

    def __init__(self, list_roles: ListAssignableRolesUseCase) -> None:
        self._list_roles = list_roles

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Roles the acting administrator may assign."""
        try:
            admin_level = req.get_param_as_int("admin_level")
            current_role_id = req.get_param_as_int("current_role_id")
        except falcon.HTTPBadRequest:
            bad_request(resp, "admin_level and current_role_id must be integers")
            return
        if admin_level is None:
            bad_request(resp, "admin_level is required")
            return

        try:
            visibility = await self._list_roles.execute(admin_level, current_role_id)
        except PermatrixError as e:
            respond_error(resp, e)
            return

        resp.media = visibility_to_dict(visibility)
        resp.status = falcon.HTTP_200
