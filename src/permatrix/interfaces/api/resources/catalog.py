"""Matrix catalog resource."""

import falcon.asgi

from permatrix.application.use_cases.catalog.load_catalog import LoadCatalogUseCase
from permatrix.domain.exceptions import PermatrixError
from permatrix.domain.services.matrix import filter_modules
from permatrix.interfaces.api.errors import respond_error
from permatrix.interfaces.api.serializers import action_to_dict, module_to_dict


class CatalogResource:
    """GET /v1/catalog - active modules (optionally filtered) and actions."""

    def __init__(self, load_catalog: LoadCatalogUseCase) -> None:
        self._load_catalog = load_catalog

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List matrix rows and columns; `q` filters modules by name or alias."""
        try:
            catalog = await self._load_catalog.execute()
        except PermatrixError as e:
            respond_error(resp, e)
            return

        modules = filter_modules(catalog.modules, req.get_param("q"))
        resp.media = {
            "modules": [module_to_dict(m) for m in modules],
            "actions": [action_to_dict(a) for a in catalog.actions],
        }
        resp.status = falcon.HTTP_200
