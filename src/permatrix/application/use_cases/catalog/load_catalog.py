"""Load matrix catalog use case."""

from permatrix.application.dto.matrix_catalog import MatrixCatalog


class LoadCatalogUseCase:
    """Load the active modules and actions that make up the matrix."""

    def __init__(self, gateway_factory: type) -> None:
        self._gateway_factory = gateway_factory

    async def execute(self) -> MatrixCatalog:
        """Return active modules and actions, in backend order."""
        async with self._gateway_factory() as api:
            modules = await api.catalog.list_modules()
            actions = await api.catalog.list_actions()
        return MatrixCatalog(
            modules=[m for m in modules if m.is_active],
            actions=[a for a in actions if a.is_active],
        )
