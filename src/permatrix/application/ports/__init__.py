"""Application ports - interfaces for external adapters."""

from permatrix.application.ports.admin_gateway import AdminGateway, AdminGatewayFactory
from permatrix.application.ports.preset_resolver import PresetResolver

__all__ = [
    "AdminGateway",
    "AdminGatewayFactory",
    "PresetResolver",
]
