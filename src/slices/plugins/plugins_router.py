from fastapi import APIRouter
from typing import List, Dict, Any

from src.const import PLUGIN_STATUS_LOADED
from src.shared.logging import LoggingManager


class PluginsRouter:
    """Router for plugins endpoints."""

    def __init__(self, registry):
        self.registry = registry
        self.router = APIRouter(prefix="/plugins", tags=["plugins"])
        self.logger = LoggingManager.get_logger(__name__)
        self.router.get("", response_model=List[Dict[str, Any]])(self.list_plugins)

    @classmethod
    def get_router(cls, registry) -> APIRouter:
        """Get the router instance."""
        return cls(registry).router

    async def list_plugins(self) -> List[Dict[str, Any]]:
        """List all loaded plugins with their status."""
        plugins = [
            {"name": plugin.name, "status": PLUGIN_STATUS_LOADED}
            for plugin in self.registry.plugins.values()
        ]
        self.logger.info(f"Listed {len(plugins)} loaded plugins")
        return plugins
