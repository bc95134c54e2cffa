"""Main entry point for the Media Library service."""

from typing import Optional

from fastapi import FastAPI

from src.const import APP_DESCRIPTION, APP_TITLE, APP_VERSION
from src.shared.adapters.sqlite_adapter import SQLitePostRepository
from src.shared.config import Config
from src.shared.hook_dispatcher import HookDispatcher
from src.shared.logging import LoggingManager
from src.shared.media_library import MediaLibrary
from src.shared.object_cache import ObjectCache
from src.shared.plugin_registry import PluginRegistry
from src.slices.attachments.attachments_router import AttachmentsRouter
from src.slices.health.health_router import HealthRouter
from src.slices.media.media_router import MediaRouter
from src.slices.plugins.plugins_router import PluginsRouter


class MediaLibraryApp:
    """Main application class for the Media Library service."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config if config is not None else Config()

        # Setup logging
        LoggingManager.setup_logging(self.config.log_level, self.config.library_log_levels)

        # Shared collaborators
        self.object_cache = ObjectCache()
        self.repository = SQLitePostRepository(self.config.database_path)

        # Plugins and the hooks they attach to
        self.plugin_registry = PluginRegistry(self.object_cache, self.config.plugins_dir)
        self.dispatcher = HookDispatcher(self.plugin_registry)

        self.library = MediaLibrary(self.repository, self.object_cache, self.dispatcher)

        # Initialize routers
        self.media_router = MediaRouter.get_router(self.library, self.dispatcher, self.config)
        self.attachments_router = AttachmentsRouter.get_router(self.library)
        self.health_router = HealthRouter.get_router(self.repository, self.object_cache)
        self.plugins_router = PluginsRouter.get_router(self.plugin_registry)

        # Create FastAPI app
        self.app = FastAPI(
            title=APP_TITLE,
            description=APP_DESCRIPTION,
            version=APP_VERSION,
        )

        # Mount slices
        self.app.include_router(self.media_router)
        self.app.include_router(self.attachments_router)
        self.app.include_router(self.health_router)
        self.app.include_router(self.plugins_router)

    def close(self) -> None:
        """Release the database connection."""
        self.repository.close()


# Create application instance
app_instance = MediaLibraryApp()
app = app_instance.app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=app_instance.config.server_host, port=app_instance.config.server_port)
