import importlib.util
import sys
from pathlib import Path
from typing import Dict, Optional

from src.const import PLUGIN_FILE_NAME
from .base_plugin import BasePlugin
from .config import Config
from .logging import LoggingManager
from .object_cache import ObjectCache


class PluginRegistry:
    """Registry for loading and managing plugins.

    Plugins live in ``<plugins_dir>/<name>/plugin.py`` and are constructed
    with the shared object cache as their only argument.
    """

    def __init__(self, object_cache: ObjectCache, plugins_dir: Optional[Path] = None):
        self.logger = LoggingManager.get_logger(__name__)
        self.object_cache = object_cache
        self.plugins_dir = plugins_dir if plugins_dir is not None else Config().plugins_dir
        self._plugins: Dict[str, BasePlugin] = {}
        self._load_plugins()

    def _load_plugins(self) -> None:
        """Scan plugins directory and load plugin classes."""
        if not self.plugins_dir.exists():
            self.logger.warning(f"Plugins directory {self.plugins_dir} does not exist")
            return

        for plugin_dir in sorted(self.plugins_dir.iterdir()):
            if not plugin_dir.is_dir():
                continue

            plugin_file = plugin_dir / PLUGIN_FILE_NAME
            if not plugin_file.exists():
                continue

            try:
                plugin_class = self._load_plugin_class(plugin_dir.name, plugin_file)
                if plugin_class is None:
                    self.logger.warning(f"No plugin class found in {plugin_file}")
                    continue
                self.register(plugin_class(object_cache=self.object_cache))
            except Exception as e:
                self.logger.error(f"Failed to load plugin from {plugin_file}: {e}")

    def _load_plugin_class(self, dir_name: str, plugin_file: Path) -> Optional[type]:
        """Import a plugin file and return the BasePlugin subclass it defines."""
        spec = importlib.util.spec_from_file_location(
            f"plugins.{dir_name}.plugin", plugin_file
        )
        if spec is None or spec.loader is None:
            return None

        module = importlib.util.module_from_spec(spec)
        sys.modules[spec.name] = module
        spec.loader.exec_module(module)

        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if (
                isinstance(attr, type)
                and issubclass(attr, BasePlugin)
                and attr is not BasePlugin
                and attr.__module__ == module.__name__
            ):
                return attr
        return None

    def register(self, plugin: BasePlugin) -> None:
        """Register a plugin instance, replacing one with the same name."""
        self._plugins[plugin.name] = plugin
        self.logger.info(f"Registered plugin '{plugin.name}'")

    def get_plugin(self, name: str) -> Optional[BasePlugin]:
        """Get a plugin instance by name."""
        return self._plugins.get(name)

    @property
    def plugins(self) -> Dict[str, BasePlugin]:
        """Get all loaded plugins."""
        return self._plugins.copy()
