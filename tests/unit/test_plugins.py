"""Unit tests for plugins slice."""

from unittest.mock import MagicMock

import pytest

from src.slices.plugins.plugins_router import PluginsRouter


class TestPluginsRouter:
    """Test plugins endpoint functionality."""

    @pytest.mark.asyncio
    async def test_list_plugins(self):
        """Test list_plugins endpoint."""
        mock_plugin1 = MagicMock()
        mock_plugin1.name = "plugin1"
        mock_plugin2 = MagicMock()
        mock_plugin2.name = "plugin2"

        mock_registry = MagicMock()
        mock_registry.plugins = {
            "plugin1": mock_plugin1,
            "plugin2": mock_plugin2
        }

        router = PluginsRouter(mock_registry)
        result = await router.list_plugins()

        expected = [
            {"name": "plugin1", "status": "loaded"},
            {"name": "plugin2", "status": "loaded"}
        ]
        assert result == expected

    @pytest.mark.asyncio
    async def test_list_plugins_empty(self):
        """Test list_plugins endpoint with no plugins."""
        mock_registry = MagicMock()
        mock_registry.plugins = {}

        router = PluginsRouter(mock_registry)
        result = await router.list_plugins()

        assert result == []

    @pytest.mark.asyncio
    async def test_list_registered_cache_plugin(self, registry):
        result = await PluginsRouter(registry).list_plugins()

        assert result == [{"name": "attachment_query_cache", "status": "loaded"}]
