"""Shared test configuration and fixtures for all tests."""

import os

# main.py builds its app at import time; keep that database off disk
os.environ.setdefault("MEDIA_LIBRARY_DATABASE_PATH", ":memory:")

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, MagicMock

from src.plugins.attachment_query_cache.config import AttachmentQueryCacheSettings
from src.plugins.attachment_query_cache.plugin import AttachmentQueryCachePlugin
from src.shared.adapters.sqlite_adapter import SQLitePostRepository
from src.shared.config import Config
from src.shared.hook_dispatcher import HookDispatcher
from src.shared.media_library import MediaLibrary
from src.shared.object_cache import ObjectCache
from src.shared.plugin_registry import PluginRegistry
from tests.test_const import IMAGE_MIME, MAY_2024, PDF_MIME, PNG_MIME, JUNE_2024, TEST_URL


@pytest.fixture
def object_cache():
    """Fresh object cache."""
    return ObjectCache()


@pytest.fixture
def repository():
    """In-memory SQLite posts repository."""
    repo = SQLitePostRepository(":memory:")
    yield repo
    repo.close()


@pytest.fixture
def empty_registry(object_cache, tmp_path):
    """Registry over an empty plugins directory."""
    return PluginRegistry(object_cache, plugins_dir=tmp_path)


@pytest.fixture
def cache_plugin(object_cache):
    """Attachment query cache plugin with default settings."""
    return AttachmentQueryCachePlugin(object_cache, settings=AttachmentQueryCacheSettings())


@pytest.fixture
def registry(empty_registry, cache_plugin):
    """Registry holding only the attachment query cache plugin."""
    empty_registry.register(cache_plugin)
    return empty_registry


@pytest.fixture
def dispatcher(registry):
    """Hook dispatcher over the registry with the cache plugin."""
    return HookDispatcher(registry)


@pytest.fixture
def library(repository, object_cache, dispatcher):
    """Media library wired to the cache plugin."""
    return MediaLibrary(repository, object_cache, dispatcher)


@pytest.fixture
def test_config():
    """Config pinned to defaults used by tests."""
    return Config(default_posts_per_page=40)


@pytest_asyncio.fixture
async def seeded_ids(library):
    """Seed four live attachments and a trashed one.

    Returns the live IDs in creation order: Sunset (jpeg, May), Harbor
    (png, June), Manual (pdf, parent 3, June), Beach (jpeg, author 7, June).
    """
    first = await library.create_attachment("Sunset", IMAGE_MIME, url=TEST_URL, post_date=MAY_2024)
    second = await library.create_attachment("Harbor", PNG_MIME, post_date=JUNE_2024)
    third = await library.create_attachment("Manual", PDF_MIME, parent=3, post_date=JUNE_2024)
    fourth = await library.create_attachment("Beach", IMAGE_MIME, author=7, post_date=JUNE_2024)
    await library.create_attachment("Old", IMAGE_MIME, status="trash", post_date=MAY_2024)
    return [first.id, second.id, third.id, fourth.id]


@pytest.fixture
def mock_dispatcher():
    """Dispatcher mock whose hooks are pass-through."""
    mock = MagicMock()
    mock.apply_query_args = AsyncMock(side_effect=lambda args: args)
    mock.apply_pre_query = AsyncMock(return_value=None)
    mock.notify_clean_post_cache = AsyncMock(return_value=None)
    return mock
