"""Attachment Query Cache plugin.

Speeds up the AJAX attachment listing by asking the query for IDs only,
skipping meta priming and row counting, and caching the resulting ID list
in the object cache. Cache keys embed the attachments "last changed" token,
so any attachment write orphans every cached listing at once.
"""

import hashlib
import json
from typing import Any, Dict, List, Optional

from src.const import (
    FIELDS_IDS,
    FIELDS_VAR,
    NO_FOUND_ROWS_VAR,
    UPDATE_POST_META_CACHE_VAR,
    UPDATE_TERM_META_CACHE_VAR,
)
from src.shared.base_plugin import BasePlugin
from src.shared.domain.post import Post
from src.shared.logging import LoggingManager
from src.shared.object_cache import ObjectCache
from src.shared.post_query import PostQuery

from src.plugins.attachment_query_cache.config import AttachmentQueryCacheSettings
from src.plugins.attachment_query_cache.const import CACHE_FLAG_VAR, CACHE_KEY_PREFIX, PLUGIN_NAME
from src.plugins.attachment_query_cache.token_store import InvalidationTokenStore


def canonical_query_json(query_vars: Dict[str, Any]) -> str:
    """Serialize query variables independently of their insertion order."""
    return json.dumps(query_vars, sort_keys=True, separators=(",", ":"), default=str)


class AttachmentQueryCachePlugin(BasePlugin):
    """Caches the ID lists of AJAX attachment listings."""

    def __init__(
        self,
        object_cache: ObjectCache,
        settings: Optional[AttachmentQueryCacheSettings] = None,
        token_store: Optional[InvalidationTokenStore] = None
    ):
        """Initialize the plugin.

        Args:
            object_cache: Shared object cache holding entries and the token.
            settings: Plugin settings; read from the environment if None.
            token_store: Last changed token; built over ``object_cache`` if None.
        """
        self.logger = LoggingManager.get_logger(__name__)
        self.object_cache = object_cache
        self.settings = settings if settings is not None else AttachmentQueryCacheSettings()
        self.token_store = token_store if token_store is not None else InvalidationTokenStore(
            object_cache,
            group=self.settings.cache_group,
            key=self.settings.last_changed_key,
            ttl=self.settings.cache_ttl,
        )
        self.logger.info(f"AttachmentQueryCachePlugin initialized (enabled={self.settings.enabled})")

    @property
    def name(self) -> str:
        """The name of the plugin."""
        return PLUGIN_NAME

    # =========================================================================
    # Hooks
    # =========================================================================

    async def filter_query_args(self, query_args: Dict[str, Any]) -> Dict[str, Any]:
        if not self.settings.enabled:
            return query_args
        return self.prepare_request(query_args)

    async def on_clean_post_cache(self, post_id: int, post: Post) -> None:
        self.on_relevant_write(post_id, post)

    async def pre_query(self, posts: Optional[List[Any]], query: PostQuery) -> Optional[List[Any]]:
        if not self.settings.enabled:
            return posts
        return await self.maybe_serve_cached(posts, query)

    # =========================================================================
    # Operations
    # =========================================================================

    def prepare_request(self, query_args: Dict[str, Any]) -> Dict[str, Any]:
        """Ask for IDs only, skip meta priming and counting, flag for caching.

        Args:
            query_args: Query variables of the listing.

        Returns:
            A new dict with the performance options and cache flag set.
        """
        prepared = dict(query_args)
        prepared[FIELDS_VAR] = FIELDS_IDS
        prepared[UPDATE_POST_META_CACHE_VAR] = False
        prepared[UPDATE_TERM_META_CACHE_VAR] = False
        prepared[NO_FOUND_ROWS_VAR] = True
        prepared[CACHE_FLAG_VAR] = True
        return prepared

    def on_relevant_write(self, post_id: int, post: Optional[Post]) -> None:
        """Advance the last changed token when a tracked post was written."""
        if post is None or post.post_type != self.settings.tracked_post_type:
            return
        token = self.token_store.advance()
        self.logger.info(f"Attachment {post_id} changed, listing cache token advanced to {token}")

    def get_invalidation_token(self, force_update: bool = False) -> str:
        """Get the attachments last changed token.

        Args:
            force_update: Reset the token to the current time.
        """
        return self.token_store.get(force_update)

    def compute_cache_key(self, query: PostQuery) -> str:
        """Cache key for a query under the current token."""
        payload = canonical_query_json(query.query_vars) + self.get_invalidation_token()
        return CACHE_KEY_PREFIX + hashlib.md5(payload.encode("utf-8")).hexdigest()

    async def maybe_serve_cached(self, posts: Optional[List[Any]], query: PostQuery) -> Optional[List[Any]]:
        """Serve a flagged query from the cache, running and caching it on a miss.

        Args:
            posts: Result supplied by earlier plugins, or None.
            query: The query about to run.

        Returns:
            ``posts`` untouched for unflagged queries and for the nested
            run of a query this plugin is already handling; otherwise the
            query's ID list.
        """
        if not query.get(CACHE_FLAG_VAR) or query.in_pre_query_handler:
            return posts

        query.in_pre_query_handler = True
        try:
            cache_key = self.compute_cache_key(query)
            cached_ids = self.object_cache.get(cache_key, self.settings.cache_group)
            if cached_ids is not None:
                self.logger.debug(f"Attachment listing cache hit: {cache_key}")
                return cached_ids

            self.logger.debug(f"Attachment listing cache miss: {cache_key}")
            results = await query.get_posts()
            ids = [p.id if isinstance(p, Post) else int(p) for p in results]
            try:
                self.object_cache.set(cache_key, ids, self.settings.cache_group, self.settings.cache_ttl)
            except Exception as e:
                self.logger.warning(f"Could not store attachment listing {cache_key}: {e}")
            return ids
        finally:
            query.in_pre_query_handler = False
