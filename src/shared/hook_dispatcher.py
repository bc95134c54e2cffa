"""Runs plugin hooks at the host's three extension points."""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .domain.post import Post
from .exceptions import RepositoryError
from .logging import LoggingManager

if TYPE_CHECKING:
    from .plugin_registry import PluginRegistry
    from .post_query import PostQuery


class HookDispatcher:
    """Calls each registered plugin's hooks in registration order.

    A plugin that raises is logged and skipped: the value from before that
    plugin is kept, so a faulty plugin can slow a request down but never
    change its outcome.
    """

    def __init__(self, registry: "PluginRegistry"):
        self.registry = registry
        self.logger = LoggingManager.get_logger(__name__)

    async def apply_query_args(self, query_args: Dict[str, Any]) -> Dict[str, Any]:
        """Run every plugin's filter_query_args in sequence."""
        for plugin in self.registry.plugins.values():
            try:
                query_args = await plugin.filter_query_args(query_args)
            except Exception as e:
                self.logger.error(f"Plugin '{plugin.name}' failed in filter_query_args: {e}")
        return query_args

    async def notify_clean_post_cache(self, post_id: int, post: Post) -> None:
        """Tell every plugin a post's cache was cleaned."""
        for plugin in self.registry.plugins.values():
            try:
                await plugin.on_clean_post_cache(post_id, post)
            except Exception as e:
                self.logger.error(f"Plugin '{plugin.name}' failed in on_clean_post_cache for post {post_id}: {e}")

    async def apply_pre_query(self, query: "PostQuery") -> Optional[List[Any]]:
        """Give plugins a chance to supply a query's result.

        Returns:
            The result supplied by the plugins, or None to run the query.

        Raises:
            RepositoryError: A plugin ran the query itself and the database failed.
        """
        posts: Optional[List[Any]] = None
        for plugin in self.registry.plugins.values():
            try:
                posts = await plugin.pre_query(posts, query)
            except RepositoryError:
                raise
            except Exception as e:
                self.logger.error(f"Plugin '{plugin.name}' failed in pre_query: {e}")
        return posts
