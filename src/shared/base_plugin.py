from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from src.shared.domain.post import Post

if TYPE_CHECKING:
    from src.shared.post_query import PostQuery


class BasePlugin(ABC):
    """Base class for all plugins of the Media Library service.

    Plugins hook into three points of the host pipeline. Every hook is a
    pass-through by default, so a plugin only overrides what it needs.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The name of the plugin."""
        pass

    async def filter_query_args(self, query_args: Dict[str, Any]) -> Dict[str, Any]:
        """Adjust the query variables of an AJAX attachment listing.

        Args:
            query_args: Query variables built from the client request.

        Returns:
            Query variables to run.
        """
        return query_args

    async def on_clean_post_cache(self, post_id: int, post: Post) -> None:
        """React to a post's cache being cleaned after a write.

        Args:
            post_id: ID of the post that changed.
            post: The post as it was at clean time.
        """
        return None

    async def pre_query(self, posts: Optional[List[Any]], query: "PostQuery") -> Optional[List[Any]]:
        """Short-circuit a query before it reaches the database.

        Args:
            posts: Result supplied by an earlier plugin, or None.
            query: The query about to run.

        Returns:
            None to let the query run, or the result to use instead.
        """
        return posts
