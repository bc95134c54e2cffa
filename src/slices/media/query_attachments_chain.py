"""AJAX attachment listing logic for the Media Library service."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from src.const import (
    AJAX_QUERY_KEYS,
    ATTACHMENT_POST_TYPE,
    POST_STATUS_VAR,
    POST_TYPE_VAR,
    POSTS_PER_PAGE_VAR,
    STATUS_INHERIT,
    STATUS_PRIVATE,
)
from src.shared.config import Config
from src.shared.domain.post import Post
from src.shared.exceptions import PostNotFoundError
from src.shared.logging import LoggingManager
from src.shared.post_query import PostQuery


class QueryAttachmentsRequest(BaseModel):
    """Request body of the AJAX attachment listing."""

    query: Dict[str, Any] = {}


class QueryAttachmentsChain:
    """Builds, filters and runs the AJAX attachment listing query."""

    def __init__(self, library, dispatcher, config: Optional[Config] = None):
        self.library = library
        self.dispatcher = dispatcher
        self.config = config if config is not None else Config()
        self.logger = LoggingManager.get_logger(__name__)

    def build_query_args(self, request_query: Dict[str, Any]) -> Dict[str, Any]:
        """Keep only the accepted client keys and pin the post type and statuses."""
        query_args = {key: value for key, value in request_query.items() if key in AJAX_QUERY_KEYS}
        dropped = set(request_query) - set(query_args)
        if dropped:
            self.logger.debug(f"Ignoring unsupported query keys: {sorted(dropped)}")

        query_args.setdefault(POSTS_PER_PAGE_VAR, self.config.default_posts_per_page)
        query_args[POST_TYPE_VAR] = ATTACHMENT_POST_TYPE
        query_args[POST_STATUS_VAR] = f"{STATUS_INHERIT},{STATUS_PRIVATE}"
        return query_args

    async def process_request(self, request_query: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Run the listing and shape each attachment for the client."""
        query_args = self.build_query_args(request_query)
        query_args = await self.dispatcher.apply_query_args(query_args)

        query = PostQuery(
            query_args,
            self.library.repository,
            self.library.object_cache,
            self.dispatcher
        )
        results = await query.get_posts()

        attachments = []
        for item in results:
            post = item if isinstance(item, Post) else self._load_attachment(int(item))
            if post is not None:
                attachments.append(self.library.prepare_attachment_for_js(post))

        self.logger.info(f"Attachment listing returned {len(attachments)} items")
        return attachments

    def _load_attachment(self, post_id: int) -> Optional[Post]:
        """Load one listed attachment; IDs that vanished are dropped."""
        try:
            return self.library.get_attachment(post_id)
        except PostNotFoundError:
            self.logger.warning(f"Listed attachment {post_id} no longer exists, skipping")
            return None
