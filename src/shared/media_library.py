"""Attachment reads and writes for the media library."""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Optional

from src.const import (
    ATTACHMENT_POST_TYPE,
    POST_META_CACHE_GROUP,
    POSTS_CACHE_GROUP,
    STATUS_INHERIT,
)
from .domain.post import Post
from .exceptions import PostNotFoundError
from .logging import LoggingManager
from .object_cache import ObjectCache
from .ports.post_repository import PostRepository

if TYPE_CHECKING:
    from .hook_dispatcher import HookDispatcher


class MediaLibrary:
    """Write and read paths for attachments.

    Every write ends in ``clean_post_cache``, which is the single place the
    ``on_clean_post_cache`` hook fires from.
    """

    def __init__(
        self,
        repository: PostRepository,
        object_cache: ObjectCache,
        dispatcher: "HookDispatcher"
    ):
        self.repository = repository
        self.object_cache = object_cache
        self.dispatcher = dispatcher
        self.logger = LoggingManager.get_logger(__name__)

    def get_attachment(self, post_id: int) -> Post:
        """Load an attachment, through the posts cache group.

        Raises:
            PostNotFoundError: If the ID is unknown or not an attachment.
        """
        post = self.object_cache.get(str(post_id), POSTS_CACHE_GROUP)
        if post is None:
            post = self.repository.find_by_id(post_id)
            if post is not None:
                self.object_cache.set(str(post_id), post, POSTS_CACHE_GROUP)
        if post is None or post.post_type != ATTACHMENT_POST_TYPE:
            raise PostNotFoundError(post_id, ATTACHMENT_POST_TYPE)
        return post

    def get_attachment_meta(self, post_id: int) -> Dict[str, str]:
        """Load an attachment's meta, through the post_meta cache group."""
        meta = self.object_cache.get(str(post_id), POST_META_CACHE_GROUP)
        if meta is None:
            meta = self.repository.get_meta([post_id]).get(post_id, {})
            self.object_cache.set(str(post_id), meta, POST_META_CACHE_GROUP)
        return meta

    async def create_attachment(
        self,
        title: str,
        mime_type: str,
        url: str = "",
        parent: int = 0,
        author: int = 0,
        status: str = STATUS_INHERIT,
        post_date: Optional[datetime] = None
    ) -> Post:
        """Insert a new attachment."""
        post_id = self.repository.insert_post(Post(
            id=0,
            post_type=ATTACHMENT_POST_TYPE,
            post_status=status,
            post_mime_type=mime_type,
            post_title=title,
            guid=url,
            post_parent=parent,
            post_author=author,
            post_date=post_date,
        ))
        post = self.repository.find_by_id(post_id)
        self.logger.info(f"Created attachment {post_id} ({mime_type})")
        await self.clean_post_cache(post_id, post)
        return post

    async def update_attachment(self, post_id: int, fields: Dict[str, Any]) -> Post:
        """Update an attachment's columns.

        Raises:
            PostNotFoundError: If the ID is unknown or not an attachment.
        """
        self.get_attachment(post_id)
        post = self.repository.update_post(post_id, fields)
        if post is None:
            raise PostNotFoundError(post_id, ATTACHMENT_POST_TYPE)
        self.logger.info(f"Updated attachment {post_id}: {sorted(fields)}")
        await self.clean_post_cache(post_id, post)
        return post

    async def delete_attachment(self, post_id: int) -> Post:
        """Delete an attachment and its meta. Returns the deleted post.

        Raises:
            PostNotFoundError: If the ID is unknown or not an attachment.
        """
        post = self.get_attachment(post_id)
        self.repository.delete_post(post_id)
        self.logger.info(f"Deleted attachment {post_id}")
        await self.clean_post_cache(post_id, post)
        return post

    async def set_attachment_meta(self, post_id: int, meta_key: str, meta_value: str) -> Post:
        """Create or replace one meta value of an attachment."""
        post = self.get_attachment(post_id)
        self.repository.set_meta(post_id, meta_key, meta_value)
        self.logger.debug(f"Set meta '{meta_key}' on attachment {post_id}")
        await self.clean_post_cache(post_id, post)
        return post

    async def clean_post_cache(self, post_id: int, post: Post) -> None:
        """Evict a post from the object cache and notify plugins."""
        self.object_cache.delete(str(post_id), POSTS_CACHE_GROUP)
        self.object_cache.delete(str(post_id), POST_META_CACHE_GROUP)
        await self.dispatcher.notify_clean_post_cache(post_id, post)

    def prepare_attachment_for_js(self, post: Post) -> Dict[str, Any]:
        """Shape an attachment for the media listing response."""
        mime_type, subtype = post.mime_parts
        filename = post.guid.rsplit("/", 1)[-1] if post.guid else ""
        return {
            "id": post.id,
            "title": post.post_title,
            "filename": filename,
            "url": post.guid,
            "mime": post.post_mime_type,
            "type": mime_type,
            "subtype": subtype,
            "status": post.post_status,
            "uploadedTo": post.post_parent,
            "author": post.post_author,
            "date": post.post_date.isoformat() if post.post_date else None,
            "modified": post.post_modified.isoformat() if post.post_modified else None,
            "meta": self.get_attachment_meta(post.id),
        }
