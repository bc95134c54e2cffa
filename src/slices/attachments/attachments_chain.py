"""Attachment read and write flows for the Media Library service."""

from typing import Any, Dict

from src.shared.logging import LoggingManager
from .models import AttachmentCreate, AttachmentUpdate, MetaValue


class AttachmentsChain:
    """Runs attachment requests against the media library and shapes the results."""

    def __init__(self, library):
        self.library = library
        self.logger = LoggingManager.get_logger(__name__)

    async def create(self, request: AttachmentCreate) -> Dict[str, Any]:
        post = await self.library.create_attachment(
            title=request.title,
            mime_type=request.mime_type,
            url=request.url,
            parent=request.parent,
            author=request.author,
            status=request.status,
            post_date=request.date,
        )
        return self.library.prepare_attachment_for_js(post)

    async def get(self, post_id: int) -> Dict[str, Any]:
        return self.library.prepare_attachment_for_js(self.library.get_attachment(post_id))

    async def update(self, post_id: int, request: AttachmentUpdate) -> Dict[str, Any]:
        post = await self.library.update_attachment(post_id, request.to_columns())
        return self.library.prepare_attachment_for_js(post)

    async def delete(self, post_id: int) -> Dict[str, Any]:
        post = await self.library.delete_attachment(post_id)
        self.logger.debug(f"Attachment {post_id} deleted via API")
        return {"deleted": True, "id": post.id}

    async def set_meta(self, post_id: int, meta_key: str, request: MetaValue) -> Dict[str, Any]:
        post = await self.library.set_attachment_meta(post_id, meta_key, request.value)
        return self.library.prepare_attachment_for_js(post)
