from contextlib import contextmanager
from typing import Any, Dict

from fastapi import HTTPException

from src.const import HTTP_CREATED, HTTP_NOT_FOUND, HTTP_SERVICE_UNAVAILABLE
from src.shared.exceptions import PostNotFoundError, RepositoryError
from src.shared.logging import LoggingManager
from src.slices.base_router import BaseRouter
from .attachments_chain import AttachmentsChain
from .models import AttachmentCreate, AttachmentUpdate, MetaValue


class AttachmentsRouter(BaseRouter):
    """Router for attachment reads and writes."""

    chain_class = AttachmentsChain
    tag = "attachments"

    def add_routes(self):
        self.logger = LoggingManager.get_logger(__name__)
        self.router.post("/attachments", status_code=HTTP_CREATED, response_model=Dict[str, Any])(self.create_attachment)
        self.router.get("/attachments/{post_id}", response_model=Dict[str, Any])(self.get_attachment)
        self.router.patch("/attachments/{post_id}", response_model=Dict[str, Any])(self.update_attachment)
        self.router.delete("/attachments/{post_id}", response_model=Dict[str, Any])(self.delete_attachment)
        self.router.put("/attachments/{post_id}/meta/{meta_key}", response_model=Dict[str, Any])(self.set_meta)

    @contextmanager
    def _http_errors(self):
        """Translate media library errors into HTTP responses."""
        try:
            yield
        except PostNotFoundError as e:
            raise HTTPException(status_code=HTTP_NOT_FOUND, detail=e.message)
        except RepositoryError as e:
            self.logger.error(f"Attachment request failed: {e}")
            raise HTTPException(status_code=HTTP_SERVICE_UNAVAILABLE, detail=e.message)

    async def create_attachment(self, request: AttachmentCreate) -> Dict[str, Any]:
        """Create an attachment."""
        with self._http_errors():
            return await self.chain.create(request)

    async def get_attachment(self, post_id: int) -> Dict[str, Any]:
        """Get one attachment."""
        with self._http_errors():
            return await self.chain.get(post_id)

    async def update_attachment(self, post_id: int, request: AttachmentUpdate) -> Dict[str, Any]:
        """Update an attachment's fields."""
        with self._http_errors():
            return await self.chain.update(post_id, request)

    async def delete_attachment(self, post_id: int) -> Dict[str, Any]:
        """Delete an attachment."""
        with self._http_errors():
            return await self.chain.delete(post_id)

    async def set_meta(self, post_id: int, meta_key: str, request: MetaValue) -> Dict[str, Any]:
        """Set one meta value of an attachment."""
        with self._http_errors():
            return await self.chain.set_meta(post_id, meta_key, request)
