from typing import Any, Dict, List

from fastapi import HTTPException

from src.const import HTTP_SERVICE_UNAVAILABLE
from src.shared.exceptions import RepositoryError
from src.shared.logging import LoggingManager
from src.slices.base_router import BaseRouter
from .query_attachments_chain import QueryAttachmentsChain, QueryAttachmentsRequest


class MediaRouter(BaseRouter):
    """Router for the AJAX attachment listing."""

    chain_class = QueryAttachmentsChain
    tag = "media"

    def add_routes(self):
        self.logger = LoggingManager.get_logger(__name__)
        self.router.post("/ajax/query-attachments", response_model=List[Dict[str, Any]])(self.query_attachments)

    async def query_attachments(self, request: QueryAttachmentsRequest) -> List[Dict[str, Any]]:
        """List attachments matching the client's query."""
        try:
            return await self.chain.process_request(request.query)
        except RepositoryError as e:
            self.logger.error(f"Attachment listing failed: {e}")
            raise HTTPException(status_code=HTTP_SERVICE_UNAVAILABLE, detail="Media database unavailable")
