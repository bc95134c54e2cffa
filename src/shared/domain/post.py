from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from src.const import ATTACHMENT_POST_TYPE, ORDER_DESC, ORDERBY_DATE, STATUS_INHERIT


@dataclass
class Post:
    """Domain entity representing a stored post (attachments included)."""

    id: int
    post_type: str = ATTACHMENT_POST_TYPE
    post_status: str = STATUS_INHERIT
    post_mime_type: str = ""
    post_title: str = ""
    guid: str = ""
    post_parent: int = 0
    post_author: int = 0
    post_date: Optional[datetime] = None
    post_modified: Optional[datetime] = None

    @property
    def mime_parts(self) -> Tuple[str, str]:
        """Split the mime type into (type, subtype)."""
        if "/" in self.post_mime_type:
            main, sub = self.post_mime_type.split("/", 1)
            return main, sub
        return self.post_mime_type, ""


@dataclass
class PostCriteria:
    """Filter and ordering for a posts lookup.

    Empty lists mean "no restriction" except ``include``, where ``None`` is
    no restriction and an empty list matches nothing.
    """

    post_types: List[str] = field(default_factory=list)
    statuses: List[str] = field(default_factory=list)
    exclude_statuses: List[str] = field(default_factory=list)
    mime_types: List[str] = field(default_factory=list)
    search: Optional[str] = None
    post_parent: Optional[int] = None
    author: Optional[int] = None
    include: Optional[List[int]] = None
    exclude: List[int] = field(default_factory=list)
    year: Optional[int] = None
    month: Optional[int] = None
    orderby: str = ORDERBY_DATE
    order: str = ORDER_DESC
