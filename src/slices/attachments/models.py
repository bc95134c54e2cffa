"""Request models for attachment writes."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from src.const import STATUS_INHERIT

# API field name -> posts column
_COLUMN_NAMES = {
    "title": "post_title",
    "mime_type": "post_mime_type",
    "url": "guid",
    "parent": "post_parent",
    "author": "post_author",
    "status": "post_status",
    "date": "post_date",
}


class AttachmentCreate(BaseModel):
    title: str
    mime_type: str = Field(pattern=r"^[\w.+-]+/[\w.+-]+$")
    url: str = ""
    parent: int = Field(default=0, ge=0)
    author: int = Field(default=0, ge=0)
    status: str = STATUS_INHERIT
    date: Optional[datetime] = None


class AttachmentUpdate(BaseModel):
    title: Optional[str] = None
    mime_type: Optional[str] = Field(default=None, pattern=r"^[\w.+-]+/[\w.+-]+$")
    url: Optional[str] = None
    parent: Optional[int] = Field(default=None, ge=0)
    author: Optional[int] = Field(default=None, ge=0)
    status: Optional[str] = None
    date: Optional[datetime] = None

    def to_columns(self) -> Dict[str, Any]:
        """Fields the client actually sent, keyed by posts column."""
        return {_COLUMN_NAMES[name]: value for name, value in self.model_dump(exclude_unset=True).items()}


class MetaValue(BaseModel):
    value: str
