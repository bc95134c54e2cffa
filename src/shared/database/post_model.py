"""SQLAlchemy models for posts and post meta."""

from datetime import datetime

from sqlalchemy import ForeignKey, Index, Integer, String, Text, TIMESTAMP, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from src.const import ATTACHMENT_POST_TYPE, STATUS_INHERIT
from .base import Base


class PostModel(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_type: Mapped[str] = mapped_column(String(20), nullable=False, default=ATTACHMENT_POST_TYPE)
    post_status: Mapped[str] = mapped_column(String(20), nullable=False, default=STATUS_INHERIT)
    post_mime_type: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    post_title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    guid: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    post_parent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    post_author: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    post_date: Mapped[datetime] = mapped_column(TIMESTAMP, server_default=func.now())
    post_modified: Mapped[datetime] = mapped_column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_type_status_date', 'post_type', 'post_status', 'post_date'),
        Index('idx_post_parent', 'post_parent'),
        Index('idx_post_author', 'post_author'),
        {"extend_existing": True}
    )


class PostMetaModel(Base):
    __tablename__ = "postmeta"

    meta_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    meta_key: Mapped[str] = mapped_column(String(255), nullable=False)
    meta_value: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __table_args__ = (
        UniqueConstraint('post_id', 'meta_key', name='uq_post_meta_key'),
        {"extend_existing": True}
    )
