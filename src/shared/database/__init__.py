"""Database models for posts."""

from .base import Base
from .post_model import PostMetaModel, PostModel

__all__ = ["Base", "PostModel", "PostMetaModel"]
