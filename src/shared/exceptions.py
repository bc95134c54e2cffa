"""Exceptions raised by the media library host."""

from typing import Optional


class MediaLibraryError(Exception):
    """Base exception for media library errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class PostNotFoundError(MediaLibraryError):
    """Raised when a post ID does not exist or is not of the expected type."""

    def __init__(self, post_id: int, post_type: Optional[str] = None):
        kind = post_type or "post"
        super().__init__(f"No {kind} found with ID {post_id}")
        self.post_id = post_id
        self.post_type = post_type


class RepositoryError(MediaLibraryError):
    """Raised when the posts database fails."""
