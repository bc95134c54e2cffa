"""Port interface for post storage operations."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from src.shared.domain.post import Post, PostCriteria


class PostRepository(ABC):
    """Port interface for post storage operations."""

    @abstractmethod
    def insert_post(self, post: Post) -> int:
        """Insert a post, ignoring ``post.id``. Returns the new post ID."""
        pass

    @abstractmethod
    def update_post(self, post_id: int, fields: Dict[str, Any]) -> Optional[Post]:
        """Update columns of a post. Returns the updated post or None if missing."""
        pass

    @abstractmethod
    def delete_post(self, post_id: int) -> bool:
        """Delete a post and its meta. Returns False if it did not exist."""
        pass

    @abstractmethod
    def find_by_id(self, post_id: int) -> Optional[Post]:
        """Find a post by ID. Returns None if not found."""
        pass

    @abstractmethod
    def find_by_ids(self, post_ids: List[int]) -> Dict[int, Post]:
        """Find several posts by ID, keyed by ID."""
        pass

    @abstractmethod
    def find_ids(
        self,
        criteria: PostCriteria,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[int]:
        """Return the ordered IDs matching ``criteria``.

        Args:
            criteria: Filter and ordering
            limit: Maximum number of IDs, or None for all
            offset: Number of matching rows to skip
        """
        pass

    @abstractmethod
    def count(self, criteria: PostCriteria) -> int:
        """Count the posts matching ``criteria``."""
        pass

    @abstractmethod
    def get_meta(self, post_ids: List[int]) -> Dict[int, Dict[str, str]]:
        """Load meta for several posts. Posts without meta map to {}."""
        pass

    @abstractmethod
    def set_meta(self, post_id: int, meta_key: str, meta_value: str) -> None:
        """Create or replace one meta value."""
        pass

    @abstractmethod
    def ping(self) -> None:
        """Raise if the database is unreachable."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the database connection."""
        pass
