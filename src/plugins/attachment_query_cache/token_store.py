"""Last changed token for attachments, kept in the object cache."""

import time
from typing import Callable

from src.shared.logging import LoggingManager
from src.shared.object_cache import ObjectCache

from .const import CACHE_GROUP, CACHE_TTL, LAST_CHANGED_KEY


class InvalidationTokenStore:
    """Holds the time attachments last changed.

    Every cached listing key embeds this token, so advancing it orphans all
    earlier entries at once without deleting them. The token lives in the
    object cache with a TTL and is recreated on the first read after it
    expires.
    """

    def __init__(
        self,
        object_cache: ObjectCache,
        group: str = CACHE_GROUP,
        key: str = LAST_CHANGED_KEY,
        ttl: int = CACHE_TTL,
        clock: Callable[[], float] = time.time
    ):
        self.object_cache = object_cache
        self.group = group
        self.key = key
        self.ttl = ttl
        self.clock = clock
        self.logger = LoggingManager.get_logger(__name__)

    def get(self, force_update: bool = False) -> str:
        """Get the current token, creating it when absent or when forced.

        Args:
            force_update: Replace the stored token with the current time.

        Returns:
            The token as a string of Unix seconds.
        """
        last_changed = self.object_cache.get(self.key, self.group)
        if last_changed is None or force_update:
            last_changed = int(self.clock())
            self.object_cache.set(self.key, last_changed, self.group, self.ttl)
            self.logger.debug(f"Attachments last changed set to {last_changed}")
        return str(last_changed)

    def advance(self) -> str:
        """Move the token to now."""
        return self.get(force_update=True)
