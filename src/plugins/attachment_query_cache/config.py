"""Settings for the Attachment Query Cache plugin."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .const import CACHE_GROUP, CACHE_TTL, LAST_CHANGED_KEY, TRACKED_POST_TYPE


class AttachmentQueryCacheSettings(BaseSettings):
    """Configuration model for the Attachment Query Cache plugin."""

    enabled: bool = Field(default=True, description="Cache AJAX attachment listings")
    cache_group: str = Field(default=CACHE_GROUP, description="Object cache group for entries and the token")
    last_changed_key: str = Field(default=LAST_CHANGED_KEY, description="Cache key of the last changed token")
    cache_ttl: int = Field(default=CACHE_TTL, ge=1, description="TTL of entries and the token in seconds")
    tracked_post_type: str = Field(default=TRACKED_POST_TYPE, description="Post type whose writes invalidate the cache")

    model_config = SettingsConfigDict(
        env_prefix='ATTACHMENT_QUERY_CACHE_',
    )
