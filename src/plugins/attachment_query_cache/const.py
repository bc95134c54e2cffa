# Constants for the Attachment Query Cache plugin

from src.const import ATTACHMENT_POST_TYPE, HOUR_IN_SECONDS

# Plugin configuration
PLUGIN_NAME = "attachment_query_cache"

# Object cache layout
CACHE_GROUP = "ajax_query_attachments"
LAST_CHANGED_KEY = "attachments_last_changed"
CACHE_KEY_PREFIX = "cached_query_"
CACHE_TTL = HOUR_IN_SECONDS * 12

# Only writes to this post type advance the last changed token
TRACKED_POST_TYPE = ATTACHMENT_POST_TYPE

# Query variable that marks a query as cacheable
CACHE_FLAG_VAR = "cache_ajax_query"
