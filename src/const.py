"""Constants for the Media Library service."""

# Default configuration values
DEFAULT_DATABASE_PATH = "data/media_library.db"
DEFAULT_PLUGINS_DIR = "src/plugins"
DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_SERVER_PORT = 11600
DEFAULT_POSTS_PER_PAGE = 40

# Logging configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library log levels
LIBRARY_LOG_LEVELS = {
    "uvicorn": "WARNING",
    "uvicorn.access": "WARNING",
    "fastapi": "WARNING",
    "sqlalchemy.engine": "WARNING",
}

# Time
MINUTE_IN_SECONDS = 60
HOUR_IN_SECONDS = 60 * MINUTE_IN_SECONDS

# Object cache
OBJECT_CACHE_MAX_SIZE = 10000
POSTS_CACHE_GROUP = "posts"
POST_META_CACHE_GROUP = "post_meta"

# SQLite pragmas
PRAGMA_JOURNAL_MODE = "PRAGMA journal_mode=WAL"
PRAGMA_SYNCHRONOUS = "PRAGMA synchronous=NORMAL"
MEMORY_DATABASE = ":memory:"

# Post types and statuses
ATTACHMENT_POST_TYPE = "attachment"
STATUS_INHERIT = "inherit"
STATUS_PRIVATE = "private"
STATUS_TRASH = "trash"
STATUS_ANY = "any"

# Query variable names
POST_TYPE_VAR = "post_type"
POST_STATUS_VAR = "post_status"
POST_MIME_TYPE_VAR = "post_mime_type"
SEARCH_VAR = "s"
POST_PARENT_VAR = "post_parent"
AUTHOR_VAR = "author"
POST_IN_VAR = "post__in"
POST_NOT_IN_VAR = "post__not_in"
YEAR_VAR = "year"
MONTHNUM_VAR = "monthnum"
ORDERBY_VAR = "orderby"
ORDER_VAR = "order"
POSTS_PER_PAGE_VAR = "posts_per_page"
PAGED_VAR = "paged"
FIELDS_VAR = "fields"
NO_FOUND_ROWS_VAR = "no_found_rows"
UPDATE_POST_META_CACHE_VAR = "update_post_meta_cache"
UPDATE_TERM_META_CACHE_VAR = "update_term_meta_cache"

FIELDS_ALL = "all"
FIELDS_IDS = "ids"

ORDER_ASC = "ASC"
ORDER_DESC = "DESC"
ORDERBY_DATE = "date"
ORDERBY_TITLE = "title"
ORDERBY_ID = "ID"
ORDERBY_MODIFIED = "modified"

# Query variables the AJAX listing endpoint accepts from clients
AJAX_QUERY_KEYS = (
    SEARCH_VAR,
    ORDER_VAR,
    ORDERBY_VAR,
    POSTS_PER_PAGE_VAR,
    PAGED_VAR,
    POST_MIME_TYPE_VAR,
    POST_PARENT_VAR,
    AUTHOR_VAR,
    POST_IN_VAR,
    POST_NOT_IN_VAR,
    YEAR_VAR,
    MONTHNUM_VAR,
)

# HTTP status codes
HTTP_CREATED = 201
HTTP_NOT_FOUND = 404
HTTP_SERVICE_UNAVAILABLE = 503

# Health check constants
HEALTH_STATUS_HEALTHY = "healthy"
HEALTH_STATUS_UNHEALTHY = "unhealthy"
HEALTH_STATUS_OK = "Ok"
HEALTH_STATUS_ERROR = "error"

# Plugin constants
PLUGIN_STATUS_LOADED = "loaded"

# File and directory names
CONFIG_FILE_NAME = "config.json"
PLUGIN_FILE_NAME = "plugin.py"

# FastAPI app constants
APP_TITLE = "Media Library"
APP_DESCRIPTION = "Media library service with a cached attachment listing endpoint"
APP_VERSION = "0.1.0"
