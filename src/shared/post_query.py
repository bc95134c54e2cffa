"""Query executor for posts, modelled on a query-vars driven listing query."""

import math
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from src.const import (
    AUTHOR_VAR,
    DEFAULT_POSTS_PER_PAGE,
    FIELDS_ALL,
    FIELDS_IDS,
    FIELDS_VAR,
    MONTHNUM_VAR,
    NO_FOUND_ROWS_VAR,
    ORDER_ASC,
    ORDER_DESC,
    ORDER_VAR,
    ORDERBY_DATE,
    ORDERBY_ID,
    ORDERBY_MODIFIED,
    ORDERBY_TITLE,
    ORDERBY_VAR,
    PAGED_VAR,
    POST_IN_VAR,
    POST_META_CACHE_GROUP,
    POST_MIME_TYPE_VAR,
    POST_NOT_IN_VAR,
    POST_PARENT_VAR,
    POST_STATUS_VAR,
    POST_TYPE_VAR,
    POSTS_PER_PAGE_VAR,
    SEARCH_VAR,
    STATUS_ANY,
    STATUS_TRASH,
    UPDATE_POST_META_CACHE_VAR,
    UPDATE_TERM_META_CACHE_VAR,
    YEAR_VAR,
)
from .domain.post import Post, PostCriteria
from .logging import LoggingManager
from .object_cache import ObjectCache
from .ports.post_repository import PostRepository

if TYPE_CHECKING:
    from .hook_dispatcher import HookDispatcher

_ORDERBY_VALUES = {ORDERBY_DATE, ORDERBY_TITLE, ORDERBY_ID, ORDERBY_MODIFIED}

QUERY_VAR_DEFAULTS: Dict[str, Any] = {
    POST_TYPE_VAR: "post",
    POST_STATUS_VAR: "",
    POSTS_PER_PAGE_VAR: DEFAULT_POSTS_PER_PAGE,
    PAGED_VAR: 1,
    ORDERBY_VAR: ORDERBY_DATE,
    ORDER_VAR: ORDER_DESC,
    FIELDS_VAR: FIELDS_ALL,
    NO_FOUND_ROWS_VAR: False,
    UPDATE_POST_META_CACHE_VAR: True,
    UPDATE_TERM_META_CACHE_VAR: True,
}


def _as_list(value: Any) -> List[str]:
    """Normalize a scalar, comma separated string or list into a list of strings."""
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple, set)):
        return [str(v).strip() for v in value if str(v).strip()]
    return [part.strip() for part in str(value).split(",") if part.strip()]


def _as_int(value: Any, default: Optional[int]) -> Optional[int]:
    """Coerce a client value to int; values that are not integers give ``default``."""
    if value is None or value == "" or isinstance(value, bool):
        return default
    try:
        if isinstance(value, float):
            return int(value)
        return int(str(value).strip())
    except (TypeError, ValueError, OverflowError):
        return default


def _as_int_list(value: Any) -> List[int]:
    """Integers from a list or comma separated string; other entries are dropped."""
    ints = (_as_int(v, None) for v in _as_list(value))
    return [v for v in ints if v is not None]


def _as_optional_int(value: Any) -> Optional[int]:
    return _as_int(value, None)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class PostQuery:
    """A single posts query.

    Holds the query variables, runs them through the ``pre_query`` hooks and
    the repository, and keeps the result in ``posts``. The ``fields``,
    ``no_found_rows`` and ``update_post_meta_cache`` variables trade result
    detail for less work, as described in ``get_posts``.
    """

    def __init__(
        self,
        query_vars: Dict[str, Any],
        repository: PostRepository,
        object_cache: ObjectCache,
        dispatcher: Optional["HookDispatcher"] = None
    ):
        self.logger = LoggingManager.get_logger(__name__)
        self.repository = repository
        self.object_cache = object_cache
        self.dispatcher = dispatcher
        self._query_vars: Dict[str, Any] = dict(QUERY_VAR_DEFAULTS)
        self._query_vars.update(query_vars)
        self.posts: List[Union[int, Post]] = []
        self.found_posts = 0
        self.max_num_pages = 0
        # Set by a plugin while it runs this query from inside its own pre_query hook
        self.in_pre_query_handler = False

    @property
    def query_vars(self) -> Dict[str, Any]:
        """Copy of the query variables, defaults included."""
        return dict(self._query_vars)

    def get(self, name: str, default: Any = None) -> Any:
        """Get a query variable."""
        return self._query_vars.get(name, default)

    def set(self, name: str, value: Any) -> None:
        """Set a query variable."""
        self._query_vars[name] = value

    def build_criteria(self) -> PostCriteria:
        """Translate the query variables into repository criteria."""
        post_types = _as_list(self.get(POST_TYPE_VAR))
        if STATUS_ANY in post_types:
            post_types = []

        statuses = _as_list(self.get(POST_STATUS_VAR))
        exclude_statuses: List[str] = []
        if not statuses or STATUS_ANY in statuses:
            statuses = []
            exclude_statuses = [STATUS_TRASH]

        include = _as_int_list(self.get(POST_IN_VAR)) if self.get(POST_IN_VAR) is not None else None
        orderby = self.get(ORDERBY_VAR) if self.get(ORDERBY_VAR) in _ORDERBY_VALUES else ORDERBY_DATE
        order = str(self.get(ORDER_VAR) or ORDER_DESC).upper()

        return PostCriteria(
            post_types=post_types,
            statuses=statuses,
            exclude_statuses=exclude_statuses,
            mime_types=_as_list(self.get(POST_MIME_TYPE_VAR)),
            search=self.get(SEARCH_VAR) or None,
            post_parent=_as_optional_int(self.get(POST_PARENT_VAR)),
            author=_as_optional_int(self.get(AUTHOR_VAR)),
            include=include,
            exclude=_as_int_list(self.get(POST_NOT_IN_VAR)),
            year=_as_optional_int(self.get(YEAR_VAR)),
            month=_as_optional_int(self.get(MONTHNUM_VAR)),
            orderby=orderby,
            order=ORDER_ASC if order == ORDER_ASC else ORDER_DESC,
        )

    def _page_bounds(self):
        """Return (limit, offset) for the current page; limit None means all."""
        per_page = _as_int(self.get(POSTS_PER_PAGE_VAR), DEFAULT_POSTS_PER_PAGE)
        if per_page == 0:
            per_page = DEFAULT_POSTS_PER_PAGE
        if per_page < 0:
            return None, 0
        paged = max(_as_int(self.get(PAGED_VAR), 1), 1)
        return per_page, (paged - 1) * per_page

    async def get_posts(self) -> List[Union[int, Post]]:
        """Run the query and store the result in ``posts``.

        - ``fields == "ids"`` returns post IDs instead of ``Post`` objects.
        - ``no_found_rows`` skips the count used for ``found_posts`` and
          ``max_num_pages``.
        - ``update_post_meta_cache`` (with full posts) loads every result's
          meta into the ``post_meta`` cache group in one round trip.
        """
        criteria = self.build_criteria()
        limit, offset = self._page_bounds()
        ids_only = self.get(FIELDS_VAR) == FIELDS_IDS

        supplied = None
        if self.dispatcher is not None:
            supplied = await self.dispatcher.apply_pre_query(self)

        if supplied is not None:
            self.logger.debug(f"Query result supplied by a plugin ({len(supplied)} posts)")
            ids = [p.id if isinstance(p, Post) else int(p) for p in supplied]
        else:
            ids = self.repository.find_ids(criteria, limit=limit, offset=offset)

        if ids_only:
            self.posts = list(ids)
        else:
            found = self.repository.find_by_ids(ids)
            self.posts = [found[post_id] for post_id in ids if post_id in found]
            if _as_bool(self.get(UPDATE_POST_META_CACHE_VAR)):
                self._prime_post_meta_cache(ids)

        if _as_bool(self.get(NO_FOUND_ROWS_VAR)):
            self.found_posts = 0
            self.max_num_pages = 0
        else:
            self.found_posts = self.repository.count(criteria)
            self.max_num_pages = math.ceil(self.found_posts / limit) if limit else 1

        return self.posts

    def _prime_post_meta_cache(self, post_ids: List[int]) -> None:
        """Load meta for posts not yet in the post_meta cache group."""
        missing = [pid for pid in post_ids if self.object_cache.get(str(pid), POST_META_CACHE_GROUP) is None]
        if not missing:
            return
        for post_id, meta in self.repository.get_meta(missing).items():
            self.object_cache.set(str(post_id), meta, POST_META_CACHE_GROUP)
