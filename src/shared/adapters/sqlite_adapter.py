"""SQLite adapter implementation for the PostRepository port."""

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from sqlalchemy import create_engine, event, func, or_, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from src.const import (
    MEMORY_DATABASE,
    ORDER_ASC,
    ORDERBY_ID,
    ORDERBY_MODIFIED,
    ORDERBY_TITLE,
    PRAGMA_JOURNAL_MODE,
    PRAGMA_SYNCHRONOUS,
)
from src.shared.database.post_model import Base, PostMetaModel, PostModel
from src.shared.domain.post import Post, PostCriteria
from src.shared.exceptions import RepositoryError
from src.shared.logging import LoggingManager
from src.shared.ports.post_repository import PostRepository

_UPDATABLE_COLUMNS = {
    "post_status",
    "post_mime_type",
    "post_title",
    "guid",
    "post_parent",
    "post_author",
    "post_date",
}


class SQLitePostRepository(PostRepository):
    """SQLite implementation of the PostRepository port interface."""

    def __init__(self, db_path: Union[Path, str], check_same_thread: bool = False):
        """Initialize SQLite post repository.

        Args:
            db_path: Path to SQLite database file, or ":memory:"
            check_same_thread: For SQLite thread safety (default False)
        """
        self.logger = LoggingManager.get_logger(__name__)
        self.db_path = str(db_path)
        if self.db_path == MEMORY_DATABASE:
            # In-memory databases live on one shared connection
            self._engine = create_engine(
                f"sqlite:///{MEMORY_DATABASE}",
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._engine = create_engine(
                f"sqlite:///{self.db_path}",
                connect_args={"check_same_thread": check_same_thread}
            )
        self._register_sqlite_pragmas()
        Base.metadata.create_all(self._engine)
        self.logger.info(f"Posts database ready at {self.db_path}")

    def _register_sqlite_pragmas(self):
        """Set SQLite PRAGMAs on every new connection."""
        @event.listens_for(self._engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute(PRAGMA_JOURNAL_MODE)
            cursor.execute(PRAGMA_SYNCHRONOUS)
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Open a session, translating driver errors into RepositoryError."""
        try:
            with Session(self._engine) as session:
                yield session
        except SQLAlchemyError as e:
            self.logger.error(f"Posts database error: {e}")
            raise RepositoryError(f"Posts database error: {e}", cause=e) from e

    # =========================================================================
    # Domain conversion methods
    # =========================================================================

    def _to_post_domain(self, model: PostModel) -> Post:
        """Convert PostModel to Post domain entity."""
        return Post(
            id=model.id,
            post_type=model.post_type,
            post_status=model.post_status,
            post_mime_type=model.post_mime_type,
            post_title=model.post_title,
            guid=model.guid,
            post_parent=model.post_parent,
            post_author=model.post_author,
            post_date=model.post_date,
            post_modified=model.post_modified,
        )

    def _apply_criteria(self, query, criteria: PostCriteria):
        """Translate PostCriteria into filters on a PostModel query."""
        if criteria.post_types:
            query = query.filter(PostModel.post_type.in_(criteria.post_types))
        if criteria.statuses:
            query = query.filter(PostModel.post_status.in_(criteria.statuses))
        if criteria.exclude_statuses:
            query = query.filter(PostModel.post_status.notin_(criteria.exclude_statuses))
        if criteria.mime_types:
            clauses = []
            for mime_type in criteria.mime_types:
                if "/" in mime_type:
                    clauses.append(PostModel.post_mime_type == mime_type)
                else:
                    clauses.append(PostModel.post_mime_type.like(f"{mime_type}/%"))
            query = query.filter(or_(*clauses))
        if criteria.search:
            query = query.filter(PostModel.post_title.ilike(f"%{criteria.search}%"))
        if criteria.post_parent is not None:
            query = query.filter(PostModel.post_parent == criteria.post_parent)
        if criteria.author is not None:
            query = query.filter(PostModel.post_author == criteria.author)
        if criteria.include is not None:
            query = query.filter(PostModel.id.in_(criteria.include))
        if criteria.exclude:
            query = query.filter(PostModel.id.notin_(criteria.exclude))
        if criteria.year is not None:
            query = query.filter(func.strftime('%Y', PostModel.post_date) == f"{criteria.year:04d}")
        if criteria.month is not None:
            query = query.filter(func.strftime('%m', PostModel.post_date) == f"{criteria.month:02d}")
        return query

    def _order_columns(self, criteria: PostCriteria):
        """Ordering for a query, with ID as tie-breaker."""
        column = {
            ORDERBY_TITLE: PostModel.post_title,
            ORDERBY_ID: PostModel.id,
            ORDERBY_MODIFIED: PostModel.post_modified,
        }.get(criteria.orderby, PostModel.post_date)
        if criteria.order == ORDER_ASC:
            return [column.asc(), PostModel.id.asc()]
        return [column.desc(), PostModel.id.desc()]

    # =========================================================================
    # Port interface methods
    # =========================================================================

    def insert_post(self, post: Post) -> int:
        """Insert a post. Returns the new post ID."""
        with self._session() as session:
            model = PostModel(
                post_type=post.post_type,
                post_status=post.post_status,
                post_mime_type=post.post_mime_type,
                post_title=post.post_title,
                guid=post.guid,
                post_parent=post.post_parent,
                post_author=post.post_author,
            )
            if post.post_date is not None:
                model.post_date = post.post_date
                model.post_modified = post.post_modified or post.post_date
            session.add(model)
            session.commit()
            return model.id

    def update_post(self, post_id: int, fields: Dict[str, Any]) -> Optional[Post]:
        """Update columns of a post. Unknown columns are ignored."""
        with self._session() as session:
            model = session.get(PostModel, post_id)
            if model is None:
                return None
            for name, value in fields.items():
                if name in _UPDATABLE_COLUMNS:
                    setattr(model, name, value)
            session.commit()
            session.refresh(model)
            return self._to_post_domain(model)

    def delete_post(self, post_id: int) -> bool:
        """Delete a post and its meta."""
        with self._session() as session:
            model = session.get(PostModel, post_id)
            if model is None:
                return False
            session.query(PostMetaModel).filter(PostMetaModel.post_id == post_id).delete()
            session.delete(model)
            session.commit()
            return True

    def find_by_id(self, post_id: int) -> Optional[Post]:
        """Find a post by its ID."""
        with self._session() as session:
            model = session.get(PostModel, post_id)
            return self._to_post_domain(model) if model else None

    def find_by_ids(self, post_ids: List[int]) -> Dict[int, Post]:
        """Find multiple posts by their IDs."""
        if not post_ids:
            return {}
        with self._session() as session:
            models = session.query(PostModel).filter(PostModel.id.in_(post_ids)).all()
            return {m.id: self._to_post_domain(m) for m in models}

    def find_ids(
        self,
        criteria: PostCriteria,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[int]:
        """Return the ordered IDs matching the criteria."""
        if criteria.include is not None and not criteria.include:
            return []
        with self._session() as session:
            query = self._apply_criteria(session.query(PostModel.id), criteria)
            query = query.order_by(*self._order_columns(criteria))
            if offset:
                query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)
            return [row[0] for row in query.all()]

    def count(self, criteria: PostCriteria) -> int:
        """Count the posts matching the criteria."""
        if criteria.include is not None and not criteria.include:
            return 0
        with self._session() as session:
            query = self._apply_criteria(session.query(func.count(PostModel.id)), criteria)
            return query.scalar() or 0

    def get_meta(self, post_ids: List[int]) -> Dict[int, Dict[str, str]]:
        """Load meta for several posts."""
        meta: Dict[int, Dict[str, str]] = {post_id: {} for post_id in post_ids}
        if not post_ids:
            return meta
        with self._session() as session:
            rows = session.query(PostMetaModel).filter(PostMetaModel.post_id.in_(post_ids)).all()
            for row in rows:
                meta[row.post_id][row.meta_key] = row.meta_value
        return meta

    def set_meta(self, post_id: int, meta_key: str, meta_value: str) -> None:
        """Create or replace one meta value."""
        with self._session() as session:
            row = session.query(PostMetaModel).filter(
                PostMetaModel.post_id == post_id,
                PostMetaModel.meta_key == meta_key
            ).first()
            if row is None:
                session.add(PostMetaModel(post_id=post_id, meta_key=meta_key, meta_value=meta_value))
            else:
                row.meta_value = meta_value
            session.commit()

    def ping(self) -> None:
        """Run a trivial statement against the database."""
        with self._session() as session:
            session.execute(text("SELECT 1"))

    def close(self) -> None:
        """Close the database connection."""
        if self._engine:
            self._engine.dispose()
