"""SQLAlchemy-based database service for lookupable models"""
import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Type

from sqlalchemy import MetaData, create_engine, select
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import settings
from ..interfaces.database import IConnectionManager, IRecordSource
from ..models.soft_delete import INCLUDE_TRASHED, install_soft_delete_filter

logger = logging.getLogger(__name__)


class DatabaseService(IConnectionManager, IRecordSource):
    """SQLAlchemy database service - connection lifecycle plus full-collection reads"""

    def __init__(self, database_url: Optional[str] = None, echo: Optional[bool] = None):
        # Public: Database URL
        self.database_url = database_url or settings.database_url
        self.echo = settings.echo_sql if echo is None else echo

        # Private: SQLAlchemy engine and session factory
        self.__engine: Optional[Engine] = None
        self.__SessionLocal: Optional[sessionmaker] = None

    def connect(self) -> None:
        """Create the engine and session factory"""
        url = make_url(self.database_url)
        engine_kwargs = {"echo": self.echo}

        if url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            # In-memory databases live on a single connection
            if url.database in (None, "", ":memory:"):
                engine_kwargs["poolclass"] = StaticPool

        self.__engine = create_engine(url, **engine_kwargs)

        # Records handed to the lookup cache outlive their session
        self.__SessionLocal = sessionmaker(
            bind=self.__engine,
            autoflush=False,
            expire_on_commit=False,
        )
        install_soft_delete_filter(self.__SessionLocal)
        logger.info(f"Connected to database: {url.render_as_string(hide_password=True)}")

    def disconnect(self) -> None:
        """Dispose of the engine"""
        if self.__engine:
            self.__engine.dispose()
            self.__engine = None
        self.__SessionLocal = None
        logger.info("Disconnected from database")

    def is_connected(self) -> bool:
        return self.__engine is not None

    def get_session(self) -> Session:
        if not self.__SessionLocal:
            raise RuntimeError("Database not connected")
        return self.__SessionLocal()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Context manager for a unit of work.

        Yields:
            Session that is committed on success, rolled back on error
        """
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def initialize_schema(self, metadata: MetaData) -> None:
        """Create tables for the given metadata if they don't exist"""
        if not self.__engine:
            raise RuntimeError("Database not connected")

        metadata.create_all(self.__engine)
        logger.info("Database schema initialized")

    def fetch_all(self, model: Type[Any], include_trashed: bool = False) -> List[Any]:
        """
        Fetch every row of a mapped model.

        Args:
            model: SQLAlchemy-mapped class
            include_trashed: Include soft-deleted rows

        Returns:
            List of model instances, detached from their session
        """
        stmt = select(model)
        if include_trashed:
            stmt = stmt.execution_options(**{INCLUDE_TRASHED: True})

        with self.session_scope() as session:
            records = list(session.scalars(stmt).all())

        logger.debug(f"Fetched {len(records)} {model.__name__} rows (include_trashed={include_trashed})")
        return records
