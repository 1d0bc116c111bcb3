"""
Database configuration and session management for the Shop Directory API.

The connection is an explicitly constructed handle owned by the application
lifespan; routes receive sessions through the ``get_db`` dependency.
"""

import os
import logging
from typing import Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Base class for declarative models
Base = declarative_base()


class Database:
    """Connection handle to the document store."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    def connect(self) -> None:
        """Create the engine and make sure the tables exist."""
        connect_args = {}
        engine_kwargs = {}
        if self.url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
            path = self.url.replace("sqlite:///", "")
            if path == ":memory:" or self.url == "sqlite://":
                # One shared connection, otherwise every checkout is a new empty db
                engine_kwargs["poolclass"] = StaticPool
            else:
                db_dir = os.path.dirname(path)
                if db_dir and not os.path.exists(db_dir):
                    os.makedirs(db_dir, exist_ok=True)

        self.engine = create_engine(
            self.url,
            echo=self.echo,
            connect_args=connect_args,
            **engine_kwargs,
        )
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )
        init_db(self.engine)
        logger.info("Connected to database")

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database connection closed")
        self.engine = None
        self._session_factory = None

    def session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory()


def init_db(engine: Engine):
    """
    Initialize database by creating all tables.
    """
    # Import models to ensure they're registered
    from app.models import shop  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency for getting database session.
    Use in FastAPI route dependencies.
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
