"""Database engine initialization and connection management."""

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .schema import Base


def init_database(url: str) -> sessionmaker[Any]:
    """Initialize database and return session factory."""
    parsed = make_url(url)
    engine_args: dict[str, Any] = {}

    if parsed.get_backend_name() == "sqlite":
        engine_args["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            # One shared connection, otherwise every session sees an empty database
            engine_args["poolclass"] = StaticPool
        else:
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, echo=False, **engine_args)
    Base.metadata.create_all(engine)

    return sessionmaker(bind=engine, expire_on_commit=False)
