"""Database engine and session factory helpers."""

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import Session, SQLModel, create_engine

from rostering.core.config import settings
from rostering.core.observability import get_logger

logger = get_logger(__name__)

_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def create_db_engine(database_url: str | None = None, echo: bool | None = None) -> Engine:
    """
    Create a SQLAlchemy engine for the configured database.

    Args:
        database_url: Optional URL overriding ``settings.DATABASE_URL``
        echo: Optional override of ``settings.SQL_ECHO``

    Returns:
        Configured engine
    """
    url = database_url or settings.DATABASE_URL
    engine_kwargs: dict = {"echo": settings.SQL_ECHO if echo is None else echo}

    if url.startswith("sqlite"):
        # Sessions may be handed across threads by callers
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs.update(
            {
                "pool_pre_ping": True,  # Verify connections before use
                "pool_recycle": 3600,  # Recycle connections every hour
            }
        )

    return create_engine(url, **engine_kwargs)


def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first use."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def get_session_factory(engine: Engine | None = None) -> sessionmaker:
    """
    Return a session factory for units of work.

    Without an engine the process-wide factory bound to ``get_engine()`` is
    returned, created on first use. Objects keep their loaded state after
    commit so service results stay readable once the unit of work has closed
    its session.
    """
    global _session_factory
    if engine is not None:
        return _build_session_factory(engine)
    if _session_factory is None:
        _session_factory = _build_session_factory(get_engine())
    return _session_factory


def _build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False)


def init_db(engine: Engine | None = None) -> None:
    """Create all rostering tables that do not exist yet."""
    # make sure all SQLModel models are imported before creating tables
    import rostering.models  # noqa: F401

    engine = engine or get_engine()
    SQLModel.metadata.create_all(engine)
    logger.info("Database schema initialized", url=str(engine.url))
