import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from water_server import config
from water_server.errors import StorageError

logger = logging.getLogger(__name__)


def is_memory_sqlite(url: str) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def get_engine(url: str = None) -> Engine:
    url = url or config.DATABASE_URL
    if is_memory_sqlite(url):
        # One shared connection so an in-memory database survives across sessions
        return create_engine(
            url,
            poolclass=StaticPool,
            echo=False,
            connect_args={"check_same_thread": False},
        )
    if url.startswith("sqlite"):
        # File databases get a connection per session so transactions stay separate
        return create_engine(url, echo=False)
    # For serverless, use pool_pre_ping=True and pool_size=1 to avoid pooling issues
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
        echo=False,
    )


engine = get_engine()

# Centralized declarative base for all models
Base = declarative_base()

# Session factory for ORM usage
SessionLocal = scoped_session(
    sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
)


def configure_engine(url: str) -> Engine:
    """Rebind the module engine and session factory, e.g. to an in-memory database."""
    global engine
    SessionLocal.remove()
    engine.dispose()
    engine = get_engine(url)
    SessionLocal.configure(bind=engine)
    return engine


def init_db():
    """Create the water_entries and daily_winners tables if they do not exist."""
    import water_server.entity  # noqa: F401  registers the models with Base.metadata

    try:
        Base.metadata.create_all(engine)
    except SQLAlchemyError as e:
        raise StorageError("Could not create tables") from e


def drop_db():
    import water_server.entity  # noqa: F401

    Base.metadata.drop_all(engine)


@contextmanager
def session_scope(db: Session = None):
    """
    Run a unit of work. A caller-supplied session is reused as-is and the
    caller owns its transaction; otherwise a fresh session is committed on
    success and rolled back on any error. Store failures become StorageError.
    """
    if db is not None:
        try:
            yield db
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e
        return

    session = SessionLocal()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Database error: %s", e)
        raise StorageError(str(e)) from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    init_db()
    print(f"Created tables on {engine.url.render_as_string(hide_password=True)}")
