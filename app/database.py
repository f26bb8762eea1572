from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import get_settings

settings = get_settings()


def build_engine(database_url: str, echo: bool = False):
    """
    Create the SQLAlchemy engine for the given URL.

    Server databases get a sized connection pool. SQLite cannot share a
    connection across threads by default, and an in-memory database only
    lives as long as its single connection, so those get StaticPool.
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        options = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **options)

    return create_engine(
        url,
        echo=echo,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency to get database session.
    Yields a database session and closes it after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
