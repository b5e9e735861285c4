"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with a test
fallback (SQLite in-memory) and exposes the FastAPI session dependency.
"""
import logging
import os
import sys

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

load_dotenv()

logger = logging.getLogger(__name__)


# Database connection URL
# Generate dynamically from individual components if DATABASE_URL is not provided
def _get_database_url() -> str:
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    components = {
        "POSTGRES_USER": os.getenv("POSTGRES_USER"),
        "POSTGRES_PASSWORD": os.getenv("POSTGRES_PASSWORD"),
        "POSTGRES_HOST": os.getenv("POSTGRES_HOST"),
        "POSTGRES_PORT": os.getenv("POSTGRES_PORT"),
        "POSTGRES_DB": os.getenv("POSTGRES_DB"),
    }
    missing = [name for name, value in components.items() if not value]
    if missing:
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return (
        f"postgresql://{components['POSTGRES_USER']}:{components['POSTGRES_PASSWORD']}"
        f"@{components['POSTGRES_HOST']}:{components['POSTGRES_PORT']}/{components['POSTGRES_DB']}"
    )


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while a test runs, so also look for
    the pytest package in ``sys.modules``, which is present from collection on.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return "pytest" in sys.modules


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r; using %s", name, os.getenv(name), default)
        return default


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url:
            # Keep one shared connection so the schema survives across sessions
            kwargs["poolclass"] = StaticPool
        return kwargs

    kwargs = {
        "pool_size": _int_env("DB_POOL_SIZE", 20),
        "pool_timeout": _int_env("DB_POOL_TIMEOUT", 60),
        "pool_pre_ping": True,
    }
    statement_timeout = _int_env("DB_STATEMENT_TIMEOUT_MS", 30000)
    if url.startswith("postgresql") and statement_timeout > 0:
        kwargs["connect_args"] = {"options": f"-c statement_timeout={statement_timeout}"}
    return kwargs


# Test override strategy:
# 1. If NOMINATIONS_TEST_DB is set, use it.
# 2. Else under pytest, use in-memory sqlite.
# 3. Else resolve from DATABASE_URL / POSTGRES_* variables.
explicit_test_db = os.getenv("NOMINATIONS_TEST_DB")
if explicit_test_db:
    DATABASE_URL = explicit_test_db
elif _is_pytest_runtime():
    DATABASE_URL = "sqlite+pysqlite:///:memory:"
else:
    DATABASE_URL = _get_database_url()

engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))

if DATABASE_URL.startswith("sqlite") and ":memory:" in DATABASE_URL:
    # No migrations run against a throwaway database; create the schema eagerly.
    from nomination_service.db import models  # local import to avoid circular import at module load
    models.Base.metadata.create_all(bind=engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency to get a database session; closed on every exit path."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def dispose_engine() -> None:
    """Release pooled connections on application shutdown."""
    engine.dispose()
    logger.info("database_pool_disposed")
