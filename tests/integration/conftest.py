import os

import pytest
from alembic import command
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from tests.integration.pg_utils import make_alembic_config

# Session-wide Postgres test container
@pytest.fixture(scope="session")
def pg_url():
    if os.getenv("SKIP_DOCKER_TESTS") == "1":
        pytest.skip("SKIP_DOCKER_TESTS=1")
    try:
        from testcontainers.postgres import PostgresContainer
    except ImportError:
        pytest.skip("testcontainers is not installed")

    image = os.getenv("TEST_POSTGRES_IMAGE", "postgres:16-alpine")
    container = PostgresContainer(image)
    try:
        container.start()
    except Exception as exc:
        pytest.skip(f"Docker is not available for integration tests: {exc}")
    try:
        yield container.get_connection_url()
    finally:
        container.stop()


@pytest.fixture(scope="session")
def pg_engine(pg_url):
    command.upgrade(make_alembic_config(pg_url), "head")
    engine = create_engine(pg_url, pool_size=10)
    yield engine
    engine.dispose()


@pytest.fixture(scope="session")
def pg_sessionmaker(pg_engine):
    return sessionmaker(bind=pg_engine, autoflush=False, autocommit=False)


@pytest.fixture
def clean_nominations(pg_engine):
    with pg_engine.begin() as conn:
        conn.execute(text("TRUNCATE nominations RESTART IDENTITY"))
    yield


@pytest.fixture
def pg_session(pg_sessionmaker, clean_nominations):
    db = pg_sessionmaker()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def pg_client(pg_sessionmaker, clean_nominations):
    """TestClient whose requests run against the Postgres container."""
    from nomination_service.api.main import app
    from nomination_service.db.database import get_db

    def _override_get_db():
        db = pg_sessionmaker()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)
