import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from nomination_service.db import models
from nomination_service.db.database import SessionLocal, engine
from nomination_service.db.repositories import nominations as repo


@pytest.fixture(scope="session", autouse=True)
def create_schema_once():
    """Create all tables once per test session (SQLite in-memory resets per process)."""
    models.Base.metadata.create_all(bind=engine)
    yield
    models.Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_data():
    """Empty all tables between tests without dropping metadata (faster)."""
    connection = engine.connect()
    trans = connection.begin()
    for table in reversed(models.Base.metadata.sorted_tables):
        connection.execute(table.delete())
    trans.commit()
    connection.close()
    yield


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    from nomination_service.api.main import app

    return TestClient(app)


@pytest.fixture
def nomination_factory(db_session: Session, payload_factory):
    def _create(index: int = 0, **overrides):
        return repo.create_nomination(db_session, payload_factory(index, **overrides))
    return _create
