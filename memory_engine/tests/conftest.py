import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from memory_engine.core.database import get_db, init_db
from memory_engine.main import app

@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    engine.dispose()

@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def memory_payload():
    return {
        "userId": 7,
        "source": "slack",
        "sourceId": "C123/1700000000.0001",
        "timestamp": "2024-05-01T12:30:00Z",
        "content": "Standup moved to 10am on Thursdays",
        "metadata": {
            "title": "Standup",
            "tags": "meetings",
            "category": ["work", "schedule"],
        },
    }
