import os

# In-memory database for anything that touches the module level engine.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["AUTH_MODE"] = "mock"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import petflow.models  # noqa: F401
from petflow.ai.client import OpenAIClient
from petflow.core.dependencies import get_ai_client, get_db
from petflow.db.base import Base
from petflow.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # No API key: every AI call takes the fallback path.
    app.dependency_overrides[get_ai_client] = lambda: OpenAIClient(api_key="")

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def maria_and_thor(client):
    maria = client.post(
        "/clients",
        json={"name": "Maria Silva", "phone": "(11) 98765-4321", "email": "maria@example.com"},
    ).json()
    thor = client.post(
        "/pets",
        json={
            "client_id": maria["id"],
            "name": "Thor",
            "species": "dog",
            "breed": "Golden Retriever",
            "size": "large",
        },
    ).json()
    return maria, thor
