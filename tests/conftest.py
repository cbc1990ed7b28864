"""Shared fixtures: an in-memory database wired into the FastAPI app.

Environment is set before the app is imported so nothing is written to the
working directory (database file, logs, uploads).
"""
import os
import tempfile
from unittest.mock import AsyncMock, patch

_tmp = tempfile.mkdtemp(prefix="pilgrim-tests-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PILGRIM_LOG_PATH"] = os.path.join(_tmp, "api.log")
os.environ["PILGRIM_UPLOAD_DIR"] = os.path.join(_tmp, "uploads")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def client(engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def no_geocoding():
    """Reverse geocoding never touches the network in tests."""
    mock = AsyncMock(return_value="Gràcia, Barcelona")
    with patch("routes.moments.reverse_geocode_place_text", mock), \
            patch("routes.footprints.reverse_geocode_place_text", mock):
        yield mock


@pytest.fixture
def user(client):
    resp = client.post("/users/", json={"id": "uid-ana", "email": "ana@example.com"})
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def trip(client, user):
    resp = client.post("/trips/", json={"title": "Pyrenees 2026", "owner_id": user["id"]})
    assert resp.status_code == 201
    return resp.json()
