import os

# Must be set before string_analyzer.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RECORD_RETENTION_DAYS"] = "0"

import pytest
from fastapi.testclient import TestClient

from string_analyzer.database import Base, SessionLocal, engine, init_db
from string_analyzer.main import app


@pytest.fixture
def database():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(database):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(database):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seeded(client):
    """Store a small, known set of strings through the API"""
    values = ["madam", "hello world", "racecar", "a man a plan"]
    for value in values:
        response = client.post("/strings", json={"value": value})
        assert response.status_code == 201
    return values
