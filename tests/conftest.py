"""
Shared test fixtures: in-memory SQLite store, workspace, test client.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Keep the app module from creating a database file on import
os.environ["DATABASE_URL"] = "sqlite://"

from costbook.database import Base
from costbook.main import app
from costbook.state import AppState
from costbook.storage import LocalStore
from costbook.workspace import Workspace


# One shared in-memory connection for the whole test run
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeClock:
    """Millisecond clock that advances by one second per call."""

    def __init__(self, start=1_700_000_000_000):
        self.now = start

    def __call__(self):
        self.now += 1000
        return self.now


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store():
    return LocalStore(TestingSessionLocal)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def state():
    return AppState()


@pytest.fixture
def workspace(store, clock):
    return Workspace.load(store, clock=clock)


@pytest.fixture
def client(workspace):
    """FastAPI test client bound to the test workspace."""
    app.state.workspace = workspace
    yield TestClient(app)
    app.state.workspace = None
