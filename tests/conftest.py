import os

import pytest
from fastapi.testclient import TestClient

from projectdesk.config.settings import get_settings
from projectdesk.db.base import Base
from projectdesk.db.seed import seed_demo_data
from projectdesk.db.session import get_engine, get_sessionmaker, reset_database_state
from projectdesk.main import create_app

import projectdesk.db.models  # noqa: F401


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    os.environ["DATABASE_URL"] = "sqlite:///./test_projectdesk.db"
    get_settings.cache_clear()
    reset_database_state()


@pytest.fixture(autouse=True)
def demo_db(test_env) -> None:
    """Fresh schema and demo forest for every test; endpoint tests mutate the tree."""
    engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with get_sessionmaker()() as session:
        seed_demo_data(session)
        session.commit()


@pytest.fixture
def client() -> TestClient:
    app = create_app()
    return TestClient(app)


def as_user(login: str) -> dict[str, str]:
    return {get_settings().actor_header: login}
