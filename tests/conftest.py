"""Shared fixtures: an isolated SQLite file per test wired into the app's session factory."""

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from container_tracker.core.security import create_user_token, get_password_hash
from container_tracker.db import session as db_session
from container_tracker.db.base import Base
from container_tracker.db.seed import ensure_container_types
from container_tracker.main import app
from container_tracker.models import ContainerType, User

TEST_PASSWORD = "secret123"


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def session_local(tmp_path: Path, monkeypatch) -> Generator[sessionmaker, None, None]:
    engine = _build_test_engine(tmp_path / "tracker.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    yield testing_session_local
    engine.dispose()


@pytest.fixture
def db(session_local: sessionmaker) -> Generator[Session, None, None]:
    with session_local() as session:
        yield session


@pytest.fixture
def container_types(db: Session) -> dict[str, int]:
    ensure_container_types(db)
    return {container_type.name: container_type.id for container_type in db.query(ContainerType).all()}


def make_user(session: Session, username: str, role: str = "user", full_name: str | None = None) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash=get_password_hash(TEST_PASSWORD),
        full_name=full_name or username.title(),
        role=role,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def operator(db: Session) -> User:
    return make_user(db, "operator", full_name="Olivia Operator")


@pytest.fixture
def manager(db: Session) -> User:
    return make_user(db, "manager", role="manager", full_name="Mark Manager")


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_user_token(user)}"}


@pytest.fixture
def client(session_local: sessionmaker) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    response = client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def operator_headers(operator: User) -> dict[str, str]:
    return auth_headers(operator)


@pytest.fixture
def manager_headers(manager: User) -> dict[str, str]:
    return auth_headers(manager)
