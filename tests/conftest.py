"""Shared test fixtures for account and session tests."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from authcore.database import get_db
from authcore.dependencies.auth import get_password_hasher
from authcore.init_db import create_tables
from authcore.main import app
from authcore.services.auth import AccountManager, PasswordHasher, SessionManager
from authcore.services.repositories import AccountRepository, SessionRepository


@pytest.fixture
def engine():
    """In-memory SQLite engine shared by every connection of one test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    """Create a database session for each test."""
    testing_session_local = sessionmaker(
        autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
    )
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def hasher():
    """bcrypt with the minimum cost so tests stay fast."""
    return PasswordHasher(scheme="bcrypt", rounds=4)


@pytest.fixture
def account_repo(db):
    return AccountRepository(db)


@pytest.fixture
def session_repo(db):
    return SessionRepository(db)


@pytest.fixture
def account_manager(account_repo, hasher):
    return AccountManager(account_repo, hasher=hasher)


@pytest.fixture
def session_manager(session_repo):
    return SessionManager(session_repo)


@pytest.fixture
def activate_account(account_manager):
    """Factory taking an account from registration to activated."""

    def _activate(name: str, password: str):
        registered = account_manager.register(name)
        authenticated = account_manager.authenticate(
            name, registered.temp_password, is_temp=True
        )
        return account_manager.complete_activation(authenticated, password)

    return _activate


@pytest.fixture
def auth_client(engine):
    """Create test client backed by the in-memory database.

    Yields a tuple of (TestClient, SessionMaker) for use in tests.
    """
    testing_session_local = sessionmaker(
        autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
    )

    def override_get_db():
        db = testing_session_local()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_password_hasher] = lambda: PasswordHasher(rounds=4)

    with TestClient(app) as test_client:
        yield test_client, testing_session_local

    app.dependency_overrides.clear()
