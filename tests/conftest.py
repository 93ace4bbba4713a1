"""
Pytest configuration and fixtures.
Provides test app client, async DB session replacement and seeded reference data.
"""

import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("GEOLOCATION_ENABLED", "false")

from datetime import date
from types import SimpleNamespace

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import timesheet_hub.models  # noqa: F401  (registers tables)
from timesheet_hub.api.v1.middleware import require_acting_user
from timesheet_hub.db import session as db_session_module
from timesheet_hub.db.base import Base
from timesheet_hub.db.session import get_db
from timesheet_hub.main import app
from timesheet_hub.models.holiday import Holiday, HolidayType
from timesheet_hub.models.project import Project, TaskCategory, TimeEntryState
from timesheet_hub.models.user import User
from timesheet_hub.schemas.user import ActingUser


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
def test_session_maker(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture(scope="function")
async def test_db_session(test_session_maker):
    """
    Create a test database session.
    Uses in-memory SQLite for fast tests.
    """
    async with test_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def seed(test_db_session):
    """Users, projects, a task category and a holiday in the first week of March 2025."""
    employee = User(full_name="Alice Employee", email="alice@example.com", role="Employee", location="India")
    colleague = User(full_name="Bob Employee", email="bob@example.com", role="Employee", location="India")
    approver = User(full_name="Tara Lead", email="tara@example.com", role="Team Lead", location="India")
    admin = User(full_name="Root Admin", email="admin@example.com", role="Admin", location="Dubai")
    open_project = Project(
        project_name="Apollo",
        client_name="Acme",
        project_lead=approver,
        open_for_time_entry=TimeEntryState.OPENED,
    )
    closed_project = Project(
        project_name="Zephyr",
        client_name="Globex",
        open_for_time_entry=TimeEntryState.CLOSED,
    )
    category = TaskCategory(category="Development")
    holiday = Holiday(
        holiday_name="Founders Day",
        holiday_type=HolidayType.PUBLIC,
        start_date=date(2025, 3, 4),
        end_date=date(2025, 3, 4),
        location="India",
    )
    test_db_session.add_all([employee, colleague, approver, admin, open_project, closed_project, category, holiday])
    await test_db_session.commit()

    return SimpleNamespace(
        employee=employee,
        colleague=colleague,
        approver=approver,
        admin=admin,
        project=open_project,
        closed_project=closed_project,
        category=category,
        holiday=holiday,
    )


@pytest.fixture(scope="function")
def acting_as():
    """Switch the acting user seen by protected routes: ``acting_as(user)``."""
    current = {}

    def _set(user: User) -> ActingUser:
        current["user"] = ActingUser.from_user(user)
        return current["user"]

    _set.current = current
    return _set


@pytest.fixture(scope="function")
async def test_client(test_session_maker, acting_as, monkeypatch):
    """
    Create a test HTTP client.
    Requests use the test database and the user selected with ``acting_as``.
    """

    async def override_get_db():
        async with test_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_acting_user() -> ActingUser:
        return acting_as.current["user"]

    monkeypatch.setattr(db_session_module, "async_session_maker", test_session_maker)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[require_acting_user] = override_acting_user

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def auth_client(test_session_maker, monkeypatch):
    """HTTP client that authenticates through real bearer tokens."""

    async def override_get_db():
        async with test_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    monkeypatch.setattr(db_session_module, "async_session_maker", test_session_maker)
    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
