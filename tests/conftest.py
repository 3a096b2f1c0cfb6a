"""
Shared test fixtures for repo_api.

Per-test schema create/drop against ``TEST_DATABASE_URL`` (in-memory SQLite
by default; point it at Postgres to run against the production dialect).
"""

import os
from datetime import datetime, timezone

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from repo_api.db.base import Base  # noqa: E402
import repo_api.models  # noqa: E402,F401
from repo_api.main import app  # noqa: E402

TEST_DB_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def test_engine():
    if TEST_DB_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DB_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )
    else:
        engine = create_async_engine(TEST_DB_URL, pool_pre_ping=True, echo=False)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine):
    """Fresh tables per test: drop → create → yield session → drop."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with factory() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# ---------------------------------------------------------------------------
# Test client
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def test_client(db_session):
    from repo_api.db.session import get_db

    async def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Factory fixtures
#
# Factories commit, so rows survive the rollbacks issued by rejected
# requests. Read ids off the returned objects before calling an endpoint
# that may roll back.
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def user_factory(db_session):
    from repo_api.models.iam.users import Email, User

    async def _create(
        user_name: str,
        name: str = "Test User",
        emails: list[str] | None = None,
        deleted: bool = False,
    ) -> User:
        user = User(
            user_name=user_name,
            name=name,
            type="user",
            active=True,
            emails=[Email(email=e) for e in emails or []],
        )
        if deleted:
            user.deleted_at = datetime.now(timezone.utc)
        db_session.add(user)
        await db_session.commit()
        return user

    return _create


@pytest_asyncio.fixture(scope="function")
async def project_factory(db_session):
    from repo_api.models.iam.projects import Project

    async def _create(project_name: str, author: str = "admin") -> Project:
        project = Project(project_name=project_name, author=author)
        db_session.add(project)
        await db_session.commit()
        return project

    return _create


@pytest_asyncio.fixture(scope="function")
async def member_factory(db_session):
    from repo_api.models.iam.relationships import user_project_association

    async def _create(user_id: int, project_id: int) -> None:
        await db_session.execute(
            user_project_association.insert().values(
                user_id=user_id, project_id=project_id
            )
        )
        await db_session.commit()

    return _create


@pytest_asyncio.fixture(scope="function")
async def membership_rows(db_session):
    """Returns a coroutine listing (user_id, project_id) pairs, sorted."""
    from repo_api.models.iam.relationships import user_project_association

    async def _rows() -> list[tuple[int, int]]:
        result = await db_session.execute(
            select(
                user_project_association.c.user_id,
                user_project_association.c.project_id,
            )
        )
        return sorted(tuple(r) for r in result.all())

    return _rows
