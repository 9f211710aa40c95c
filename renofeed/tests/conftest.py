"""
Test configuration and shared fixtures.
Uses an in-memory SQLite database per test for fast, isolated tests.
"""
from __future__ import annotations

import os
import secrets

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.rate_limit import limiter
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.activity_log import ActivityLog
from app.models.comment import Comment, CommentMention
from app.models.floor_map import FloorMapPlan, FloorMapShape
from app.models.material import Material
from app.models.project import Project, ProjectMember
from app.models.room import Room
from app.models.task import Task
from app.models.user import User

# ── Test database ─────────────────────────────────────────────────────────────
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """A fixed timestamp ``minutes`` after the test epoch."""
    return BASE_TIME + timedelta(minutes=minutes)


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """A fresh in-memory database with every table created."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a test database session that rolls back after each test."""
    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        try:
            yield session
            await session.rollback()
        finally:
            await session.close()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP test client with the test DB injected."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def query_counter(engine: AsyncEngine) -> list[str]:
    """Collects every SQL statement executed on the test engine."""
    statements: list[str] = []

    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", before_cursor_execute)
    yield statements
    event.remove(engine.sync_engine, "before_cursor_execute", before_cursor_execute)


# ── Seed data ─────────────────────────────────────────────────────────────────

class Seeder:
    """Inserts rows directly through the session with explicit timestamps."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _add(self, obj: Any) -> Any:
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def user(self, name: str, email: str | None = None) -> User:
        return await self._add(User(name=name, email=email, created_at=BASE_TIME))

    async def project(self, name: str = "Kitchen remodel", *members: User) -> Project:
        project = await self._add(Project(name=name, created_at=BASE_TIME))
        for member in members:
            await self._add(
                ProjectMember(
                    project_id=project.id,
                    user_id=member.id,
                    role="editor",
                    joined_at=BASE_TIME,
                )
            )
        return project

    async def task(
        self, project: Project, title: str, assignee: User | None = None
    ) -> Task:
        return await self._add(
            Task(
                project_id=project.id,
                title=title,
                assigned_to_id=assignee.id if assignee else None,
                created_at=BASE_TIME,
            )
        )

    async def material(
        self, project: Project, name: str, assignee: User | None = None
    ) -> Material:
        return await self._add(
            Material(
                project_id=project.id,
                name=name,
                assigned_to_user_id=assignee.id if assignee else None,
                created_at=BASE_TIME,
            )
        )

    async def room(self, project: Project, name: str) -> Room:
        return await self._add(Room(project_id=project.id, name=name, created_at=BASE_TIME))

    async def shape(self, project: Project, name: str) -> FloorMapShape:
        plan = await self._add(
            FloorMapPlan(project_id=project.id, name="Ground floor", created_at=BASE_TIME)
        )
        return await self._add(FloorMapShape(plan_id=plan.id, name=name))

    async def comment(
        self,
        author: User,
        content: str,
        minutes: int,
        *,
        task: Task | None = None,
        material: Material | None = None,
        room: Room | None = None,
        shape: FloorMapShape | None = None,
        project: Project | None = None,
    ) -> Comment:
        return await self._add(
            Comment(
                content=content,
                created_by_user_id=author.id,
                creator=author,
                created_at=at(minutes),
                task_id=task.id if task else None,
                material_id=material.id if material else None,
                entity_id=room.id if room else None,
                entity_type="room" if room else None,
                drawing_object_id=shape.id if shape else None,
                project_id=project.id if project else None,
            )
        )

    async def mention(self, comment: Comment, user: User) -> CommentMention:
        return await self._add(
            CommentMention(
                comment_id=comment.id,
                mentioned_user_id=user.id,
                created_at=comment.created_at,
            )
        )

    async def activity(
        self,
        project: Project,
        minutes: int,
        *,
        action: str = "created",
        entity_type: str = "task",
        entity_name: str | None = None,
        actor: User | None = None,
    ) -> ActivityLog:
        return await self._add(
            ActivityLog(
                project_id=project.id,
                actor_id=actor.id if actor else None,
                actor=actor,
                action=action,
                entity_type=entity_type,
                entity_name=entity_name,
                changes={},
                created_at=at(minutes),
            )
        )


@pytest_asyncio.fixture
async def seed(db: AsyncSession) -> Seeder:
    return Seeder(db)


# ── Helper fixtures ───────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def alice(seed: Seeder) -> User:
    return await seed.user("Alice Martin", "alice@example.com")


@pytest_asyncio.fixture
async def bob(seed: Seeder) -> User:
    return await seed.user("Bob Chen", "bob@example.com")


@pytest_asyncio.fixture
async def project(seed: Seeder, alice: User, bob: User) -> Project:
    return await seed.project("Kitchen remodel", alice, bob)


def create_access_token(user_id: str, expire_minutes: int = 15, token_type: str = "access") -> str:
    """Mint a token in the format the upstream auth provider issues."""
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": user_id,
        "type": token_type,
        "iat": now,
        "exp": now + timedelta(minutes=expire_minutes),
        "jti": secrets.token_hex(16),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def auth_headers_for(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}


@pytest.fixture
def alice_headers(alice: User) -> dict[str, str]:
    """Return Authorization headers for Alice."""
    return auth_headers_for(alice)


@pytest.fixture
def bob_headers(bob: User) -> dict[str, str]:
    return auth_headers_for(bob)


@pytest.fixture
def alice_refresh_headers(alice: User) -> dict[str, str]:
    """A correctly signed token of the wrong type."""
    token = create_access_token(str(alice.id), token_type="refresh")
    return {"Authorization": f"Bearer {token}"}
