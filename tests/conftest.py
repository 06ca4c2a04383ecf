"""Shared test fixtures with in-memory SQLite."""
import os
import uuid

# Point redis at a closed port so caches and rate limits use their in-memory fallback
os.environ["REDIS_URL"] = "redis://127.0.0.1:1/0"
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

from app.models import Base
from app.models.advisor import Advisor, AdvisorStatus
from app.models.user import Profile, User
from app.main import app
from app.dependencies import get_db
from app.integrations import resilience
from app.middleware import metrics, rate_limiter
from app.services import token_store
from app.services.auth_service import create_access_token, hash_password
from app.utils import query_cache

# --- SQLite compatibility: compile PostgreSQL types for SQLite ---

@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_, compiler, **kw):
    return "JSON"


@compiles(UUID, "sqlite")
def _compile_uuid_sqlite(type_, compiler, **kw):
    return "VARCHAR(36)"


# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
test_session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@event.listens_for(test_engine.sync_engine, "connect")
def _set_sqlite_pragma(dbapi_connection, _connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(autouse=True)
async def setup_db():
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(autouse=True)
async def reset_state():
    """Process-wide fallbacks must not leak between tests."""
    await query_cache.clear()
    token_store.clear_memory()
    rate_limiter._memory_store.clear()
    resilience.circuit_breakers.clear()
    metrics.reset_metrics()
    yield


async def _override_get_db():
    async with test_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            query_cache.discard_pending(session)
            await session.rollback()
            raise
        await query_cache.flush_pending(session)


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session():
    async with test_session_factory() as session:
        yield session


async def _create_test_user(
    db: AsyncSession, is_admin: bool = False, email: str | None = None,
) -> tuple[User, str]:
    """Create a test user with a profile and return (user, access_token)."""
    kind = "admin" if is_admin else "user"
    user = User(
        id=uuid.uuid4(),
        email=email or f"{kind}_{uuid.uuid4().hex[:8]}@test.com",
        password_hash=hash_password("testpass123"),
        is_active=True,
    )
    db.add(user)
    await db.flush()
    db.add(Profile(id=user.id, first_name="Test", last_name=kind.title(), is_admin=is_admin))
    await db.commit()
    await db.refresh(user, attribute_names=["profile"])
    token = create_access_token(str(user.id), is_admin)
    return user, token


async def _create_advisor(
    db: AsyncSession,
    name: str = "Jane Doe",
    status: AdvisorStatus = AdvisorStatus.APPROVED,
    user: User | None = None,
    **fields,
) -> Advisor:
    """Insert an advisor row directly, bypassing the registration workflow."""
    slug = fields.pop("slug", None) or f"{name.lower().replace(' ', '-')}-{uuid.uuid4().hex[:6]}"
    advisor = Advisor(
        name=name,
        slug=slug,
        firm_name=fields.pop("firm_name", "Doe Wealth"),
        email=fields.pop("email", "jane@example.com"),
        status=status,
        user_id=user.id if user else None,
        advisor_services=fields.pop("advisor_services", ["Financial Planning"]),
        client_type=fields.pop("client_type", ["Individuals"]),
        **fields,
    )
    db.add(advisor)
    await db.commit()
    await db.refresh(advisor)
    return advisor


@pytest.fixture
async def admin_auth(db_session: AsyncSession) -> tuple[User, dict]:
    """Return (admin_user, auth_headers)."""
    user, token = await _create_test_user(db_session, is_admin=True)
    return user, {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def user_auth(db_session: AsyncSession) -> tuple[User, dict]:
    """Return (regular_user, auth_headers)."""
    user, token = await _create_test_user(db_session)
    return user, {"Authorization": f"Bearer {token}"}
