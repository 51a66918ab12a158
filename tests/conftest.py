import os
from collections.abc import AsyncGenerator

# Settings are read once at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key"  # pragma: allowlist secret
os.environ["FIELD_ENCRYPTION_KEY"] = "test-field-encryption-key"  # pragma: allowlist secret
os.environ["ADMIN_EMAILS"] = "admin@clinic.test"
os.environ["IDENTITY_PROVIDER"] = "supabase"
os.environ["SUPABASE_URL"] = "https://project.supabase.test"
os.environ["LOG_FORMAT"] = "console"

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Values set above win over a local .env
load_dotenv(override=False)

from app.core.crypto import FieldCipher
from app.database import get_db
from app.dependencies import get_cache_manager, get_field_cipher, get_identity_verifier
from app.main import app
from app.models import metadata
from tests.utils import ADMIN_EMAIL, FakeIdentityVerifier, bearer, register


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def cipher() -> FieldCipher:
    return get_field_cipher()


@pytest.fixture
def identity_verifier() -> FakeIdentityVerifier:
    return FakeIdentityVerifier()


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession, identity_verifier: FakeIdentityVerifier
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache_manager] = lambda: None
    app.dependency_overrides[get_identity_verifier] = lambda: identity_verifier

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user_headers(client: AsyncClient) -> dict:
    """Auth headers for a regular patient."""
    body = await register(client, "patient@clinic.test")
    return bearer(body["token"])


@pytest_asyncio.fixture
async def admin_headers(client: AsyncClient) -> dict:
    """Auth headers for an allowlisted admin."""
    body = await register(client, ADMIN_EMAIL, fullName="Clinic Admin")
    return bearer(body["token"])


@pytest.fixture
def sample_doctor_data() -> dict:
    return {
        "name": "Ayşe",
        "surname": "Yılmaz",
        "title": "Dt.",
        "specialty": "Orthodontics",
        "university": "Istanbul University",
        "experience": "12 years",
        "rating": 4.8,
        "languages": ["Turkish", "English"],
        "availableHours": {"monday": {"start": "09:00", "end": "18:00"}},
    }


@pytest.fixture
def sample_blog_data() -> dict:
    return {
        "title": "Caring for Your Teeth After Whitening",
        "summary": "What to eat and avoid in the first two days.",
        "content": " ".join(["word"] * 450),
        "authorName": "Dt. Ayşe Yılmaz",
        "category": "Oral Health",
        "tags": ["whitening", "aftercare"],
        "isPublished": True,
    }
