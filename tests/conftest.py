import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from typing import AsyncGenerator

import bcrypt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pulse.app import app
from pulse.database import get_db_session
from pulse.models import Base, Conversation, Post, User
from pulse.utils.token.auth.token_util import generate_token


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "securepassword123"


@pytest.fixture
async def engine():
    """Fresh in-memory database for every test."""
    test_engine = create_async_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Async client whose requests each get their own session on the test database."""
    async def _override_get_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_get_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


async def _create_user(session: AsyncSession, name: str, email: str) -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=bcrypt.hashpw(TEST_PASSWORD.encode(), bcrypt.gensalt(rounds=4)).decode(),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user."""
    return await _create_user(db_session, "Alice", "alice@pulse.io")


@pytest.fixture
async def test_user_2(db_session: AsyncSession) -> User:
    """Create a second test user."""
    return await _create_user(db_session, "Bob", "bob@pulse.io")


@pytest.fixture
async def test_user_3(db_session: AsyncSession) -> User:
    """Create a third test user."""
    return await _create_user(db_session, "Carol", "carol@pulse.io")


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Create authorization headers for test user."""
    access_token = generate_token({"user_id": str(test_user.id)})
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def auth_headers_2(test_user_2: User) -> dict:
    """Create authorization headers for second test user."""
    access_token = generate_token({"user_id": str(test_user_2.id)})
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def auth_headers_3(test_user_3: User) -> dict:
    """Create authorization headers for third test user."""
    access_token = generate_token({"user_id": str(test_user_3.id)})
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
async def test_post(db_session: AsyncSession, test_user: User) -> Post:
    """Create a test post owned by test_user."""
    post = Post(content="hello", user_id=test_user.id)
    db_session.add(post)
    await db_session.commit()
    await db_session.refresh(post)
    return post


@pytest.fixture
async def test_post_2(db_session: AsyncSession, test_user_2: User, test_post: Post) -> Post:
    """Create a second, newer test post owned by test_user_2."""
    post = Post(
        content="Sunset at the lake",
        image_url="https://images.pulse.io/lake.jpg",
        user_id=test_user_2.id
    )
    db_session.add(post)
    await db_session.commit()
    await db_session.refresh(post)
    return post


@pytest.fixture
async def test_conversation(db_session: AsyncSession, test_user: User, test_user_2: User) -> Conversation:
    """Create an empty conversation between test_user and test_user_2."""
    conversation = Conversation(participants=[test_user, test_user_2])
    db_session.add(conversation)
    await db_session.commit()
    await db_session.refresh(conversation)
    return conversation
