"""Shared test fixtures for Zanari backend tests."""

import re
from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.api.v1.deps import get_db, get_email_service, get_verification_service
from app.db.verification_store import InMemoryVerificationStore
from app.models.account import Account, Base
from app.models.domain import CodePolicy, EmailSendResult
from app.services.code_verification_service import CodeVerificationService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
ADMIN_TOKEN = "test-admin-token"

_SUBJECT_CODE = re.compile(r"(\d{6})$")


class FakeClock:
    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingEmailService:
    def __init__(self, ok: bool = True, error: str | None = None):
        self.ok = ok
        self.error = error
        self.sent: list[dict] = []

    def send(self, to: str, subject: str, text: str, html: str) -> EmailSendResult:
        self.sent.append({"to": to, "subject": subject, "text": text, "html": html})
        if not self.ok:
            return EmailSendResult(ok=False, error=self.error)
        return EmailSendResult(ok=True)

    def last_code(self) -> str:
        return _SUBJECT_CODE.search(self.sent[-1]["subject"]).group(1)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryVerificationStore:
    return InMemoryVerificationStore()


@pytest.fixture
def verifier(store, clock) -> CodeVerificationService:
    return CodeVerificationService(store, CodePolicy(), clock=clock)


@pytest.fixture
def outbox() -> RecordingEmailService:
    return RecordingEmailService()


@pytest.fixture
def failing_outbox() -> RecordingEmailService:
    return RecordingEmailService(ok=False, error="Domain not verified")


@pytest.fixture
async def test_engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


def _override_db(test_engine):
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    return override_get_db


@pytest.fixture
async def test_app(test_engine, verifier, outbox):
    from app.main import app

    app.dependency_overrides[get_db] = _override_db(test_engine)
    app.dependency_overrides[get_verification_service] = lambda: verifier
    app.dependency_overrides[get_email_service] = lambda: outbox
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_token() -> str:
    return ADMIN_TOKEN


@pytest.fixture
async def admin_client(test_engine, admin_token, monkeypatch) -> AsyncGenerator[AsyncClient, None]:
    from app.api.v1.admin import router as admin_router
    from app.core.config import settings
    from app.core.exceptions import register_exception_handlers

    monkeypatch.setattr(settings, "admin_token", admin_token)
    admin_app = FastAPI()
    register_exception_handlers(admin_app)
    admin_app.include_router(admin_router)
    admin_app.dependency_overrides[get_db] = _override_db(test_engine)

    transport = ASGITransport(app=admin_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def created_account(test_session: AsyncSession) -> Account:
    account = Account(email="taken@example.com", subscription_mode="starter")
    test_session.add(account)
    await test_session.commit()
    await test_session.refresh(account)
    return account
