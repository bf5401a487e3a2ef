from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_async_session
from app.email.email_service import EmailService
from app.services import email_verification_service
from app.services.code_verification_service import CodeVerificationService


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_async_session():
        yield session


def get_verification_service(request: Request) -> CodeVerificationService:
    return request.app.state.verification_service


def get_email_service() -> EmailService | None:
    return email_verification_service.get_email_service()
