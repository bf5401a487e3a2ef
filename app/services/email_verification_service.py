import logging

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.exceptions import (
    AccountAlreadyExistsException,
    CodeCooldownException,
    EmailDeliveryException,
    EmailProviderNotConfiguredException,
    IncorrectVerificationCodeException,
    TooManyCodeRequestsException,
    VerificationExpiredException,
)
from app.db.repositories import exists_active_account_by_email
from app.email.console_email_service import ConsoleEmailService
from app.email.email_service import EmailService
from app.email.resend_email_service import ResendEmailService
from app.email.templates import build_verification_email
from app.models.enums import VerificationFailureReason
from app.services.code_verification_service import CodeVerificationService

logger = logging.getLogger(__name__)


def get_email_service() -> EmailService | None:
    """Mail sender for the current environment, or None when prod has no provider key."""
    if settings.environment == "prod":
        if not settings.resend_api_key:
            return None
        return ResendEmailService()
    return ConsoleEmailService()


async def send_verification_code(
    session: AsyncSession,
    verifier: CodeVerificationService,
    email_service: EmailService | None,
    email: str,
) -> None:
    if await exists_active_account_by_email(session, email):
        raise AccountAlreadyExistsException()

    if email_service is None:
        logger.error("Verification code requested but no email provider is configured")
        raise EmailProviderNotConfiguredException()

    result = verifier.request_code(email)
    if not result.ok:
        if result.reason == VerificationFailureReason.COOLDOWN:
            raise CodeCooldownException(result.retry_after_seconds)
        raise TooManyCodeRequestsException(result.retry_after_seconds)

    message = build_verification_email(
        result.code, verifier.policy.ttl_seconds, settings.app_brand_name
    )
    sent = await run_in_threadpool(
        email_service.send, email, message.subject, message.text, message.html
    )
    if not sent.ok:
        raise EmailDeliveryException(sent.error or "Failed to send code")


async def verify_code(verifier: CodeVerificationService, email: str, code: str) -> None:
    result = verifier.verify_code(email, code)
    if result.ok:
        return

    if result.reason == VerificationFailureReason.EXPIRED:
        raise VerificationExpiredException()

    # not_found / invalid_code / too_many_attempts look the same to the caller
    logger.info("Verification failed: %s", result.reason.value)
    raise IncorrectVerificationCodeException()
