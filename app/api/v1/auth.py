from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import get_db, get_email_service, get_verification_service
from app.email.email_service import EmailService
from app.schemas.auth import OkResponse, SendCodeRequest, VerifyCodeRequest
from app.services import email_verification_service
from app.services.code_verification_service import CodeVerificationService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/send-code", response_model=OkResponse)
async def send_code(
    request: SendCodeRequest,
    db: AsyncSession = Depends(get_db),
    verifier: CodeVerificationService = Depends(get_verification_service),
    email_service: EmailService | None = Depends(get_email_service),
):
    await email_verification_service.send_verification_code(
        db, verifier, email_service, request.email
    )
    return OkResponse()


@router.post("/verify-code", response_model=OkResponse)
async def verify_code(
    request: VerifyCodeRequest,
    verifier: CodeVerificationService = Depends(get_verification_service),
):
    await email_verification_service.verify_code(verifier, request.email, request.code)
    return OkResponse()
