import hmac

from fastapi import APIRouter, Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import get_db
from app.core.exceptions import AdminTokenException
from app.schemas.admin import UpdatePlanRequest
from app.schemas.auth import OkResponse
from app.services import admin_service

router = APIRouter(prefix="/api/admin", tags=["admin"])


def require_admin_token(x_internal_token: str = Header("")) -> None:
    from app.core.config import settings

    if not settings.admin_token or not hmac.compare_digest(
        x_internal_token.encode("utf-8"), settings.admin_token.encode("utf-8")
    ):
        raise AdminTokenException()


@router.post("/update-plan", response_model=OkResponse, dependencies=[Depends(require_admin_token)])
async def update_plan(
    request: UpdatePlanRequest,
    db: AsyncSession = Depends(get_db),
):
    await admin_service.update_plan(db, request)
    return OkResponse()
