import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidSubscriptionModeException
from app.db.repositories import update_subscription_mode
from app.schemas.admin import UpdatePlanRequest

logger = logging.getLogger(__name__)


async def update_plan(session: AsyncSession, request: UpdatePlanRequest) -> None:
    mode = request.mode()
    if mode is None:
        raise InvalidSubscriptionModeException()

    updated = await update_subscription_mode(session, request.user_id, mode.value)
    if updated:
        logger.info("Subscription mode for user %s set to %s", request.user_id, mode.value)
    else:
        logger.warning("Plan update for unknown user %s ignored", request.user_id)
