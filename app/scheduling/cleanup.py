import asyncio
import logging

from app.services.code_verification_service import CodeVerificationService

logger = logging.getLogger(__name__)


async def start_cleanup_scheduler(verifier: CodeVerificationService, interval_seconds: float):
    while True:
        try:
            await asyncio.sleep(interval_seconds)
            removed = verifier.purge_expired()
            logger.debug("Cleaned up %d expired verification records", removed)
        except asyncio.CancelledError:
            break
        except Exception:
            logger.exception("Error during verification cleanup")
