import logging

from app.models.domain import EmailSendResult

logger = logging.getLogger(__name__)


class ConsoleEmailService:
    """Development sender. Subject and body carry the code, so only the recipient is logged."""

    def send(self, to: str, subject: str, text: str, html: str) -> EmailSendResult:
        logger.info(
            "\n========================================\n"
            "[DEV] Verification email not delivered (console sender)\n"
            "To: %s\n"
            "========================================",
            to,
        )
        return EmailSendResult(ok=True)
