import logging

import resend
from resend.exceptions import ResendError

from app.core.config import settings
from app.models.domain import EmailSendResult

logger = logging.getLogger(__name__)

DEFAULT_SEND_ERROR = "Failed to send code"


class ResendEmailService:
    def __init__(self, api_key: str | None = None, sender: str | None = None):
        resend.api_key = api_key or settings.resend_api_key
        self._sender = sender or settings.app_email_sender

    def send(self, to: str, subject: str, text: str, html: str) -> EmailSendResult:
        try:
            resend.Emails.send(
                {
                    "from": self._sender,
                    "to": to,
                    "subject": subject,
                    "text": text,
                    "html": html,
                }
            )
        except ResendError as e:
            logger.error("Resend rejected verification email to %s: %s", to, e.error_type)
            message = (e.message or "").strip() or DEFAULT_SEND_ERROR
            return EmailSendResult(ok=False, error=message)
        except Exception as e:
            logger.error("Failed to send verification email to %s: %s", to, type(e).__name__)
            return EmailSendResult(ok=False, error=DEFAULT_SEND_ERROR)

        logger.info("Verification email sent to %s", to)
        return EmailSendResult(ok=True)
