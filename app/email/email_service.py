from typing import Protocol

from app.models.domain import EmailSendResult


class EmailService(Protocol):
    def send(self, to: str, subject: str, text: str, html: str) -> EmailSendResult: ...
