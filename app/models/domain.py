from dataclasses import dataclass

from app.models.enums import VerificationFailureReason


@dataclass(frozen=True)
class CodePolicy:
    code_length: int = 6
    ttl_seconds: float = 180
    cooldown_seconds: float = 120
    window_seconds: float = 3600
    max_sends_per_window: int = 5
    max_attempts: int = 5

    @property
    def code_min(self) -> int:
        return 10 ** (self.code_length - 1)

    @property
    def code_max(self) -> int:
        return 10 ** self.code_length - 1


@dataclass
class VerificationRecord:
    """Active code state for one email. Only the digest of the code is kept."""

    code_digest: bytes
    expires_at: float
    attempts: int
    last_sent_at: float
    window_start: float
    window_count: int

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


@dataclass(frozen=True)
class CodeRequestResult:
    ok: bool
    code: str | None = None
    reason: VerificationFailureReason | None = None
    retry_after_seconds: int | None = None

    def __repr__(self) -> str:
        # keep the plaintext code out of logs and tracebacks
        return (
            f"CodeRequestResult(ok={self.ok}, reason={self.reason}, "
            f"retry_after_seconds={self.retry_after_seconds})"
        )


@dataclass(frozen=True)
class CodeVerifyResult:
    ok: bool
    reason: VerificationFailureReason | None = None
    remaining_attempts: int | None = None


@dataclass(frozen=True)
class VerificationEmail:
    subject: str
    text: str
    html: str


@dataclass(frozen=True)
class EmailSendResult:
    ok: bool
    error: str | None = None
