"""One-time email verification codes: issuance, rate limiting and validation."""

import hashlib
import hmac
import logging
import math
import secrets
import time
from collections.abc import Callable

from app.core.config import Settings
from app.db.verification_store import InMemoryVerificationStore, normalize_email
from app.models.domain import CodePolicy, CodeRequestResult, CodeVerifyResult, VerificationRecord
from app.models.enums import VerificationFailureReason

logger = logging.getLogger(__name__)


def policy_from_settings(settings: Settings) -> CodePolicy:
    return CodePolicy(
        code_length=settings.code_length,
        ttl_seconds=settings.code_ttl_seconds,
        cooldown_seconds=settings.code_send_cooldown_seconds,
        window_seconds=settings.code_send_window_seconds,
        max_sends_per_window=settings.code_max_sends_per_window,
        max_attempts=settings.code_max_verify_attempts,
    )


class CodeVerificationService:
    """Issues and checks short numeric codes per email address.

    Expected outcomes (cooldown, quota, expiry, mismatch...) come back as
    result objects; nothing here raises for them. All mutations of a record
    happen under that email's store lock.
    """

    def __init__(
        self,
        store: InMemoryVerificationStore,
        policy: CodePolicy | None = None,
        *,
        secret: str = "",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store = store
        self._policy = policy or CodePolicy()
        self._secret = secret
        self._clock = clock

    @property
    def policy(self) -> CodePolicy:
        return self._policy

    @property
    def store(self) -> InMemoryVerificationStore:
        return self._store

    def _generate_code(self) -> str:
        span = self._policy.code_max - self._policy.code_min + 1
        return str(secrets.randbelow(span) + self._policy.code_min)

    def _digest(self, key: str, code: str) -> bytes:
        return hashlib.sha256(f"{self._secret}:{key}:{code}".encode("utf-8")).digest()

    def request_code(self, email: str) -> CodeRequestResult:
        key = normalize_email(email)
        policy = self._policy

        with self._store.locked(key):
            now = self._clock()
            record = self._store.get(key)

            if record is None:
                code = self._generate_code()
                self._store.put(key, VerificationRecord(
                    code_digest=self._digest(key, code),
                    expires_at=now + policy.ttl_seconds,
                    attempts=0,
                    last_sent_at=now,
                    window_start=now,
                    window_count=1,
                ))
                logger.info("Verification code issued (window 1/%d)", policy.max_sends_per_window)
                return CodeRequestResult(ok=True, code=code)

            elapsed = now - record.last_sent_at
            if elapsed < policy.cooldown_seconds:
                retry_after = math.ceil(policy.cooldown_seconds - elapsed)
                logger.info("Verification code refused: cooldown, retry in %ds", retry_after)
                return CodeRequestResult(
                    ok=False,
                    reason=VerificationFailureReason.COOLDOWN,
                    retry_after_seconds=retry_after,
                )

            window_start = record.window_start
            window_count = record.window_count
            if now - window_start > policy.window_seconds:
                window_start = now
                window_count = 0

            if window_count >= policy.max_sends_per_window:
                retry_after = max(math.ceil(window_start + policy.window_seconds - now), 1)
                logger.info("Verification code refused: send quota exhausted, retry in %ds", retry_after)
                return CodeRequestResult(
                    ok=False,
                    reason=VerificationFailureReason.TOO_MANY_SENDS,
                    retry_after_seconds=retry_after,
                )

            code = self._generate_code()
            record.code_digest = self._digest(key, code)
            record.attempts = 0
            record.expires_at = now + policy.ttl_seconds
            record.last_sent_at = now
            record.window_start = window_start
            record.window_count = window_count + 1
            logger.info(
                "Verification code reissued (window %d/%d)",
                record.window_count, policy.max_sends_per_window,
            )
            return CodeRequestResult(ok=True, code=code)

    def verify_code(self, email: str, code: str) -> CodeVerifyResult:
        key = normalize_email(email)
        policy = self._policy

        with self._store.locked(key):
            now = self._clock()
            record = self._store.get(key)

            if record is None:
                return CodeVerifyResult(ok=False, reason=VerificationFailureReason.NOT_FOUND)

            if record.is_expired(now):
                self._store.delete(key)
                return CodeVerifyResult(ok=False, reason=VerificationFailureReason.EXPIRED)

            if record.attempts >= policy.max_attempts:
                return CodeVerifyResult(ok=False, reason=VerificationFailureReason.TOO_MANY_ATTEMPTS)

            if hmac.compare_digest(self._digest(key, code), record.code_digest):
                self._store.delete(key)
                logger.info("Verification code accepted")
                return CodeVerifyResult(ok=True)

            record.attempts += 1
            remaining = max(policy.max_attempts - record.attempts, 0)
            logger.info("Verification code mismatch, %d attempts remaining", remaining)
            return CodeVerifyResult(
                ok=False,
                reason=VerificationFailureReason.INVALID_CODE,
                remaining_attempts=remaining,
            )

    def purge_expired(self) -> int:
        """Drop records whose code has expired and whose send window has closed.

        Records still inside their send window are kept so their quota keeps
        counting. Returns the number of records removed.
        """
        removed = 0
        for key in self._store.keys():
            with self._store.locked(key):
                record = self._store.get(key)
                if record is None:
                    continue
                now = self._clock()
                window_closed = now - record.window_start > self._policy.window_seconds
                if record.is_expired(now) and window_closed:
                    self._store.delete(key)
                    removed += 1
        return removed
