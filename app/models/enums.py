from enum import Enum


class VerificationFailureReason(str, Enum):
    # issuance
    COOLDOWN = "cooldown"
    TOO_MANY_SENDS = "too_many_sends"
    # verification
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    TOO_MANY_ATTEMPTS = "too_many_attempts"
    INVALID_CODE = "invalid_code"

    @property
    def is_rate_limit(self) -> bool:
        return self in (
            VerificationFailureReason.COOLDOWN,
            VerificationFailureReason.TOO_MANY_SENDS,
            VerificationFailureReason.TOO_MANY_ATTEMPTS,
        )


class SubscriptionMode(str, Enum):
    STARTER = "starter"
    PRO = "pro"
    TOP = "top"
