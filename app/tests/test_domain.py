"""Tests for domain dataclasses and enums."""

from app.models.domain import CodePolicy, VerificationRecord
from app.models.enums import SubscriptionMode, VerificationFailureReason

# --- CodePolicy ---


def test_code_policy_defaults():
    policy = CodePolicy()
    assert policy.ttl_seconds == 180
    assert policy.cooldown_seconds == 120
    assert policy.window_seconds == 3600
    assert policy.max_sends_per_window == 5
    assert policy.max_attempts == 5


def test_code_policy_range_keeps_all_digits():
    policy = CodePolicy()
    assert policy.code_min == 100000
    assert policy.code_max == 999999


# --- VerificationRecord ---


def _record(expires_at: float) -> VerificationRecord:
    return VerificationRecord(
        code_digest=b"\x00" * 32, expires_at=expires_at, attempts=0,
        last_sent_at=0.0, window_start=0.0, window_count=1,
    )


def test_verification_record_is_expired():
    assert _record(expires_at=100.0).is_expired(100.5) is True


def test_verification_record_not_expired_at_boundary():
    assert _record(expires_at=100.0).is_expired(100.0) is False


# --- Enums ---


def test_rate_limit_reasons():
    assert VerificationFailureReason.COOLDOWN.is_rate_limit
    assert VerificationFailureReason.TOO_MANY_SENDS.is_rate_limit
    assert VerificationFailureReason.TOO_MANY_ATTEMPTS.is_rate_limit
    assert not VerificationFailureReason.INVALID_CODE.is_rate_limit
    assert not VerificationFailureReason.EXPIRED.is_rate_limit


def test_reason_values_are_wire_names():
    assert VerificationFailureReason.TOO_MANY_SENDS.value == "too_many_sends"
    assert SubscriptionMode("pro") is SubscriptionMode.PRO
