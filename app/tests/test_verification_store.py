"""Tests for the in-memory verification store."""

from app.db.verification_store import InMemoryVerificationStore, normalize_email
from app.models.domain import VerificationRecord


def _record() -> VerificationRecord:
    return VerificationRecord(
        code_digest=b"d", expires_at=10.0, attempts=0,
        last_sent_at=0.0, window_start=0.0, window_count=1,
    )


def test_normalize_email_is_idempotent():
    once = normalize_email("  Someone@Example.COM ")
    assert once == "someone@example.com"
    assert normalize_email(once) == once


def test_put_replaces_existing_record():
    store = InMemoryVerificationStore()
    first, second = _record(), _record()
    store.put("a@x.com", first)
    store.put("a@x.com", second)
    assert len(store) == 1
    assert store.get("a@x.com") is second


def test_delete_missing_key_is_noop():
    store = InMemoryVerificationStore()
    store.delete("nobody@x.com")
    assert len(store) == 0


def test_same_key_uses_same_lock():
    store = InMemoryVerificationStore()
    assert store._lock_for("a@x.com") is store._lock_for("a@x.com")


def test_locked_holds_stripe_until_exit():
    store = InMemoryVerificationStore(stripes=1)
    with store.locked("a@x.com"):
        assert store._lock_for("b@x.com").locked()
    assert not store._lock_for("b@x.com").locked()
