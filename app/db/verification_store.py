"""In-process store of active verification records, keyed by normalized email."""

import threading
import zlib
from collections.abc import Iterator
from contextlib import contextmanager

from app.models.domain import VerificationRecord

LOCK_STRIPES = 64


def normalize_email(email: str) -> str:
    return email.strip().lower()


class InMemoryVerificationStore:
    """Holds at most one record per email.

    Callers wrap read-then-write sequences in ``locked(key)``; records for the
    same email always map to the same lock, so those sequences are serialized
    while other emails proceed on other stripes.
    """

    def __init__(self, stripes: int = LOCK_STRIPES):
        self._records: dict[str, VerificationRecord] = {}
        self._locks = [threading.Lock() for _ in range(stripes)]

    def _lock_for(self, key: str) -> threading.Lock:
        return self._locks[zlib.crc32(key.encode("utf-8")) % len(self._locks)]

    @contextmanager
    def locked(self, key: str) -> Iterator[None]:
        with self._lock_for(key):
            yield

    def get(self, key: str) -> VerificationRecord | None:
        return self._records.get(key)

    def put(self, key: str, record: VerificationRecord) -> None:
        self._records[key] = record

    def delete(self, key: str) -> None:
        self._records.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._records.keys())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: str) -> bool:
        return key in self._records
