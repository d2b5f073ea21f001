from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
from threading import Lock
import time

from evolution_hub.domain.entities.usage import AmountChange, IncrementResult, UsageCounter
from evolution_hub.domain.services.usage import current_window_usage, increment_with_limit


logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    value: object
    expires_at: float | None


class InMemoryUsageStore:
    """Process-local usage store with per-key expiry.

    Every read-modify-write runs under a single lock so concurrent handlers
    never lose increments.
    """

    def __init__(self, *, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = Lock()

    def _get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and entry.expires_at <= self._clock():
            self._entries.pop(key, None)
            logger.debug("usage_store_evicted key=%s", key)
            return None
        return entry.value

    def _put(self, key: str, value: object, ttl_seconds: int | None = None) -> None:
        expires_at = None if ttl_seconds is None else self._clock() + max(1, int(ttl_seconds))
        self._entries[key] = _Entry(value=value, expires_at=expires_at)

    def get_counter(self, *, key: str, now_ts: int) -> UsageCounter | None:
        with self._lock:
            value = self._get(key)
        if not isinstance(value, UsageCounter):
            return None
        return current_window_usage(value, now_ts=now_ts)

    def increment_rolling(
        self,
        *,
        key: str,
        now_ts: int,
        window_seconds: int,
        limit: int,
    ) -> IncrementResult:
        with self._lock:
            value = self._get(key)
            existing = value if isinstance(value, UsageCounter) else None
            result, ttl = increment_with_limit(
                existing,
                now_ts=now_ts,
                window_seconds=window_seconds,
                limit=limit,
            )
            if result.allowed:
                self._put(key, result.usage, ttl)
        return result

    def has_key(self, *, key: str) -> bool:
        with self._lock:
            return self._get(key) is not None

    def get_amount(self, *, key: str) -> int:
        with self._lock:
            value = self._get(key)
        return value if isinstance(value, int) and value > 0 else 0

    def add_amount(
        self,
        *,
        key: str,
        amount: int,
        limit: int,
        tx_key: str,
        ttl_seconds: int | None = None,
    ) -> AmountChange:
        amount = max(0, int(amount))
        with self._lock:
            current = self._get(key)
            used = current if isinstance(current, int) and current > 0 else 0
            if self._get(tx_key) is not None:
                return AmountChange(applied=True, idempotent=True, amount=amount, total=used)
            next_total = used + amount
            if next_total > max(0, int(limit)):
                return AmountChange(applied=False, idempotent=False, amount=amount, total=used)
            self._put(key, next_total, ttl_seconds)
            self._put(tx_key, amount, ttl_seconds)
        return AmountChange(applied=True, idempotent=False, amount=amount, total=next_total)

    def deposit_amount(self, *, key: str, amount: int) -> int:
        if amount < 0:
            raise ValueError("amount must be non-negative.")
        with self._lock:
            current = self._get(key)
            balance = (current if isinstance(current, int) else 0) + int(amount)
            self._put(key, balance)
        return balance

    def withdraw_amount(self, *, key: str, amount: int, tx_key: str) -> AmountChange:
        amount = max(0, int(amount))
        with self._lock:
            current = self._get(key)
            balance = current if isinstance(current, int) and current > 0 else 0
            if self._get(tx_key) is not None:
                return AmountChange(applied=True, idempotent=True, amount=amount, total=balance)
            if balance < amount:
                return AmountChange(applied=False, idempotent=False, amount=amount, total=balance)
            remaining = balance - amount
            self._put(key, remaining)
            self._put(tx_key, amount)
        return AmountChange(applied=True, idempotent=False, amount=amount, total=remaining)
