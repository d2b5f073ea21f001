from __future__ import annotations

from typing import Protocol

from evolution_hub.domain.entities.usage import AmountChange, IncrementResult, UsageCounter


class UsageStorePort(Protocol):
    def get_counter(self, *, key: str, now_ts: int) -> UsageCounter | None:
        ...

    def increment_rolling(
        self,
        *,
        key: str,
        now_ts: int,
        window_seconds: int,
        limit: int,
    ) -> IncrementResult:
        ...

    def has_key(self, *, key: str) -> bool:
        ...

    def get_amount(self, *, key: str) -> int:
        ...

    def add_amount(
        self,
        *,
        key: str,
        amount: int,
        limit: int,
        tx_key: str,
        ttl_seconds: int | None = None,
    ) -> AmountChange:
        ...

    def deposit_amount(self, *, key: str, amount: int) -> int:
        ...

    def withdraw_amount(self, *, key: str, amount: int, tx_key: str) -> AmountChange:
        ...
