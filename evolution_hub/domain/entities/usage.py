from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UsageCounter:
    count: int
    reset_at: int


@dataclass(frozen=True)
class IncrementResult:
    allowed: bool
    usage: UsageCounter


@dataclass(frozen=True)
class UsageOverview:
    used: int
    limit: int
    remaining: int
    reset_at: int | None


@dataclass(frozen=True)
class AmountChange:
    applied: bool
    idempotent: bool
    amount: int
    total: int
