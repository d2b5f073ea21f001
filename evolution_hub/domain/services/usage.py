from __future__ import annotations

from calendar import monthrange
from datetime import datetime, timezone
import math

from evolution_hub.domain.entities.usage import IncrementResult, UsageCounter, UsageOverview


DEFAULT_ROLLING_WINDOW_SECONDS = 24 * 60 * 60


def _utc(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def year_month(now: datetime) -> str:
    current = _utc(now)
    return f"{current.year:04d}{current.month:02d}"


def rolling_daily_key(prefix: str, owner_type: str, owner_id: str) -> str:
    return f"{prefix}:usage:{owner_type}:{owner_id}"


def video_monthly_quota_key(user_id: str, ym: str) -> str:
    return f"ai:quota:video:tenths:{user_id}:{ym}"


def video_monthly_quota_tx_key(user_id: str, ym: str, tx_key: str) -> str:
    return f"ai:quota:video:tx:{user_id}:{ym}:{tx_key}"


def credits_balance_key(user_id: str) -> str:
    return f"ai:credits:tenths:{user_id}"


def credits_consume_key(user_id: str, job_id: str) -> str:
    return f"ai:credits:consume:{user_id}:{job_id}"


def end_of_month_ttl_seconds(now: datetime) -> int:
    current = _utc(now)
    last_day = monthrange(current.year, current.month)[1]
    end = current.replace(day=last_day, hour=23, minute=59, second=59, microsecond=999000)
    return max(1, math.ceil((end - current).total_seconds()))


def next_rolling_window(
    existing: UsageCounter | None,
    *,
    now_ts: int,
    window_seconds: int,
) -> tuple[UsageCounter, int]:
    """Advance a rolling-window counter by one.

    Returns the new counter and the TTL (seconds) the stored value should
    live. A missing or expired counter opens a fresh window at ``now_ts``.
    """
    if window_seconds <= 0:
        raise ValueError("window_seconds must be positive.")

    if existing is None or now_ts >= existing.reset_at:
        return UsageCounter(count=1, reset_at=now_ts + window_seconds), window_seconds

    counter = UsageCounter(count=existing.count + 1, reset_at=existing.reset_at)
    return counter, max(1, existing.reset_at - now_ts)


def current_window_usage(existing: UsageCounter | None, *, now_ts: int) -> UsageCounter | None:
    if existing is None or now_ts >= existing.reset_at:
        return None
    return existing


def increment_with_limit(
    existing: UsageCounter | None,
    *,
    now_ts: int,
    window_seconds: int,
    limit: int,
) -> tuple[IncrementResult, int]:
    """Advance a rolling-window counter unless that would pass ``limit``.

    A refused increment reports the usage as it stands, so the stored count
    never goes above the cap.
    """
    counter, ttl = next_rolling_window(existing, now_ts=now_ts, window_seconds=window_seconds)
    if counter.count <= limit:
        return IncrementResult(allowed=True, usage=counter), ttl

    current = current_window_usage(existing, now_ts=now_ts)
    if current is None:
        current = UsageCounter(count=0, reset_at=now_ts + window_seconds)
    return IncrementResult(allowed=False, usage=current), ttl


def to_usage_overview(*, used: int, limit: int, reset_at: int | None) -> UsageOverview:
    used_value = max(0, int(used))
    limit_value = max(0, int(limit))
    return UsageOverview(
        used=used_value,
        limit=limit_value,
        remaining=max(0, limit_value - used_value),
        reset_at=reset_at,
    )
