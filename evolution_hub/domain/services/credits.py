from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Literal, get_args


VideoTier = Literal["720p", "1080p"]

VIDEO_TIERS: tuple[VideoTier, ...] = get_args(VideoTier)

VIDEO_TIER_CREDITS = MappingProxyType(
    {
        "720p": Decimal("5"),
        "1080p": Decimal("8"),
    }
)

TENTHS_PER_CREDIT = Decimal("10")


def credits_to_tenths(credits: Decimal | int | str) -> int:
    value = Decimal(str(credits))
    if value < 0:
        raise ValueError("credits must be non-negative.")
    return int((value * TENTHS_PER_CREDIT).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def tenths_to_credits(tenths: int) -> Decimal:
    return Decimal(int(tenths)) / TENTHS_PER_CREDIT


def whole_credits(tenths: int) -> int:
    return max(0, int(tenths)) // 10


def video_tier_cost_tenths(tier: str) -> int:
    if tier not in VIDEO_TIERS:
        raise ValueError(f"Unknown video tier '{tier}'.")
    return credits_to_tenths(VIDEO_TIER_CREDITS[tier])
