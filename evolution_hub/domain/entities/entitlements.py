from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args


FeatureCode = Literal["video", "voice", "webscraper"]

FEATURE_CODES: tuple[FeatureCode, ...] = get_args(FeatureCode)


def _require_non_negative(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must be non-negative.")


@dataclass(frozen=True)
class VideoEntitlements:
    monthly_credits_tenths: int

    def __post_init__(self) -> None:
        _require_non_negative("monthly_credits_tenths", self.monthly_credits_tenths)


@dataclass(frozen=True)
class VoiceEntitlements:
    daily_burst_cap: int

    def __post_init__(self) -> None:
        _require_non_negative("daily_burst_cap", self.daily_burst_cap)


@dataclass(frozen=True)
class WebscraperEntitlements:
    daily_burst_cap: int

    def __post_init__(self) -> None:
        _require_non_negative("daily_burst_cap", self.daily_burst_cap)


EntitlementRecord = VideoEntitlements | VoiceEntitlements | WebscraperEntitlements
