"""Plan-tier entitlement tables and the per-feature resolvers.

Each metered feature has one table keyed by plan plus a separate guest row.
Tables are built once at import time and exposed read-only; resolution is a
pure lookup with no I/O.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Generic, TypeVar

from evolution_hub.domain.entities.entitlements import (
    FeatureCode,
    VideoEntitlements,
    VoiceEntitlements,
    WebscraperEntitlements,
)
from evolution_hub.domain.entities.owner import OwnerType
from evolution_hub.domain.entities.plan import DEFAULT_PLAN, PLAN_CODES, PlanCode


RecordT = TypeVar("RecordT")


def _freeze_table(rows: Mapping[PlanCode, RecordT]) -> Mapping[PlanCode, RecordT]:
    missing = [code for code in PLAN_CODES if code not in rows]
    if missing:
        raise ValueError(f"Entitlement table is missing plans: {', '.join(missing)}.")
    unknown = sorted(set(rows) - set(PLAN_CODES))
    if unknown:
        raise ValueError(f"Entitlement table has unknown plans: {', '.join(unknown)}.")
    return MappingProxyType({code: rows[code] for code in PLAN_CODES})


@dataclass(frozen=True)
class EntitlementPolicy(Generic[RecordT]):
    guest: RecordT
    by_plan: Mapping[PlanCode, RecordT]

    @classmethod
    def build(cls, *, guest: RecordT, by_plan: Mapping[PlanCode, RecordT]) -> "EntitlementPolicy[RecordT]":
        return cls(guest=guest, by_plan=_freeze_table(by_plan))

    def resolve(self, owner_type: OwnerType, plan: PlanCode | None = None) -> RecordT:
        # Guests get the fixed ceiling whatever plan the caller passes.
        if owner_type == "guest":
            return self.guest
        effective_plan = DEFAULT_PLAN if plan is None else plan
        return self.by_plan[effective_plan]


# Pro and premium share the same video allowance.
VIDEO_ENTITLEMENTS: EntitlementPolicy[VideoEntitlements] = EntitlementPolicy.build(
    guest=VideoEntitlements(monthly_credits_tenths=0),
    by_plan={
        "free": VideoEntitlements(monthly_credits_tenths=0),
        "pro": VideoEntitlements(monthly_credits_tenths=1000),
        "premium": VideoEntitlements(monthly_credits_tenths=1000),
        "enterprise": VideoEntitlements(monthly_credits_tenths=5000),
    },
)

VOICE_ENTITLEMENTS: EntitlementPolicy[VoiceEntitlements] = EntitlementPolicy.build(
    guest=VoiceEntitlements(daily_burst_cap=30),
    by_plan={
        "free": VoiceEntitlements(daily_burst_cap=60),
        "pro": VoiceEntitlements(daily_burst_cap=600),
        "premium": VoiceEntitlements(daily_burst_cap=1200),
        "enterprise": VoiceEntitlements(daily_burst_cap=3000),
    },
)

WEBSCRAPER_ENTITLEMENTS: EntitlementPolicy[WebscraperEntitlements] = EntitlementPolicy.build(
    guest=WebscraperEntitlements(daily_burst_cap=5),
    by_plan={
        "free": WebscraperEntitlements(daily_burst_cap=20),
        "pro": WebscraperEntitlements(daily_burst_cap=100),
        "premium": WebscraperEntitlements(daily_burst_cap=500),
        "enterprise": WebscraperEntitlements(daily_burst_cap=2000),
    },
)

FEATURE_POLICIES: Mapping[FeatureCode, EntitlementPolicy] = MappingProxyType(
    {
        "video": VIDEO_ENTITLEMENTS,
        "voice": VOICE_ENTITLEMENTS,
        "webscraper": WEBSCRAPER_ENTITLEMENTS,
    }
)


def get_video_entitlements_for(owner_type: OwnerType, plan: PlanCode | None = None) -> VideoEntitlements:
    return VIDEO_ENTITLEMENTS.resolve(owner_type, plan)


def get_voice_entitlements_for(owner_type: OwnerType, plan: PlanCode | None = None) -> VoiceEntitlements:
    return VOICE_ENTITLEMENTS.resolve(owner_type, plan)


def get_webscraper_entitlements_for(
    owner_type: OwnerType,
    plan: PlanCode | None = None,
) -> WebscraperEntitlements:
    return WEBSCRAPER_ENTITLEMENTS.resolve(owner_type, plan)

