from __future__ import annotations

from dataclasses import dataclass

from evolution_hub.domain.entities.entitlements import EntitlementRecord, FeatureCode
from evolution_hub.domain.entities.owner import Owner
from evolution_hub.domain.entities.plan import PlanCode
from evolution_hub.domain.entities.usage import UsageOverview


@dataclass(frozen=True)
class ConsumeDailyQuotaInput:
    feature: FeatureCode
    owner: Owner
    plan: PlanCode | None = None


@dataclass(frozen=True)
class GetFeatureUsageInput:
    feature: FeatureCode
    owner: Owner
    plan: PlanCode | None = None


@dataclass(frozen=True)
class FeatureUsageOutput:
    feature: FeatureCode
    owner_type: str
    plan: PlanCode | None
    usage: UsageOverview
    entitlements: EntitlementRecord
