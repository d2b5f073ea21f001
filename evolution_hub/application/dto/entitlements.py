from __future__ import annotations

from dataclasses import dataclass

from evolution_hub.domain.entities.entitlements import EntitlementRecord, FeatureCode
from evolution_hub.domain.entities.owner import OwnerType
from evolution_hub.domain.entities.plan import PlanCode


@dataclass(frozen=True)
class GetFeatureEntitlementsInput:
    feature: FeatureCode
    owner_type: OwnerType
    plan: PlanCode | None = None


@dataclass(frozen=True)
class FeatureEntitlementsOutput:
    feature: FeatureCode
    owner_type: OwnerType
    plan: PlanCode | None
    entitlements: EntitlementRecord
