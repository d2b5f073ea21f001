from __future__ import annotations

from evolution_hub.application.dto.entitlements import (
    FeatureEntitlementsOutput,
    GetFeatureEntitlementsInput,
)
from evolution_hub.domain.entities.plan import DEFAULT_PLAN
from evolution_hub.domain.exceptions import InvalidFeatureError
from evolution_hub.domain.services.entitlements import FEATURE_POLICIES


class GetFeatureEntitlementsUseCase:
    def execute(self, command: GetFeatureEntitlementsInput) -> FeatureEntitlementsOutput:
        policy = FEATURE_POLICIES.get(command.feature)
        if policy is None:
            raise InvalidFeatureError(f"Unknown feature '{command.feature}'.")

        if command.owner_type == "guest":
            plan = None
        else:
            plan = command.plan if command.plan is not None else DEFAULT_PLAN

        return FeatureEntitlementsOutput(
            feature=command.feature,
            owner_type=command.owner_type,
            plan=plan,
            entitlements=policy.resolve(command.owner_type, command.plan),
        )
