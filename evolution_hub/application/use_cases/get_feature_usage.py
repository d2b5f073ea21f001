from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from evolution_hub.application.dto.usage import FeatureUsageOutput, GetFeatureUsageInput
from evolution_hub.application.ports.usage_store_port import UsageStorePort
from evolution_hub.domain.entities.plan import DEFAULT_PLAN
from evolution_hub.domain.exceptions import InvalidFeatureError
from evolution_hub.domain.services.entitlements import FEATURE_POLICIES
from evolution_hub.domain.services.usage import (
    end_of_month_ttl_seconds,
    rolling_daily_key,
    to_usage_overview,
    video_monthly_quota_key,
    year_month,
)

from .usage_common import utcnow


class GetFeatureUsageUseCase:
    def __init__(
        self,
        *,
        usage_store: UsageStorePort,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._usage_store = usage_store
        self._clock = clock

    def execute(self, command: GetFeatureUsageInput) -> FeatureUsageOutput:
        policy = FEATURE_POLICIES.get(command.feature)
        if policy is None:
            raise InvalidFeatureError(f"Unknown feature '{command.feature}'.")

        owner = command.owner
        entitlements = policy.resolve(owner.owner_type, command.plan)
        plan = None if owner.is_guest else (command.plan or DEFAULT_PLAN)
        now = self._clock()

        if command.feature == "video":
            used = 0
            if not owner.is_guest:
                used = self._usage_store.get_amount(
                    key=video_monthly_quota_key(owner.owner_id, year_month(now))
                )
            usage = to_usage_overview(
                used=used,
                limit=entitlements.monthly_credits_tenths,
                reset_at=int(now.timestamp()) + end_of_month_ttl_seconds(now),
            )
        else:
            now_ts = int(now.timestamp())
            counter = self._usage_store.get_counter(
                key=rolling_daily_key(command.feature, owner.owner_type, owner.owner_id),
                now_ts=now_ts,
            )
            usage = to_usage_overview(
                used=counter.count if counter is not None else 0,
                limit=entitlements.daily_burst_cap,
                reset_at=counter.reset_at if counter is not None else None,
            )

        return FeatureUsageOutput(
            feature=command.feature,
            owner_type=owner.owner_type,
            plan=plan,
            usage=usage,
            entitlements=entitlements,
        )
