from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
import logging
from typing import NoReturn

from evolution_hub.application.dto.usage import ConsumeDailyQuotaInput, FeatureUsageOutput
from evolution_hub.application.ports.usage_store_port import UsageStorePort
from evolution_hub.domain.entities.plan import DEFAULT_PLAN
from evolution_hub.domain.exceptions import InvalidFeatureError, QuotaExceededError
from evolution_hub.domain.services.entitlements import FEATURE_POLICIES
from evolution_hub.domain.services.usage import rolling_daily_key, to_usage_overview
from evolution_hub.shared.config import Settings

from .usage_common import ensure_feature_enabled, utcnow


logger = logging.getLogger(__name__)

DAILY_METERED_FEATURES = frozenset({"voice", "webscraper"})


class ConsumeDailyQuotaUseCase:
    def __init__(
        self,
        *,
        usage_store: UsageStorePort,
        settings: Settings,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._usage_store = usage_store
        self._settings = settings
        self._clock = clock

    def execute(self, command: ConsumeDailyQuotaInput) -> FeatureUsageOutput:
        if command.feature not in DAILY_METERED_FEATURES:
            raise InvalidFeatureError(f"Feature '{command.feature}' is not metered daily.")
        ensure_feature_enabled(self._settings, command.feature)

        owner = command.owner
        entitlements = FEATURE_POLICIES[command.feature].resolve(owner.owner_type, command.plan)
        limit = entitlements.daily_burst_cap
        now_ts = int(self._clock().timestamp())
        key = rolling_daily_key(command.feature, owner.owner_type, owner.owner_id)

        current = self._usage_store.get_counter(key=key, now_ts=now_ts)
        if current is not None and current.count >= limit:
            self._deny(command, current.count, limit, current.reset_at)

        result = self._usage_store.increment_rolling(
            key=key,
            now_ts=now_ts,
            window_seconds=self._settings.usage_rolling_window_seconds,
            limit=limit,
        )
        counter = result.usage
        if not result.allowed:
            self._deny(command, counter.count, limit, counter.reset_at)
        usage = to_usage_overview(used=counter.count, limit=limit, reset_at=counter.reset_at)

        logger.info(
            "daily_quota_consumed feature=%s owner_type=%s owner=%s used=%s limit=%s",
            command.feature,
            owner.owner_type,
            owner.masked_id,
            counter.count,
            limit,
        )
        return FeatureUsageOutput(
            feature=command.feature,
            owner_type=owner.owner_type,
            plan=None if owner.is_guest else (command.plan or DEFAULT_PLAN),
            usage=usage,
            entitlements=entitlements,
        )

    def _deny(self, command: ConsumeDailyQuotaInput, used: int, limit: int, reset_at: int | None) -> NoReturn:
        logger.warning(
            "daily_quota_exceeded feature=%s owner_type=%s owner=%s used=%s limit=%s",
            command.feature,
            command.owner.owner_type,
            command.owner.masked_id,
            used,
            limit,
        )
        usage = to_usage_overview(used=used, limit=limit, reset_at=reset_at)
        raise QuotaExceededError(f"Quota exceeded. Used {used}/{limit}", usage=usage)
