from __future__ import annotations

from functools import lru_cache

from evolution_hub.application.use_cases.charge_video_job import ChargeVideoJobUseCase
from evolution_hub.application.use_cases.consume_daily_quota import ConsumeDailyQuotaUseCase
from evolution_hub.application.use_cases.get_feature_entitlements import GetFeatureEntitlementsUseCase
from evolution_hub.application.use_cases.get_feature_usage import GetFeatureUsageUseCase
from evolution_hub.infrastructure.usage.in_memory_usage_store import InMemoryUsageStore
from evolution_hub.shared.config import get_settings


@lru_cache(maxsize=1)
def _get_usage_store() -> InMemoryUsageStore:
    return InMemoryUsageStore()


def get_feature_entitlements_use_case() -> GetFeatureEntitlementsUseCase:
    return GetFeatureEntitlementsUseCase()


def get_consume_daily_quota_use_case() -> ConsumeDailyQuotaUseCase:
    return ConsumeDailyQuotaUseCase(usage_store=_get_usage_store(), settings=get_settings())


def get_feature_usage_use_case() -> GetFeatureUsageUseCase:
    return GetFeatureUsageUseCase(usage_store=_get_usage_store())


def get_charge_video_job_use_case() -> ChargeVideoJobUseCase:
    return ChargeVideoJobUseCase(usage_store=_get_usage_store(), settings=get_settings())
