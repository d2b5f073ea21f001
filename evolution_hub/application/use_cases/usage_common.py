from __future__ import annotations

from datetime import datetime, timezone

from evolution_hub.domain.exceptions import FeatureDisabledError
from evolution_hub.shared.config import Settings


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_feature_enabled(settings: Settings, feature: str) -> None:
    if not settings.is_feature_enabled(feature):
        raise FeatureDisabledError(f"feature.disabled.{feature}")
