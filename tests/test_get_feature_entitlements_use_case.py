from __future__ import annotations

import pytest

from evolution_hub.application.dto.entitlements import GetFeatureEntitlementsInput
from evolution_hub.application.use_cases.get_feature_entitlements import GetFeatureEntitlementsUseCase
from evolution_hub.domain.entities.entitlements import (
    VideoEntitlements,
    VoiceEntitlements,
    WebscraperEntitlements,
)
from evolution_hub.domain.exceptions import InvalidFeatureError
from evolution_hub.schemas.entitlements import EntitlementQuery


def test_user_plan_is_reported_with_entitlements():
    output = GetFeatureEntitlementsUseCase().execute(
        GetFeatureEntitlementsInput(feature="voice", owner_type="user", plan="enterprise")
    )

    assert output.plan == "enterprise"
    assert output.entitlements == VoiceEntitlements(daily_burst_cap=3000)


def test_user_without_plan_reports_free():
    output = GetFeatureEntitlementsUseCase().execute(
        GetFeatureEntitlementsInput(feature="webscraper", owner_type="user")
    )

    assert output.plan == "free"
    assert output.entitlements == WebscraperEntitlements(daily_burst_cap=20)


def test_guest_reports_no_plan():
    output = GetFeatureEntitlementsUseCase().execute(
        GetFeatureEntitlementsInput(feature="video", owner_type="guest", plan="pro")
    )

    assert output.plan is None
    assert output.entitlements == VideoEntitlements(monthly_credits_tenths=0)


def test_query_from_raw_payload():
    query = EntitlementQuery.model_validate({"feature": "VIDEO", "owner_type": "user", "plan": "unknown"})

    output = GetFeatureEntitlementsUseCase().execute(
        GetFeatureEntitlementsInput(feature=query.feature, owner_type=query.owner_type, plan=query.plan)
    )

    assert output.plan == "free"
    assert output.entitlements == VideoEntitlements(monthly_credits_tenths=0)


def test_unknown_feature_is_rejected():
    with pytest.raises(InvalidFeatureError):
        GetFeatureEntitlementsUseCase().execute(
            GetFeatureEntitlementsInput(feature="image", owner_type="user")  # type: ignore[arg-type]
        )
