from __future__ import annotations

import pytest
from pydantic import ValidationError

from evolution_hub.domain.exceptions import InvalidFeatureError, InvalidOwnerTypeError
from evolution_hub.schemas.entitlements import (
    EntitlementQuery,
    parse_feature,
    parse_owner_type,
    parse_plan,
)


def test_parse_owner_type_normalizes_case_and_whitespace():
    assert parse_owner_type(" User ") == "user"
    assert parse_owner_type("GUEST") == "guest"


@pytest.mark.parametrize("value", ["admin", "", None, "users"])
def test_parse_owner_type_rejects_unknown_values(value):
    with pytest.raises(InvalidOwnerTypeError):
        parse_owner_type(value)


def test_parse_plan_accepts_known_tags():
    assert parse_plan("Premium") == "premium"
    assert parse_plan("enterprise") == "enterprise"


def test_parse_plan_treats_blank_as_missing():
    assert parse_plan(None) is None
    assert parse_plan("   ") is None


def test_parse_plan_fails_closed_to_free():
    assert parse_plan("platinum") == "free"
    assert parse_plan(42) == "free"


def test_parse_feature_rejects_unknown_tool():
    assert parse_feature("WebScraper") == "webscraper"
    with pytest.raises(InvalidFeatureError):
        parse_feature("image")


def test_query_normalizes_payload():
    query = EntitlementQuery.model_validate({"feature": "Voice", "owner_type": " USER ", "plan": "PRO"})

    assert query.feature == "voice"
    assert query.owner_type == "user"
    assert query.plan == "pro"


def test_query_unknown_plan_falls_back_to_free():
    query = EntitlementQuery(feature="video", owner_type="user", plan="gold")

    assert query.plan == "free"


def test_query_drops_plan_for_guest():
    query = EntitlementQuery(feature="webscraper", owner_type="guest", plan="enterprise")

    assert query.owner_type == "guest"
    assert query.plan is None


def test_query_rejects_unknown_owner_type():
    with pytest.raises(ValidationError):
        EntitlementQuery(feature="voice", owner_type="robot")


def test_query_rejects_unknown_feature():
    with pytest.raises(ValidationError):
        EntitlementQuery(feature="prompt", owner_type="user")


def test_query_is_frozen():
    query = EntitlementQuery(feature="voice", owner_type="user")

    with pytest.raises(ValidationError):
        query.plan = "pro"
