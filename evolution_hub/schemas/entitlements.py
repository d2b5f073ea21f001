"""Boundary parsing for entitlement queries.

Raw owner/plan values arrive as untrusted strings. Owner types outside the
closed set are rejected; unknown plans fail closed to the free tier.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from evolution_hub.domain.entities.entitlements import FEATURE_CODES, FeatureCode
from evolution_hub.domain.entities.owner import OWNER_TYPES, OwnerType
from evolution_hub.domain.entities.plan import DEFAULT_PLAN, PLAN_CODES, PlanCode
from evolution_hub.domain.exceptions import InvalidFeatureError, InvalidOwnerTypeError


def parse_owner_type(value: Any) -> OwnerType:
    normalized = str(value).strip().lower() if value is not None else ""
    if normalized not in OWNER_TYPES:
        raise InvalidOwnerTypeError(f"Unknown owner type '{value}'.")
    return normalized  # type: ignore[return-value]


def parse_plan(value: Any) -> PlanCode | None:
    if value is None:
        return None
    normalized = str(value).strip().lower()
    if not normalized:
        return None
    if normalized not in PLAN_CODES:
        return DEFAULT_PLAN
    return normalized  # type: ignore[return-value]


def parse_feature(value: Any) -> FeatureCode:
    normalized = str(value).strip().lower() if value is not None else ""
    if normalized not in FEATURE_CODES:
        raise InvalidFeatureError(f"Unknown feature '{value}'.")
    return normalized  # type: ignore[return-value]


class EntitlementQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    feature: FeatureCode
    owner_type: OwnerType
    plan: PlanCode | None = None

    @field_validator("feature", mode="before")
    @classmethod
    def _normalize_feature(cls, value: Any) -> str:
        try:
            return parse_feature(value)
        except InvalidFeatureError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("owner_type", mode="before")
    @classmethod
    def _normalize_owner_type(cls, value: Any) -> str:
        try:
            return parse_owner_type(value)
        except InvalidOwnerTypeError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("plan", mode="before")
    @classmethod
    def _normalize_plan(cls, value: Any) -> str | None:
        return parse_plan(value)

    @model_validator(mode="before")
    @classmethod
    def _drop_guest_plan(cls, data: Any) -> Any:
        if isinstance(data, dict) and str(data.get("owner_type", "")).strip().lower() == "guest":
            return {**data, "plan": None}
        return data
