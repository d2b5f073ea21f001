from __future__ import annotations

from decimal import Decimal

import pytest

from evolution_hub.domain.services.credits import (
    credits_to_tenths,
    tenths_to_credits,
    video_tier_cost_tenths,
    whole_credits,
)


def test_video_tier_costs():
    assert video_tier_cost_tenths("720p") == 50
    assert video_tier_cost_tenths("1080p") == 80


def test_unknown_tier_is_rejected():
    with pytest.raises(ValueError):
        video_tier_cost_tenths("4k")


def test_credits_to_tenths_rounds_half_up():
    assert credits_to_tenths("0.25") == 3
    assert credits_to_tenths(Decimal("1.24")) == 12
    assert credits_to_tenths(2) == 20


def test_credits_to_tenths_rejects_negative():
    with pytest.raises(ValueError):
        credits_to_tenths("-1")


def test_tenths_back_to_credits():
    assert tenths_to_credits(55) == Decimal("5.5")
    assert whole_credits(59) == 5
    assert whole_credits(-3) == 0
