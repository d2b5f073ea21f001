from __future__ import annotations

from typing import Literal, get_args


PlanCode = Literal["free", "pro", "premium", "enterprise"]

PLAN_CODES: tuple[PlanCode, ...] = get_args(PlanCode)
DEFAULT_PLAN: PlanCode = "free"
