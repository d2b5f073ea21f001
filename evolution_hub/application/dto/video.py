from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from evolution_hub.domain.entities.owner import Owner
from evolution_hub.domain.entities.plan import PlanCode
from evolution_hub.domain.services.credits import VideoTier


ChargePath = Literal["credits", "quota"]


@dataclass(frozen=True)
class ChargeVideoJobInput:
    owner: Owner
    tier: VideoTier
    job_id: str
    plan: PlanCode | None = None


@dataclass(frozen=True)
class ChargeVideoJobOutput:
    job_id: str
    charge_path: ChargePath
    credits_charged: Decimal
    charged_tenths: int
    credits_balance: int | None
    quota_remaining_tenths: int | None
    idempotent: bool
