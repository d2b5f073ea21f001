from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
import logging

from evolution_hub.application.dto.video import ChargeVideoJobInput, ChargeVideoJobOutput
from evolution_hub.application.ports.usage_store_port import UsageStorePort
from evolution_hub.domain.exceptions import (
    FeatureAccessDeniedError,
    InsufficientCreditsError,
    InsufficientQuotaError,
    VideoChargeInputError,
)
from evolution_hub.domain.services.credits import tenths_to_credits, video_tier_cost_tenths, whole_credits
from evolution_hub.domain.services.entitlements import get_video_entitlements_for
from evolution_hub.domain.services.usage import (
    credits_balance_key,
    credits_consume_key,
    end_of_month_ttl_seconds,
    video_monthly_quota_key,
    video_monthly_quota_tx_key,
    year_month,
)
from evolution_hub.shared.config import Settings

from .usage_common import ensure_feature_enabled, utcnow


logger = logging.getLogger(__name__)


class ChargeVideoJobUseCase:
    """Charge a video job against purchased credits, then the monthly plan quota.

    Credits are spent first when the balance covers the whole job. Otherwise
    the plan's monthly tenths allowance is used. Both paths are keyed by the
    job id, so retrying a charge never bills twice.
    """

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

    def execute(self, command: ChargeVideoJobInput) -> ChargeVideoJobOutput:
        ensure_feature_enabled(self._settings, "video")
        owner = command.owner
        if owner.is_guest:
            raise FeatureAccessDeniedError("Video generation requires a signed-in user.")
        if not command.job_id:
            raise VideoChargeInputError("job_id is required.")

        try:
            needed_tenths = video_tier_cost_tenths(command.tier)
        except ValueError as exc:
            raise VideoChargeInputError(str(exc)) from exc

        user_id = owner.owner_id
        job_ref = f"ai-video:{command.job_id}"
        now = self._clock()
        ym = year_month(now)
        credits_tx_key = credits_consume_key(user_id, job_ref)
        quota_tx_key = video_monthly_quota_tx_key(user_id, ym, job_ref)

        # A job already charged keeps the path it was charged on.
        if self._usage_store.has_key(key=credits_tx_key):
            use_credits = True
        elif self._usage_store.has_key(key=quota_tx_key):
            use_credits = False
        else:
            balance = self._usage_store.get_amount(key=credits_balance_key(user_id))
            use_credits = balance >= needed_tenths

        if use_credits:
            return self._charge_credits(command, needed_tenths, credits_tx_key)
        return self._charge_quota(command, needed_tenths, quota_tx_key, now)

    def _charge_credits(
        self,
        command: ChargeVideoJobInput,
        needed_tenths: int,
        tx_key: str,
    ) -> ChargeVideoJobOutput:
        owner = command.owner
        change = self._usage_store.withdraw_amount(
            key=credits_balance_key(owner.owner_id),
            amount=needed_tenths,
            tx_key=tx_key,
        )
        if not change.applied:
            raise InsufficientCreditsError("insufficient_credits")
        logger.info(
            "video_charge path=credits owner=%s job=%s tenths=%s idempotent=%s",
            owner.masked_id,
            command.job_id,
            needed_tenths,
            change.idempotent,
        )
        return ChargeVideoJobOutput(
            job_id=command.job_id,
            charge_path="credits",
            credits_charged=tenths_to_credits(needed_tenths),
            charged_tenths=needed_tenths,
            credits_balance=whole_credits(change.total),
            quota_remaining_tenths=None,
            idempotent=change.idempotent,
        )

    def _charge_quota(
        self,
        command: ChargeVideoJobInput,
        needed_tenths: int,
        tx_key: str,
        now: datetime,
    ) -> ChargeVideoJobOutput:
        owner = command.owner
        limit_tenths = get_video_entitlements_for("user", command.plan).monthly_credits_tenths
        change = self._usage_store.add_amount(
            key=video_monthly_quota_key(owner.owner_id, year_month(now)),
            amount=needed_tenths,
            limit=limit_tenths,
            tx_key=tx_key,
            ttl_seconds=end_of_month_ttl_seconds(now),
        )
        if not change.applied:
            logger.warning(
                "video_charge_denied owner=%s job=%s needed=%s used=%s limit=%s",
                owner.masked_id,
                command.job_id,
                needed_tenths,
                change.total,
                limit_tenths,
            )
            raise InsufficientQuotaError("insufficient_quota")

        logger.info(
            "video_charge path=quota owner=%s job=%s tenths=%s idempotent=%s",
            owner.masked_id,
            command.job_id,
            needed_tenths,
            change.idempotent,
        )
        return ChargeVideoJobOutput(
            job_id=command.job_id,
            charge_path="quota",
            credits_charged=Decimal("0"),
            charged_tenths=needed_tenths,
            credits_balance=None,
            quota_remaining_tenths=max(0, limit_tenths - change.total),
            idempotent=change.idempotent,
        )
