from __future__ import annotations

from evolution_hub.domain.entities.usage import UsageOverview


class DomainError(Exception):
    """Base for domain errors."""


class InvalidOwnerTypeError(DomainError):
    """Owner type is not one of the recognized tags."""


class InvalidFeatureError(DomainError):
    """Feature code is not one of the metered tools."""


class FeatureDisabledError(DomainError):
    """Feature is switched off for this deployment."""


class FeatureAccessDeniedError(DomainError):
    """Owner is not allowed to use the feature."""


class InsufficientQuotaError(DomainError):
    """Monthly plan quota cannot cover the requested charge."""


class InsufficientCreditsError(DomainError):
    """Credit balance cannot cover the requested charge."""


class QuotaExceededError(DomainError):
    """Daily burst cap already reached."""

    def __init__(self, message: str, *, usage: UsageOverview):
        super().__init__(message)
        self.usage = usage


class VideoChargeInputError(DomainError):
    """Invalid parameters for a video job charge."""
