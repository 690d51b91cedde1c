"""Entry point for the core library components."""

from __future__ import annotations

from .privacy import (
    AggregatorStateError,
    BaseNoise,
    ConfidenceInterval,
    IncompatibleSummaryError,
    MechanismError,
    MechanismType,
    PrivacyModel,
    SummaryDecodeError,
    ValidationError,
)
from .utils import (
    ParamValidationError,
    RuntimeConfig,
    configure,
    get_config,
    get_logger,
)

__all__ = [
    "AggregatorStateError",
    "BaseNoise",
    "ConfidenceInterval",
    "IncompatibleSummaryError",
    "MechanismError",
    "MechanismType",
    "PrivacyModel",
    "SummaryDecodeError",
    "ValidationError",
    "ParamValidationError",
    "RuntimeConfig",
    "configure",
    "get_config",
    "get_logger",
]
