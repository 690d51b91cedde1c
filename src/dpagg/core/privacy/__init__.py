"""Core privacy abstractions and shared exceptions."""
from .base_mechanism import (
    BaseNoise,
    MechanismError,
    ValidationError,
    IncompatibleSummaryError,
    SummaryDecodeError,
    AggregatorStateError,
)
from .interval import ConfidenceInterval
from .privacy_model import (
    MechanismType,
    PrivacyModel,
    mechanism_default_model,
    requires_delta,
)

__all__ = [
    "BaseNoise",
    "MechanismError",
    "ValidationError",
    "IncompatibleSummaryError",
    "SummaryDecodeError",
    "AggregatorStateError",
    "ConfidenceInterval",
    "MechanismType",
    "PrivacyModel",
    "mechanism_default_model",
    "requires_delta",
]
