"""Entry point for the Centralised Differential Privacy (CDP) package."""

from __future__ import annotations

from .aggregators import (
    AggregationState,
    BoundedSum,
    BoundedSumParams,
    BoundedSumSummary,
)
from .mechanisms import (
    NOISE_REGISTRY,
    GaussianNoise,
    LaplaceNoise,
    create_noise,
    get_noise_class,
    normalize_mechanism,
    registered_mechanisms_snapshot,
)

__all__ = [
    "AggregationState",
    "BoundedSum",
    "BoundedSumParams",
    "BoundedSumSummary",
    "NOISE_REGISTRY",
    "GaussianNoise",
    "LaplaceNoise",
    "create_noise",
    "get_noise_class",
    "normalize_mechanism",
    "registered_mechanisms_snapshot",
]
