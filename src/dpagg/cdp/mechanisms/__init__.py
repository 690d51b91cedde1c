"""Additive noise mechanisms consumed by the CDP aggregators."""
from .laplace import LaplaceNoise
from .gaussian import GaussianNoise, analytic_gaussian_sigma
from .mechanism_registry import (
    NOISE_REGISTRY,
    get_noise_class,
    normalize_mechanism,
    registered_mechanisms_snapshot,
)
from .mechanism_factory import create_noise

__all__ = [
    "LaplaceNoise",
    "GaussianNoise",
    "analytic_gaussian_sigma",
    "NOISE_REGISTRY",
    "normalize_mechanism",
    "get_noise_class",
    "registered_mechanisms_snapshot",
    "create_noise",
]
