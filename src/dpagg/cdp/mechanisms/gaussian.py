"""
Gaussian noise for approximate differential privacy.

Responsibilities:
    * calibrate sigma from epsilon, delta and the L2 sensitivity using the
      analytic Gaussian mechanism (Balle & Wang, 2018)
    * add Gaussian noise to scalar aggregates
    * derive symmetric confidence intervals from the normal quantile
"""
# 说明：实现 (ε, δ)-DP 的解析高斯机制。
# 职责：
# - L2 敏感度 Δ2 = sqrt(l0) * linf
# - σ 取满足 Φ(Δ2/(2σ) − εσ/Δ2) − e^ε Φ(−Δ2/(2σ) − εσ/Δ2) <= δ 的最小值（倍增 + 二分）
# - e^ε Φ(·) 在对数空间计算，避免 ε 较大时 exp 溢出
# - 置信区间：value ± Φ⁻¹(1 − alpha/2) · σ

from __future__ import annotations

import functools
import math
from typing import Any, Optional

from scipy.stats import norm

from dpagg.core.privacy.base_mechanism import BaseNoise, ValidationError
from dpagg.core.privacy.interval import ConfidenceInterval
from dpagg.core.privacy.privacy_model import MechanismType
from dpagg.core.utils.math_utils import l2_sensitivity
from dpagg.core.utils.random import sample_noise

_BISECTION_STEPS = 200
_RELATIVE_TOLERANCE = 1e-12


def _privacy_loss_delta(sigma: float, l2: float, epsilon: float) -> float:
    """Smallest delta for which N(0, sigma^2) noise is (epsilon, delta)-DP."""
    a = l2 / (2.0 * sigma)
    b = epsilon * sigma / l2
    return float(norm.cdf(a - b) - math.exp(epsilon + norm.logcdf(-a - b)))


@functools.lru_cache(maxsize=256)
def analytic_gaussian_sigma(l2: float, epsilon: float, delta: float) -> float:
    """Return the smallest sigma satisfying the analytic Gaussian condition."""
    upper = l2
    while _privacy_loss_delta(upper, l2, epsilon) > delta:
        upper *= 2.0
        if not math.isfinite(upper):
            raise ValidationError("gaussian sigma is not representable for these parameters")
    lower = 0.0
    for _ in range(_BISECTION_STEPS):
        if upper - lower <= _RELATIVE_TOLERANCE * upper:
            break
        mid = 0.5 * (lower + upper)
        if _privacy_loss_delta(mid, l2, epsilon) > delta:
            lower = mid
        else:
            upper = mid
    # upper 始终满足隐私约束，返回它以保证不低估噪声
    return upper


class GaussianNoise(BaseNoise):
    """(epsilon, delta)-DP Gaussian mechanism with analytic calibration."""

    def __init__(self, rng: Optional[Any] = None, name: Optional[str] = None):
        super().__init__(rng=rng, name=name)

    @property
    def mechanism_type(self) -> MechanismType:
        return MechanismType.GAUSSIAN

    def sigma(self, l0_sensitivity: int, l_inf_sensitivity: float, epsilon: float, delta: float) -> float:
        try:
            l2 = l2_sensitivity(l0_sensitivity, l_inf_sensitivity)
        except OverflowError as exc:
            raise ValidationError(str(exc)) from exc
        return analytic_gaussian_sigma(l2, float(epsilon), float(delta))

    def add_noise(
        self,
        value: float,
        l0_sensitivity: int,
        l_inf_sensitivity: float,
        epsilon: float,
        delta: Optional[float],
    ) -> float:
        self._check_parameters(l0_sensitivity, l_inf_sensitivity, epsilon, delta)
        x = self._validate_value(value)
        sigma = self.sigma(l0_sensitivity, l_inf_sensitivity, epsilon, delta)
        return float(x + sample_noise(self._rng, "gaussian", scale=sigma))

    def compute_confidence_interval(
        self,
        value: float,
        l0_sensitivity: int,
        l_inf_sensitivity: float,
        epsilon: float,
        delta: Optional[float],
        alpha: float,
    ) -> ConfidenceInterval:
        self._check_parameters(l0_sensitivity, l_inf_sensitivity, epsilon, delta)
        self._validate_alpha(alpha)
        x = self._validate_value(value)
        sigma = self.sigma(l0_sensitivity, l_inf_sensitivity, epsilon, delta)
        z = float(norm.ppf(1.0 - alpha / 2.0)) * sigma
        return ConfidenceInterval(x - z, x + z)

    def variance(
        self,
        l0_sensitivity: int,
        l_inf_sensitivity: float,
        epsilon: float,
        delta: Optional[float],
    ) -> float:
        self._check_parameters(l0_sensitivity, l_inf_sensitivity, epsilon, delta)
        sigma = self.sigma(l0_sensitivity, l_inf_sensitivity, epsilon, delta)
        return sigma * sigma
