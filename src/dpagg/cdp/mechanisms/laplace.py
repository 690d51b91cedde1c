"""
Laplace noise for pure differential privacy.

Responsibilities:
    * calibrate the Laplace scale from epsilon and the L1 sensitivity
    * add Laplace noise to scalar aggregates
    * derive symmetric confidence intervals from the Laplace tail
"""
# 说明：实现纯 ε-DP 的拉普拉斯噪声。
# 主要职责：
# 1) 由 L0 与 LInf 敏感度得到 L1 敏感度 Δ1 = l0 * linf，尺度 b = Δ1 / ε
# 2) 对标量加噪；δ 必须缺省（None）
# 3) 置信区间：P(|X| > z) = exp(-z / b) = alpha => z = b * ln(1 / alpha)

from __future__ import annotations

import math
from typing import Any, Optional

from dpagg.core.privacy.base_mechanism import BaseNoise, ValidationError
from dpagg.core.privacy.interval import ConfidenceInterval
from dpagg.core.privacy.privacy_model import MechanismType
from dpagg.core.utils.math_utils import l1_sensitivity
from dpagg.core.utils.random import sample_noise


class LaplaceNoise(BaseNoise):
    """Pure (epsilon, 0)-DP Laplace mechanism."""

    def __init__(self, rng: Optional[Any] = None, name: Optional[str] = None):
        super().__init__(rng=rng, name=name)

    @property
    def mechanism_type(self) -> MechanismType:
        return MechanismType.LAPLACE

    def scale(self, l0_sensitivity: int, l_inf_sensitivity: float, epsilon: float) -> float:
        """Laplace scale ``b = l0 * l_inf / epsilon``."""
        try:
            l1 = l1_sensitivity(l0_sensitivity, l_inf_sensitivity)
        except OverflowError as exc:
            raise ValidationError(str(exc)) from exc
        return l1 / epsilon

    def add_noise(
        self,
        value: float,
        l0_sensitivity: int,
        l_inf_sensitivity: float,
        epsilon: float,
        delta: Optional[float] = None,
    ) -> float:
        self._check_parameters(l0_sensitivity, l_inf_sensitivity, epsilon, delta)
        x = self._validate_value(value)
        b = self.scale(l0_sensitivity, l_inf_sensitivity, epsilon)
        return float(x + sample_noise(self._rng, "laplace", scale=b))

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
        z = self.scale(l0_sensitivity, l_inf_sensitivity, epsilon) * math.log(1.0 / alpha)
        return ConfidenceInterval(x - z, x + z)

    def variance(
        self,
        l0_sensitivity: int,
        l_inf_sensitivity: float,
        epsilon: float,
        delta: Optional[float] = None,
    ) -> float:
        self._check_parameters(l0_sensitivity, l_inf_sensitivity, epsilon, delta)
        b = self.scale(l0_sensitivity, l_inf_sensitivity, epsilon)
        return 2.0 * b * b
