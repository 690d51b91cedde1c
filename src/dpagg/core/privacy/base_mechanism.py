"""
Core abstractions shared by every noise mechanism implementation.

Responsibilities:
    * purpose specific exceptions (configuration, lifecycle, merge, decoding)
    * common parameter validation and RNG management
    * the capability interface the aggregators consume
      (add_noise / compute_confidence_interval / mechanism_type)
"""
# 说明：定义本库所有噪声机制共享的抽象基类与异常类型。
# 职责：
# - 异常分类：配置错误（ValidationError）、生命周期错误（AggregatorStateError）、
#   合并不兼容（IncompatibleSummaryError）、摘要解码失败（SummaryDecodeError）
# - 通用参数校验（ε、δ、L0/LInf 敏感度、显著性水平 alpha）与 RNG 管理
# - 聚合器只依赖 BaseNoise 的能力接口，不对具体机制类型分支

from __future__ import annotations

import math
import numbers
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

import numpy as np

from dpagg.core.privacy.privacy_model import MechanismType, delta_error
from dpagg.core.utils.config import get_config

if TYPE_CHECKING:
    from dpagg.core.privacy.interval import ConfidenceInterval


# Exceptions -----------------------------------------------------------------
class MechanismError(Exception):
    """Base exception for library errors."""


class ValidationError(MechanismError):
    """Raised when input parameters or configuration are invalid."""


class IncompatibleSummaryError(ValidationError):
    """Raised when a merged summary was produced under a different configuration."""

    def __init__(self, field: str, expected: Any, actual: Any):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"cannot merge summary: {field} mismatch (aggregator has {expected!r}, summary has {actual!r})"
        )


class SummaryDecodeError(ValidationError):
    """Raised when a serialized summary cannot be decoded."""


class AggregatorStateError(MechanismError):
    """Raised when an aggregator operation is not allowed in its current lifecycle state."""


# Helper for RNG --------------------------------------------------------------
# 统一的随机数生成器工厂：None 时回退到运行时配置中的默认种子
def _make_rng(seed: Optional[Any]) -> np.random.Generator:
    """Create a fresh numpy Generator from diverse seed types."""
    if seed is None:
        seed = get_config().rng_seed
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


# Base abstraction ------------------------------------------------------------
class BaseNoise(ABC):
    """
    Abstract capability interface for additive noise mechanisms.

    Mechanisms are stateless with respect to privacy parameters: epsilon,
    delta and the sensitivities are supplied on every call so that a single
    instance can be shared by many aggregators. The only state is the RNG.
    """

    def __init__(self, rng: Optional[Any] = None, name: Optional[str] = None):
        self.name: str = name or self.__class__.__name__
        self._rng: np.random.Generator = _make_rng(rng)

    @property
    @abstractmethod
    def mechanism_type(self) -> MechanismType:
        """Identifier written into serialized summaries."""

    @abstractmethod
    def add_noise(
        self,
        value: float,
        l0_sensitivity: int,
        l_inf_sensitivity: float,
        epsilon: float,
        delta: Optional[float],
    ) -> float:
        """Return ``value`` plus unbiased noise calibrated to the given sensitivities."""

    @abstractmethod
    def compute_confidence_interval(
        self,
        value: float,
        l0_sensitivity: int,
        l_inf_sensitivity: float,
        epsilon: float,
        delta: Optional[float],
        alpha: float,
    ) -> "ConfidenceInterval":
        """Return an interval containing the unnoised value with probability ``1 - alpha``."""

    @abstractmethod
    def variance(
        self,
        l0_sensitivity: int,
        l_inf_sensitivity: float,
        epsilon: float,
        delta: Optional[float],
    ) -> float:
        """Variance of the noise added by ``add_noise`` for these parameters."""

    # Validation helpers ------------------------------------------------------
    @staticmethod
    def _validate_epsilon(eps: float) -> None:
        if not isinstance(eps, numbers.Real) or not math.isfinite(eps) or eps <= 0:
            raise ValidationError("epsilon must be a positive finite real number")

    def _validate_delta(self, delta: Optional[float]) -> None:
        message = delta_error(self.mechanism_type, delta)
        if message is not None:
            raise ValidationError(message)
        if delta is not None and (not isinstance(delta, numbers.Real) or not 0 < delta < 1):
            raise ValidationError(f"delta must be in (0, 1) for the {self.mechanism_type.value} mechanism")

    @staticmethod
    def _validate_l0_sensitivity(l0_sensitivity: int) -> None:
        if isinstance(l0_sensitivity, bool) or not isinstance(l0_sensitivity, numbers.Integral) or l0_sensitivity <= 0:
            raise ValidationError("l0_sensitivity must be a positive integer")

    @staticmethod
    def _validate_l_inf_sensitivity(l_inf_sensitivity: float) -> None:
        if (
            not isinstance(l_inf_sensitivity, numbers.Real)
            or not math.isfinite(l_inf_sensitivity)
            or l_inf_sensitivity <= 0
        ):
            raise ValidationError("l_inf_sensitivity must be a positive finite real number")

    @staticmethod
    def _validate_alpha(alpha: float) -> None:
        if not isinstance(alpha, numbers.Real) or not 0 < alpha < 1:
            raise ValidationError("alpha must be in (0, 1)")

    @staticmethod
    def _validate_value(value: float) -> float:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ValidationError("value must be a real number")
        return float(value)

    def _check_parameters(
        self,
        l0_sensitivity: int,
        l_inf_sensitivity: float,
        epsilon: float,
        delta: Optional[float],
    ) -> None:
        self._validate_l0_sensitivity(l0_sensitivity)
        self._validate_l_inf_sensitivity(l_inf_sensitivity)
        self._validate_epsilon(epsilon)
        self._validate_delta(delta)

    # Utilities ---------------------------------------------------------------
    def reseed(self, seed: Optional[Any]) -> None:
        """Replace RNG with a new generator constructed from `seed`."""
        self._rng = _make_rng(seed)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name} mechanism={self.mechanism_type.value}>"
