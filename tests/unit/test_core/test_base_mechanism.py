"""
Unit tests for the BaseNoise abstraction.
"""
# 说明：使用 DummyNoise 验证 BaseNoise 的通用行为与约束。
# 覆盖：
# - 参数校验：ε>0 且有限、δ 与机制类型匹配、l0 为正整数、linf 为正且有限、alpha ∈ (0, 1)
# - RNG 管理：reseed(seed) 后随机序列可重复；未指定种子时回退到运行时配置
# - 异常层级：IncompatibleSummaryError / SummaryDecodeError 属于 ValidationError

from typing import Optional

import pytest

from dpagg.core.privacy.base_mechanism import (
    AggregatorStateError,
    BaseNoise,
    IncompatibleSummaryError,
    MechanismError,
    SummaryDecodeError,
    ValidationError,
)
from dpagg.core.privacy.interval import ConfidenceInterval
from dpagg.core.privacy.privacy_model import MechanismType
from dpagg.core.utils import configure


class DummyNoise(BaseNoise):
    """Unit-scale Laplace-typed noise used to exercise the base helpers."""
    # 轻量机制：噪声固定为 RNG 的一次标准正态采样，便于验证 reseed 行为

    @property
    def mechanism_type(self) -> MechanismType:
        return MechanismType.LAPLACE

    def add_noise(self, value, l0_sensitivity, l_inf_sensitivity, epsilon, delta: Optional[float] = None):
        self._check_parameters(l0_sensitivity, l_inf_sensitivity, epsilon, delta)
        return self._validate_value(value) + float(self._rng.normal())

    def compute_confidence_interval(self, value, l0_sensitivity, l_inf_sensitivity, epsilon, delta, alpha):
        self._check_parameters(l0_sensitivity, l_inf_sensitivity, epsilon, delta)
        self._validate_alpha(alpha)
        return ConfidenceInterval(value - 1.0, value + 1.0)

    def variance(self, l0_sensitivity, l_inf_sensitivity, epsilon, delta=None):
        return 1.0


@pytest.mark.parametrize(
    "l0, linf, epsilon, delta",
    [
        (0, 1.0, 1.0, None),
        (True, 1.0, 1.0, None),
        (1.5, 1.0, 1.0, None),
        (1, 0.0, 1.0, None),
        (1, float("inf"), 1.0, None),
        (1, 1.0, 0.0, None),
        (1, 1.0, float("nan"), None),
        (1, 1.0, 1.0, 1e-5),
    ],
)
def test_check_parameters_rejects_invalid(l0, linf, epsilon, delta) -> None:
    # 非法的敏感度或隐私参数统一抛出 ValidationError
    with pytest.raises(ValidationError):
        DummyNoise(rng=0).add_noise(0.0, l0, linf, epsilon, delta)


@pytest.mark.parametrize("alpha", [0.0, 1.0, 2.0, float("nan")])
def test_alpha_validation(alpha) -> None:
    with pytest.raises(ValidationError):
        DummyNoise(rng=0).compute_confidence_interval(0.0, 1, 1.0, 1.0, None, alpha)


def test_value_must_be_numeric() -> None:
    with pytest.raises(ValidationError):
        DummyNoise(rng=0).add_noise("1", 1, 1.0, 1.0)


def test_reseed_reproducibility() -> None:
    # reseed 后噪声序列可复现
    noise = DummyNoise(rng=5)
    first = noise.add_noise(0.0, 1, 1.0, 1.0)
    noise.reseed(5)
    assert noise.add_noise(0.0, 1, 1.0, 1.0) == first


def test_default_seed_comes_from_config() -> None:
    configure(rng_seed=2024)
    a = DummyNoise().add_noise(0.0, 1, 1.0, 1.0)
    b = DummyNoise().add_noise(0.0, 1, 1.0, 1.0)
    assert a == b


def test_repr_mentions_mechanism() -> None:
    assert "mechanism=laplace" in repr(DummyNoise(name="dummy"))


def test_exception_hierarchy() -> None:
    assert issubclass(IncompatibleSummaryError, ValidationError)
    assert issubclass(SummaryDecodeError, ValidationError)
    assert issubclass(AggregatorStateError, MechanismError)
    assert not issubclass(AggregatorStateError, ValidationError)
    err = IncompatibleSummaryError("epsilon", 1.0, 2.0)
    assert err.field == "epsilon"
    assert "epsilon mismatch" in str(err)
