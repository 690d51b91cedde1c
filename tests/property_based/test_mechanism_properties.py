"""
Property-based tests for the Laplace and Gaussian noise mechanisms.
"""
# 说明：噪声机制的属性测试。
# 覆盖：
# - 固定种子下加噪结果可复现
# - 方差随 ε 增大而减小、随敏感度增大而增大
# - 置信区间关于输入值对称，且 alpha 越小区间越宽

import pytest
from hypothesis import assume, given, strategies as st

from dpagg.cdp.mechanisms import GaussianNoise, LaplaceNoise

from dpagg_strategies import deltas, epsilons

values = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
l0s = st.integers(min_value=1, max_value=100)
linfs = st.floats(min_value=1e-3, max_value=1e3)


@given(st.integers(0, 1000), values, epsilons())
def test_laplace_reproducibility(seed, value, epsilon):
    a = LaplaceNoise(rng=seed).add_noise(value, 1, 1.0, epsilon)
    b = LaplaceNoise(rng=seed).add_noise(value, 1, 1.0, epsilon)
    assert a == b


@given(st.integers(0, 1000), values, epsilons(), deltas())
def test_gaussian_reproducibility(seed, value, epsilon, delta):
    a = GaussianNoise(rng=seed).add_noise(value, 1, 1.0, epsilon, delta)
    b = GaussianNoise(rng=seed).add_noise(value, 1, 1.0, epsilon, delta)
    assert a == b


@given(l0s, linfs, epsilons(), epsilons())
def test_laplace_variance_monotone_in_epsilon(l0, linf, eps_a, eps_b):
    assume(eps_a < eps_b)
    noise = LaplaceNoise(rng=0)
    assert noise.variance(l0, linf, eps_a) >= noise.variance(l0, linf, eps_b)


@given(l0s, linfs, st.floats(min_value=0.05, max_value=5.0), deltas())
def test_gaussian_variance_grows_with_l0(l0, linf, epsilon, delta):
    noise = GaussianNoise(rng=0)
    assert noise.variance(l0 + 1, linf, epsilon, delta) >= noise.variance(l0, linf, epsilon, delta)


@given(values, l0s, linfs, epsilons(), st.floats(min_value=0.01, max_value=0.5))
def test_laplace_interval_symmetric_and_nested(value, l0, linf, epsilon, alpha):
    noise = LaplaceNoise(rng=0)
    wide = noise.compute_confidence_interval(value, l0, linf, epsilon, None, alpha / 2)
    narrow = noise.compute_confidence_interval(value, l0, linf, epsilon, None, alpha)
    assert value - narrow.lower_bound == pytest.approx(narrow.upper_bound - value, rel=1e-6, abs=1e-6)
    assert wide.lower_bound <= narrow.lower_bound <= narrow.upper_bound <= wide.upper_bound
