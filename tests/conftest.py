"""Shared pytest configuration, path setup and noise test doubles."""
# 说明：全局测试配置。
# 职责：
# - 将仓库根目录与 src/ 加入 sys.path
# - 提供不加噪的机制替身（zero_laplace / zero_gaussian），使聚合结果可精确断言
# - 每个测试后恢复全局运行时配置

import sys
from pathlib import Path
from typing import Optional

import pytest

# Ensure repo root and src/ are on sys.path for all tests
_ROOT = Path(__file__).resolve().parents[1]
_SRC = _ROOT / "src"
for p in (str(_ROOT), str(_SRC)):
    if p not in sys.path:
        sys.path.insert(0, p)

from dpagg.cdp.mechanisms.gaussian import GaussianNoise  # noqa: E402
from dpagg.cdp.mechanisms.laplace import LaplaceNoise  # noqa: E402
from dpagg.core.utils.config import get_config  # noqa: E402


class ZeroLaplaceNoise(LaplaceNoise):
    """Laplace mechanism that validates parameters but adds no noise."""

    def add_noise(self, value, l0_sensitivity, l_inf_sensitivity, epsilon, delta: Optional[float] = None):
        self._check_parameters(l0_sensitivity, l_inf_sensitivity, epsilon, delta)
        return self._validate_value(value)


class ZeroGaussianNoise(GaussianNoise):
    """Gaussian mechanism that validates parameters but adds no noise."""

    def add_noise(self, value, l0_sensitivity, l_inf_sensitivity, epsilon, delta):
        self._check_parameters(l0_sensitivity, l_inf_sensitivity, epsilon, delta)
        return self._validate_value(value)


@pytest.fixture
def zero_laplace() -> ZeroLaplaceNoise:
    return ZeroLaplaceNoise(rng=0)


@pytest.fixture
def zero_gaussian() -> ZeroGaussianNoise:
    return ZeroGaussianNoise(rng=0)


@pytest.fixture(autouse=True)
def _restore_runtime_config():
    # 测试可能修改全局配置单例，结束后逐字段还原
    cfg = get_config()
    snapshot = dict(vars(cfg))
    snapshot["extra"] = dict(cfg.extra)
    yield
    for key, value in snapshot.items():
        setattr(cfg, key, value)
