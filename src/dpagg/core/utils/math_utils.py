"""
Numerical utilities shared across the library.

Responsibilities
  - Clamp raw contributions into configured bounds.
  - Derive L0/L1/L2/LInf sensitivities without intermediate overflow.

Usage Context
  - Used by aggregators before noise is applied and by mechanisms when
    calibrating their scale.

Limitations
  - Operates on Python floats (IEEE-754 binary64); results that cannot be
    represented finitely raise OverflowError instead of returning inf.
"""
# 说明：库内共享的数值工具函数集合。
# 职责：
# - clamp：将单个贡献值裁剪到 [lower, upper]
# - linf_sensitivity：先取 max(|lower|, |upper|) 再乘以单分区贡献上界，避免 upper - lower 式的溢出
# - l1_sensitivity / l2_sensitivity：由 L0 与 LInf 敏感度组合得到机制校准所需的范数敏感度

from __future__ import annotations

import math
import numbers


def is_nan(value: float) -> bool:
    # 整数永远不是 NaN，且超大整数无法转换为 float
    if isinstance(value, numbers.Integral):
        return False
    return math.isnan(value)


def clamp(value: float, lower: float, upper: float) -> float:
    """Restrict ``value`` to ``[lower, upper]``; compares before converting to float."""
    return float(min(max(value, lower), upper))


def _finite_product(magnitude: float, factor: float, label: str) -> float:
    try:
        result = magnitude * float(factor)
    except OverflowError as exc:
        raise OverflowError(f"{label} sensitivity is not representable as a float") from exc
    if not math.isfinite(result):
        raise OverflowError(f"{label} sensitivity is not representable as a float")
    return result


def linf_sensitivity(lower: float, upper: float, max_contributions_per_partition: int) -> float:
    """
    Return ``max(|lower|, |upper|) * max_contributions_per_partition``.

    The magnitude is taken before multiplying so that bounds at numeric
    extremes (for instance ``-2**31``) never pass through a subtraction.
    """
    magnitude = max(abs(float(lower)), abs(float(upper)))
    return _finite_product(magnitude, max_contributions_per_partition, "LInf")


def l1_sensitivity(l0_sensitivity: int, linf: float) -> float:
    return _finite_product(float(linf), l0_sensitivity, "L1")


def l2_sensitivity(l0_sensitivity: int, linf: float) -> float:
    return _finite_product(float(linf), math.sqrt(l0_sensitivity), "L2")
