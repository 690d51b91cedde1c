"""
Privacy model and mechanism identifiers plus delta requirement rules.

The module centralises:
- Supported privacy models (pure epsilon-DP and approximate (epsilon, delta)-DP).
- Supported noise mechanism identifiers used throughout the library and in
  serialized summaries.
- The canonical mapping from mechanism to the privacy model it delivers,
  which decides whether delta must be present or absent.
"""
# 说明：隐私模型与机制类型的注册模块。
# 职责：
# - PrivacyModel：PURE_DP（ε-DP，δ 必须缺省）与 CDP（(ε, δ)-DP，δ 必须提供）
# - MechanismType：LAPLACE / GAUSSIAN 机制标识，其 value 直接写入序列化摘要
# - MECHANISM_DEFAULT_MODEL：机制到隐私模型的映射，用于 δ 的必填/禁填校验

from __future__ import annotations

import enum
from typing import Dict, Optional

from dpagg.core.utils.param_validation import ParamValidationError


class PrivacyModel(enum.Enum):
    """Supported privacy models."""

    PURE_DP = "pure_dp"    # (ε, 0)-DP, delta absent
    CDP = "cdp"            # (ε, δ)-DP

    @classmethod
    def from_str(cls, name: str) -> "PrivacyModel":
        try:
            return cls(name.lower())
        except ValueError as exc:
            raise ParamValidationError(f"unknown privacy model '{name}'") from exc


class MechanismType(enum.Enum):
    """Supported noise mechanism identifiers."""

    LAPLACE = "laplace"
    GAUSSIAN = "gaussian"

    @classmethod
    def from_str(cls, name: str) -> "MechanismType":
        normalized = name.lower().replace(" ", "_")
        if normalized in ("laplacian", "laplace_noise"):
            normalized = "laplace"
        if normalized in ("normal", "gaussian_noise"):
            normalized = "gaussian"
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ParamValidationError(f"unknown mechanism '{name}'") from exc


MECHANISM_DEFAULT_MODEL: Dict[MechanismType, PrivacyModel] = {
    MechanismType.LAPLACE: PrivacyModel.PURE_DP,
    MechanismType.GAUSSIAN: PrivacyModel.CDP,
}


def mechanism_default_model(mechanism: MechanismType) -> PrivacyModel:
    """Return the privacy model delivered by the mechanism."""
    return MECHANISM_DEFAULT_MODEL[mechanism]


def requires_delta(mechanism: MechanismType) -> bool:
    return mechanism_default_model(mechanism) is PrivacyModel.CDP


def delta_error(mechanism: MechanismType, delta: Optional[float]) -> Optional[str]:
    """Describe why ``delta`` is unacceptable for ``mechanism``, or None if it is fine."""
    # 纯 ε-DP 机制不接受 δ（包括 0.0），近似 DP 机制必须提供 δ
    if requires_delta(mechanism):
        if delta is None:
            return f"delta is required for the {mechanism.value} mechanism"
        return None
    if delta is not None:
        return f"delta must be None for the {mechanism.value} mechanism"
    return None
