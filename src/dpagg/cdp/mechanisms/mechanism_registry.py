"""
Light-weight registry mapping MechanismType to concrete noise implementations.

Responsibilities
  - Provide a single source of truth for noise mechanism lookups.
  - Expose helpers to normalise identifiers.

Usage Context
  - Use when resolving mechanism identifiers (for instance from configuration
    files or CLI flags) to concrete classes.
"""
# 说明：维护 MechanismType 与具体噪声实现类映射关系的轻量级注册表模块。
# 职责：
# - 作为机制查找与工厂创建的单一事实来源
# - 提供机制标识符的归一化与未注册机制的错误报告

from __future__ import annotations

from typing import Dict, Type

from dpagg.core.privacy.base_mechanism import BaseNoise
from dpagg.core.privacy.privacy_model import MechanismType
from dpagg.core.utils.param_validation import ParamValidationError

from .gaussian import GaussianNoise
from .laplace import LaplaceNoise

NOISE_REGISTRY: Dict[MechanismType, Type[BaseNoise]] = {
    MechanismType.LAPLACE: LaplaceNoise,
    MechanismType.GAUSSIAN: GaussianNoise,
}


def normalize_mechanism(mechanism: str | MechanismType) -> MechanismType:
    """Coerce string or enum to MechanismType, raising on unknown identifiers."""
    if isinstance(mechanism, MechanismType):
        return mechanism
    return MechanismType.from_str(str(mechanism))


def get_noise_class(mechanism: str | MechanismType) -> Type[BaseNoise]:
    """Return the concrete class registered for the mechanism identifier."""
    mech_type = normalize_mechanism(mechanism)
    if mech_type not in NOISE_REGISTRY:
        raise ParamValidationError(f"mechanism '{mech_type.value}' not registered")
    return NOISE_REGISTRY[mech_type]


def registered_mechanisms_snapshot() -> Dict[str, str]:
    """Snapshot of registered mechanisms for tooling or docs."""
    return {mech.value: cls.__name__ for mech, cls in NOISE_REGISTRY.items()}
