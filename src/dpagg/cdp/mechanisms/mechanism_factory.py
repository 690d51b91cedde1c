"""
Factory helper to instantiate noise mechanisms from registry identifiers.

Responsibilities
  - Normalise identifiers (string/enum) via the registry.
  - Pass through existing mechanism instances unchanged.
"""
# 说明：根据注册表标识符创建噪声机制实例的工厂辅助函数。
# 职责：
# - 规范化字符串或枚举形式的机制标识符并解析为具体机制类
# - 直接接收已有机制实例时原样返回（聚合器间可共享同一机制实例）

from __future__ import annotations

from typing import Any, Optional

from dpagg.core.privacy.base_mechanism import BaseNoise
from dpagg.core.privacy.privacy_model import MechanismType

from .mechanism_registry import get_noise_class


def create_noise(
    mechanism: str | MechanismType | BaseNoise,
    *,
    rng: Optional[Any] = None,
    name: Optional[str] = None,
) -> BaseNoise:
    """
    Create a noise mechanism by identifier.

    Args:
        mechanism: MechanismType or string identifier, or an existing BaseNoise.
        rng: Optional seed or numpy Generator for newly created mechanisms.
        name: Optional human readable name.
    """
    if isinstance(mechanism, BaseNoise):
        return mechanism
    noise_cls = get_noise_class(mechanism)
    return noise_cls(rng=rng, name=name)
