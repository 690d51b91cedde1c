"""
Shared record types for the CDP aggregators.

Responsibilities
  - Define the immutable snapshot exchanged between shard aggregators.
  - Provide JSON-friendly conversion for the summary codec.

Usage Context
  - Produced by ``BoundedSum.get_serializable_summary`` and consumed by
    ``BoundedSum.merge_with`` after decoding. Opaque to external callers.
"""
# 说明：聚合器之间传递的不可变摘要记录，只携带未加噪的部分和与完整的隐私配置。
# 职责：
# - BoundedSumSummary：合并校验所需的全部字段，解码端无需访问生产方的实例
# - to_dict：供 summary_codec 编码为 JSON 载荷

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from dpagg.core.privacy.privacy_model import MechanismType

# 合并时逐项比较的配置字段，顺序即报错时的优先级
COMPATIBILITY_FIELDS = (
    "epsilon",
    "delta",
    "mechanism_type",
    "max_partitions_contributed",
    "max_contributions_per_partition",
    "lower",
    "upper",
)


@dataclass(frozen=True)
class BoundedSumSummary:
    """Unnoised snapshot of a bounded-sum aggregator and its configuration."""

    partial_sum: float
    epsilon: float
    delta: Optional[float]
    mechanism_type: MechanismType
    max_partitions_contributed: int
    max_contributions_per_partition: int
    lower: float
    upper: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "partial_sum": self.partial_sum,
            "epsilon": self.epsilon,
            "delta": self.delta,
            "mechanism_type": self.mechanism_type.value,
            "max_partitions_contributed": self.max_partitions_contributed,
            "max_contributions_per_partition": self.max_contributions_per_partition,
            "lower": self.lower,
            "upper": self.upper,
        }
