"""
Base abstractions for single-use CDP aggregators.

Responsibilities
  - Define the one-shot lifecycle shared by every aggregator kind.
  - Standardise state checks and irreversible transitions.
  - Define the finalize / serialize / merge interface.

Usage Context
  - Subclass for concrete aggregations (bounded sum today).
  - One instance has exactly one owner; callers serialise access to it.

Limitations
  - No internal locking; concurrent mutation of one instance is unsupported.
  - Terminal states are irreversible; build a new instance per release.
"""
# 说明：单次使用的中心化 DP 聚合器基类，统一维护显式的生命周期状态机。
# 职责：
# - AggregationState：ACCUMULATING → RESULT_RETURNED 或 SERIALIZED（二选一、不可逆）
# - _require_state / _transition：每个变更或终结操作开头检查状态，失败时抛出 AggregatorStateError
# - 约定 compute_result / get_serializable_summary / merge_with 的方法签名

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Any, Mapping

from dpagg.core.privacy.base_mechanism import AggregatorStateError


class AggregationState(enum.Enum):
    """Lifecycle states of an aggregator."""

    ACCUMULATING = "accumulating"
    RESULT_RETURNED = "result_returned"
    SERIALIZED = "serialized"


class BaseAggregator(ABC):
    """
    Abstract single-use aggregator.

    - Behavior
      - Starts ACCUMULATING; accepts entries and merges only in that state.
      - Finalizes exactly once, either by releasing a noised result or by
        snapshotting its unnoised state for a coordinator to merge.

    - Usage Notes
      - Subclasses call ``_require_state`` at the start of every mutating or
        finalizing operation and ``_transition`` once the operation succeeded.
    """

    def __init__(self) -> None:
        self._state = AggregationState.ACCUMULATING

    @property
    def state(self) -> AggregationState:
        return self._state

    def _require_state(self, expected: AggregationState, message: str) -> None:
        if self._state is not expected:
            raise AggregatorStateError(f"{message} (state: {self._state.value})")

    def _require_accumulating(self, operation: str) -> None:
        self._require_state(
            AggregationState.ACCUMULATING,
            f"{operation} is not allowed: aggregator already finalized",
        )

    def _transition(self, target: AggregationState) -> None:
        # 终态不可逆：只允许从 ACCUMULATING 迁出
        if self._state is not AggregationState.ACCUMULATING or target is AggregationState.ACCUMULATING:
            raise AggregatorStateError(
                f"illegal transition {self._state.value} -> {target.value}"
            )
        self._state = target

    @abstractmethod
    def compute_result(self) -> Any:
        """Release the noised aggregate; allowed once."""

    @abstractmethod
    def get_serializable_summary(self) -> bytes:
        """Snapshot the unnoised state as an opaque blob; allowed once."""

    @abstractmethod
    def merge_with(self, summary: bytes) -> None:
        """Fold a compatible summary into this aggregator."""

    def get_metadata(self) -> Mapping[str, Any]:
        return {"type": self.__class__.__name__, "state": self._state.value}
