"""
Differentially private bounded sum.

Responsibilities
  - Clamp each raw contribution into [lower, upper] and accumulate it.
  - Derive L0 / LInf sensitivities without overflow at numeric extremes.
  - Release the sum exactly once through an injected noise mechanism.
  - Serialize the unnoised state for cross-shard merging and validate
    privacy-parameter compatibility on merge.
  - Clamp confidence intervals to the sign-feasible range of the bounds.

Usage Context
  - One aggregator per shard; a coordinator merges shard summaries and
    finalizes exactly once.

Limitations
  - Single owner, no internal locking.
  - Terminal states are irreversible.
"""
# 说明：有界求和聚合器，是本库的核心。
# 职责：
# - add_entry / add_entries：NaN 静默忽略，其余值裁剪到 [lower, upper] 后累加
# - compute_result：l0 = max_partitions_contributed，linf = max(|lower|, |upper|) * max_contributions_per_partition，
#   交给噪声机制加噪，状态迁移到 RESULT_RETURNED
# - get_serializable_summary：快照未加噪的部分和与配置，状态迁移到 SERIALIZED
# - merge_with：解码摘要、逐字段校验兼容性，校验通过后累加部分和；失败时状态不变
# - compute_confidence_interval：按边界符号裁剪机制给出的区间，完全不可行时收缩为 (0, 0)

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Union

from dpagg.core.privacy.base_mechanism import (
    BaseNoise,
    IncompatibleSummaryError,
    ValidationError,
)
from dpagg.core.privacy.interval import ConfidenceInterval
from dpagg.core.privacy.privacy_model import MechanismType, delta_error, requires_delta
from dpagg.core.utils.logging import get_logger
from dpagg.core.utils.math_utils import clamp, is_nan, l1_sensitivity, linf_sensitivity
from dpagg.core.utils.param_validation import (
    ParamValidationError,
    ensure,
    ensure_positive_int,
    ensure_type,
)
from dpagg.cdp.mechanisms.mechanism_factory import create_noise
from dpagg.cdp.mechanisms.mechanism_registry import normalize_mechanism

from .base import AggregationState, BaseAggregator
from .summary_codec import decode_summary, encode_summary
from .types import COMPATIBILITY_FIELDS, BoundedSumSummary

logger = get_logger(__name__)

NoiseSpec = Union[BaseNoise, str, MechanismType]


def _is_real(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_finite_real(value: Any) -> bool:
    if not _is_real(value):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


@dataclass(frozen=True)
class BoundedSumParams:
    """
    Configuration of a bounded sum.

    - Configuration
      - epsilon: Positive privacy budget.
      - lower / upper: Clamping bounds, ``lower <= upper``.
      - max_partitions_contributed: L0 sensitivity.
      - noise: Mechanism instance, or an identifier resolved by ``create_noise``.
      - delta: Required for Gaussian noise, must be None for Laplace noise.
      - max_contributions_per_partition: Contributions one user may make to
        a single partition (default 1).

    - Usage Notes
      - Derive variants with ``dataclasses.replace``.
    """

    epsilon: float
    lower: float
    upper: float
    max_partitions_contributed: int
    noise: NoiseSpec
    delta: Optional[float] = None
    max_contributions_per_partition: int = 1

    def mechanism_type(self) -> MechanismType:
        if isinstance(self.noise, BaseNoise):
            return self.noise.mechanism_type
        try:
            return normalize_mechanism(self.noise)
        except ParamValidationError as exc:
            raise ValidationError(f"unknown noise mechanism '{self.noise}'") from exc

    def validate(self) -> "BoundedSumParams":
        ensure_type(self.noise, (BaseNoise, str, MechanismType), label="noise", error=ValidationError)
        mechanism = self.mechanism_type()

        ensure(
            _is_finite_real(self.epsilon) and self.epsilon > 0,
            "epsilon must be a positive finite real number",
            error=ValidationError,
        )

        message = delta_error(mechanism, self.delta)
        ensure(message is None, message or "", error=ValidationError)
        if requires_delta(mechanism):
            ensure(
                _is_real(self.delta) and 0 < self.delta < 1,
                f"delta must be in (0, 1) for the {mechanism.value} mechanism",
                error=ValidationError,
            )

        for label, bound in (("lower", self.lower), ("upper", self.upper)):
            ensure(
                _is_finite_real(bound),
                f"{label} bound must be a finite real number",
                error=ValidationError,
            )
        ensure(
            self.lower <= self.upper,
            f"lower bound {self.lower} must not exceed upper bound {self.upper}",
            error=ValidationError,
        )

        ensure_positive_int(self.max_partitions_contributed, label="max_partitions_contributed", error=ValidationError)
        ensure_positive_int(
            self.max_contributions_per_partition,
            label="max_contributions_per_partition",
            error=ValidationError,
        )

        try:
            linf = linf_sensitivity(self.lower, self.upper, self.max_contributions_per_partition)
            l1_sensitivity(self.max_partitions_contributed, linf)
        except OverflowError as exc:
            raise ValidationError(f"sensitivity overflows for these bounds: {exc}") from exc
        ensure(linf > 0, "bounds [0, 0] give zero sensitivity; no noise can be calibrated", error=ValidationError)
        return self


class BoundedSum(BaseAggregator):
    """
    Noised sum of bounded contributions with a one-shot lifecycle.

    - Behavior
      - ``add_entry`` clamps and accumulates; NaN entries are ignored.
      - ``compute_result`` or ``get_serializable_summary`` finalizes, once.
      - ``merge_with`` folds in summaries produced under an identical
        configuration.
      - ``compute_confidence_interval`` is available after ``compute_result``.
    """

    def __init__(self, params: BoundedSumParams):
        super().__init__()
        params.validate()
        self._params = params
        self._noise: BaseNoise = create_noise(params.noise)
        self._epsilon = float(params.epsilon)
        self._delta = None if params.delta is None else float(params.delta)
        self._lower = float(params.lower)
        self._upper = float(params.upper)
        self._max_partitions_contributed = int(params.max_partitions_contributed)
        self._max_contributions_per_partition = int(params.max_contributions_per_partition)
        self._l_inf_sensitivity = linf_sensitivity(
            self._lower, self._upper, self._max_contributions_per_partition
        )
        self._partial_sum = 0.0
        self._result: Optional[float] = None

    @classmethod
    def create(cls, **kwargs: Any) -> "BoundedSum":
        """Shorthand for ``BoundedSum(BoundedSumParams(**kwargs))``."""
        return cls(BoundedSumParams(**kwargs))

    # Configuration -----------------------------------------------------------
    @property
    def params(self) -> BoundedSumParams:
        return self._params

    @property
    def noise(self) -> BaseNoise:
        return self._noise

    @property
    def epsilon(self) -> float:
        return self._epsilon

    @property
    def delta(self) -> Optional[float]:
        return self._delta

    @property
    def lower(self) -> float:
        return self._lower

    @property
    def upper(self) -> float:
        return self._upper

    @property
    def max_partitions_contributed(self) -> int:
        return self._max_partitions_contributed

    @property
    def max_contributions_per_partition(self) -> int:
        return self._max_contributions_per_partition

    @property
    def l0_sensitivity(self) -> int:
        return self._max_partitions_contributed

    @property
    def l_inf_sensitivity(self) -> float:
        return self._l_inf_sensitivity

    # Accumulation ------------------------------------------------------------
    def _coerce_entry(self, value: Any) -> Optional[float]:
        # 返回 None 表示该条目为 NaN，应被忽略
        if not _is_real(value):
            raise ValidationError(f"bounded sum entries must be real numbers, got {type(value).__name__}")
        if is_nan(value):
            return None
        return clamp(value, self._lower, self._upper)

    def add_entry(self, value: float) -> None:
        """Clamp ``value`` into the bounds and add it; NaN is ignored."""
        self._require_accumulating("add_entry")
        clamped = self._coerce_entry(value)
        if clamped is not None:
            self._partial_sum += clamped

    def add_entries(self, values: Iterable[float]) -> None:
        """Add every element of ``values``; the batch is rejected as a whole on invalid input."""
        self._require_accumulating("add_entries")
        if isinstance(values, (str, bytes)):
            raise ValidationError("bounded sum entries must be an iterable of real numbers")
        clamped: List[float] = []
        for value in values:
            coerced = self._coerce_entry(value)
            if coerced is not None:
                clamped.append(coerced)
        for value in clamped:
            self._partial_sum += value

    # Finalization ------------------------------------------------------------
    def compute_result(self) -> float:
        """Return the noised sum. Allowed once, and never after serialization."""
        self._require_accumulating("compute_result")
        result = float(
            self._noise.add_noise(
                self._partial_sum,
                self.l0_sensitivity,
                self._l_inf_sensitivity,
                self._epsilon,
                self._delta,
            )
        )
        self._result = result
        self._transition(AggregationState.RESULT_RETURNED)
        logger.debug(
            "bounded sum released with %s noise",
            self._noise.mechanism_type.value,
            extra={"partial_sum": self._partial_sum},
        )
        return result

    def _snapshot(self) -> BoundedSumSummary:
        return BoundedSumSummary(
            partial_sum=self._partial_sum,
            epsilon=self._epsilon,
            delta=self._delta,
            mechanism_type=self._noise.mechanism_type,
            max_partitions_contributed=self._max_partitions_contributed,
            max_contributions_per_partition=self._max_contributions_per_partition,
            lower=self._lower,
            upper=self._upper,
        )

    def get_serializable_summary(self) -> bytes:
        """Snapshot the unnoised sum and configuration. Allowed once, never after ``compute_result``."""
        self._require_accumulating("get_serializable_summary")
        blob = encode_summary(self._snapshot())
        self._transition(AggregationState.SERIALIZED)
        logger.debug("bounded sum serialized (%d bytes)", len(blob))
        return blob

    # Merge -------------------------------------------------------------------
    def _check_compatible(self, source: BoundedSumSummary) -> None:
        own = self._snapshot()
        for field in COMPATIBILITY_FIELDS:
            expected = getattr(own, field)
            actual = getattr(source, field)
            if expected != actual:
                logger.warning("rejected summary merge: %s mismatch", field)
                raise IncompatibleSummaryError(field, expected, actual)

    def merge_with(self, summary: bytes) -> None:
        """Add the partial sum of a compatible serialized summary."""
        self._require_accumulating("merge_with")
        source = decode_summary(summary)
        self._check_compatible(source)
        self._partial_sum += source.partial_sum
        logger.debug("merged bounded sum summary", extra={"partial_sum": source.partial_sum})

    # Confidence interval -----------------------------------------------------
    def _clamp_interval(self, raw: ConfidenceInterval) -> ConfidenceInterval:
        # 仅当边界限定了和的符号时才裁剪：全非负边界 → 下界 ≥ 0；全非正边界 → 上界 ≤ 0
        lower_clamp = 0.0 if self._lower >= 0 else -math.inf
        upper_clamp = 0.0 if self._upper <= 0 else math.inf
        lower = max(raw.lower_bound, lower_clamp)
        upper = min(raw.upper_bound, upper_clamp)
        if lower > upper:
            return ConfidenceInterval(0.0, 0.0)
        return ConfidenceInterval(lower, upper)

    def compute_confidence_interval(self, alpha: float) -> ConfidenceInterval:
        """
        Interval around the released sum that contains the true sum with
        probability ``1 - alpha``, clamped to the sign-feasible range.
        """
        self._require_state(
            AggregationState.RESULT_RETURNED,
            "computeResult must be called before calling computeConfidenceInterval",
        )
        raw = self._noise.compute_confidence_interval(
            self._result,
            self.l0_sensitivity,
            self._l_inf_sensitivity,
            self._epsilon,
            self._delta,
            alpha,
        )
        return self._clamp_interval(raw)

    def get_metadata(self) -> Mapping[str, Any]:
        meta = dict(super().get_metadata())
        meta.update(
            {
                "mechanism": self._noise.mechanism_type.value,
                "epsilon": self._epsilon,
                "delta": self._delta,
                "lower": self._lower,
                "upper": self._upper,
                "max_partitions_contributed": self._max_partitions_contributed,
                "max_contributions_per_partition": self._max_contributions_per_partition,
                "l_inf_sensitivity": self._l_inf_sensitivity,
            }
        )
        return meta
