"""Confidence interval value type shared by mechanisms and aggregators."""
# 说明：机制给出的原始置信区间与聚合器裁剪后的区间共用的不可变数据载体。

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from dpagg.core.privacy.base_mechanism import ValidationError


@dataclass(frozen=True)
class ConfidenceInterval:
    """Estimate of the true (unnoised) value at a given significance level."""

    lower_bound: float
    upper_bound: float

    def __post_init__(self) -> None:
        lower = float(self.lower_bound)
        upper = float(self.upper_bound)
        if math.isnan(lower) or math.isnan(upper):
            raise ValidationError("confidence interval bounds must not be NaN")
        if lower > upper:
            raise ValidationError(
                f"confidence interval lower bound {lower} exceeds upper bound {upper}"
            )
        object.__setattr__(self, "lower_bound", lower)
        object.__setattr__(self, "upper_bound", upper)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lower_bound, self.upper_bound)
