"""Single-use CDP aggregators and their summary codec."""
from .base import AggregationState, BaseAggregator
from .types import COMPATIBILITY_FIELDS, BoundedSumSummary
from .summary_codec import SUPPORTED_SUMMARY_VERSIONS, decode_summary, encode_summary
from .bounded_sum import BoundedSum, BoundedSumParams

__all__ = [
    "AggregationState",
    "BaseAggregator",
    "COMPATIBILITY_FIELDS",
    "BoundedSumSummary",
    "SUPPORTED_SUMMARY_VERSIONS",
    "decode_summary",
    "encode_summary",
    "BoundedSum",
    "BoundedSumParams",
]
