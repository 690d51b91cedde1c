"""
Binary codec for aggregator summaries.

Responsibilities
  - Encode a BoundedSumSummary into an opaque, versioned byte string.
  - Decode and type-check blobs produced by another process or shard.

Usage Context
  - Called by aggregators only; clients treat the blob as opaque.

Limitations
  - The blob is UTF-8 JSON wrapped in a VersionedPayload; floats use
    Python's round-tripping repr, so every field survives exactly.
"""
# 说明：摘要的编解码工具。编码为带版本号的 JSON（UTF-8 字节），解码时严格校验字段与类型。
# 职责：
# - encode_summary：BoundedSumSummary → bytes，版本号取自运行时配置 summary_version
# - decode_summary：bytes → BoundedSumSummary，任何格式问题均抛出 SummaryDecodeError
# 约定：
# - delta 允许为 null（纯 ε-DP 机制）；部分和允许为 ±Infinity（累加溢出后的取值）

from __future__ import annotations

import numbers
from typing import Any, Dict, Optional

from dpagg.core.privacy.base_mechanism import SummaryDecodeError, ValidationError
from dpagg.core.privacy.privacy_model import MechanismType
from dpagg.core.utils.config import get_config
from dpagg.core.utils.param_validation import ParamValidationError, ensure, ensure_type
from dpagg.core.utils.serialization import VersionedPayload

from .types import BoundedSumSummary

SUPPORTED_SUMMARY_VERSIONS = ("1",)

_FLOAT_FIELDS = ("partial_sum", "epsilon", "lower", "upper")
_INT_FIELDS = ("max_partitions_contributed", "max_contributions_per_partition")


def encode_summary(summary: BoundedSumSummary, *, version: Optional[str] = None) -> bytes:
    """Encode ``summary`` into an opaque blob."""
    version = version or get_config().summary_version
    ensure(
        version in SUPPORTED_SUMMARY_VERSIONS,
        f"unsupported summary version '{version}'",
        error=ValidationError,
    )
    return VersionedPayload(version=version, payload=summary.to_dict()).to_json().encode("utf-8")


def _read_float(payload: Dict[str, Any], key: str) -> float:
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise SummaryDecodeError(f"summary field '{key}' must be a number")
    return float(value)


def _read_int(payload: Dict[str, Any], key: str) -> int:
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise SummaryDecodeError(f"summary field '{key}' must be an integer")
    return value


def decode_summary(blob: bytes) -> BoundedSumSummary:
    """Decode a blob produced by :func:`encode_summary`."""
    ensure_type(blob, (bytes, bytearray, memoryview), label="summary", error=SummaryDecodeError)
    try:
        envelope = VersionedPayload.from_json(bytes(blob).decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise SummaryDecodeError("summary is not a valid serialized payload") from exc

    ensure(
        envelope.version in SUPPORTED_SUMMARY_VERSIONS,
        f"unsupported summary version '{envelope.version}'",
        error=SummaryDecodeError,
    )
    payload = envelope.payload
    expected = set(_FLOAT_FIELDS) | set(_INT_FIELDS) | {"delta", "mechanism_type"}
    missing = sorted(expected - payload.keys())
    ensure(not missing, f"summary is missing fields: {', '.join(missing)}", error=SummaryDecodeError)

    delta = payload["delta"]
    if delta is not None:
        delta = _read_float(payload, "delta")

    mechanism = payload["mechanism_type"]
    ensure_type(mechanism, (str,), label="summary field 'mechanism_type'", error=SummaryDecodeError)
    try:
        mechanism_type = MechanismType.from_str(mechanism)
    except ParamValidationError as exc:
        raise SummaryDecodeError(f"summary has unknown mechanism '{mechanism}'") from exc

    return BoundedSumSummary(
        partial_sum=_read_float(payload, "partial_sum"),
        epsilon=_read_float(payload, "epsilon"),
        delta=delta,
        mechanism_type=mechanism_type,
        max_partitions_contributed=_read_int(payload, "max_partitions_contributed"),
        max_contributions_per_partition=_read_int(payload, "max_contributions_per_partition"),
        lower=_read_float(payload, "lower"),
        upper=_read_float(payload, "upper"),
    )
