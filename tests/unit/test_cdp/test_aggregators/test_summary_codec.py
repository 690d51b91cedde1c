"""
Unit tests for the bounded-sum summary codec.
"""
# 说明：摘要编解码的单元测试。
# 覆盖：
# - 所有字段精确往返（含 δ 为 None 与 ±Infinity 部分和）
# - 版本号：不支持的版本在编码端报 ValidationError、在解码端报 SummaryDecodeError
# - 损坏、缺字段、类型错误、未知机制的摘要均报 SummaryDecodeError

import json
import math

import pytest

from dpagg.cdp.aggregators import BoundedSumSummary, decode_summary, encode_summary
from dpagg.core.privacy.base_mechanism import SummaryDecodeError, ValidationError
from dpagg.core.privacy.privacy_model import MechanismType
from dpagg.core.utils import configure


@pytest.fixture
def summary() -> BoundedSumSummary:
    return BoundedSumSummary(
        partial_sum=0.1 + 0.2,
        epsilon=math.log(3),
        delta=1e-7,
        mechanism_type=MechanismType.GAUSSIAN,
        max_partitions_contributed=3,
        max_contributions_per_partition=2,
        lower=-(2.0**31),
        upper=1e-3,
    )


def _tamper(blob: bytes, **changes) -> bytes:
    data = json.loads(blob)
    data["payload"].update(changes)
    return json.dumps(data).encode("utf-8")


def test_roundtrip_preserves_every_field(summary) -> None:
    assert decode_summary(encode_summary(summary)) == summary


def test_roundtrip_with_null_delta_and_infinite_sum(summary) -> None:
    import dataclasses

    pure = dataclasses.replace(summary, delta=None, mechanism_type=MechanismType.LAPLACE, partial_sum=-math.inf)
    assert decode_summary(encode_summary(pure)) == pure


def test_blob_is_versioned(summary) -> None:
    data = json.loads(encode_summary(summary))
    assert data["version"] == "1"
    assert data["payload"]["mechanism_type"] == "gaussian"


def test_unsupported_version_rejected_on_encode(summary) -> None:
    configure(summary_version="2")
    with pytest.raises(ValidationError):
        encode_summary(summary)


def test_unsupported_version_rejected_on_decode(summary) -> None:
    data = json.loads(encode_summary(summary))
    data["version"] = "99"
    with pytest.raises(SummaryDecodeError, match="unsupported summary version"):
        decode_summary(json.dumps(data).encode("utf-8"))


@pytest.mark.parametrize("blob", [b"", b"\xff\xfe", b"[]", b'{"version": "1"}', "text"])
def test_malformed_blob_rejected(blob) -> None:
    with pytest.raises(SummaryDecodeError):
        decode_summary(blob)


def test_missing_field_rejected(summary) -> None:
    data = json.loads(encode_summary(summary))
    del data["payload"]["upper"]
    with pytest.raises(SummaryDecodeError, match="upper"):
        decode_summary(json.dumps(data).encode("utf-8"))


@pytest.mark.parametrize(
    "changes",
    [
        {"epsilon": "1.0"},
        {"partial_sum": True},
        {"max_partitions_contributed": 1.5},
        {"max_contributions_per_partition": False},
        {"delta": "small"},
        {"mechanism_type": "staircase"},
        {"mechanism_type": 1},
    ],
)
def test_wrong_field_types_rejected(summary, changes) -> None:
    with pytest.raises(SummaryDecodeError):
        decode_summary(_tamper(encode_summary(summary), **changes))


def test_integer_valued_floats_accepted(summary) -> None:
    blob = _tamper(encode_summary(summary), lower=-5, partial_sum=3)
    decoded = decode_summary(blob)
    assert decoded.lower == -5.0
    assert isinstance(decoded.partial_sum, float)
