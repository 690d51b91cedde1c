"""
Property-based tests for the BoundedSum aggregator.
"""
# 说明：有界求和聚合器的属性测试。
# 覆盖：
# - 未加噪的部分和恰好等于逐条裁剪后的和（NaN 被排除）
# - 任意分片后合并的部分和与单个聚合器一致
# - 置信区间始终满足边界隐含的符号约束
# - 摘要编解码对任意合法配置精确往返

import math

import pytest
from hypothesis import given, strategies as st

from dpagg.cdp.aggregators import BoundedSum, decode_summary, encode_summary
from dpagg.core.privacy.privacy_model import MechanismType

from dpagg_strategies import bounds, deltas, entries, epsilons, seeds


def _clamped_total(values, lower, upper):
    total = 0.0
    for v in values:
        if isinstance(v, float) and math.isnan(v):
            continue
        total += float(min(max(v, lower), upper))
    return total


def _partial_sum(agg: BoundedSum) -> float:
    return decode_summary(agg.get_serializable_summary()).partial_sum


@given(bounds(), entries())
def test_partial_sum_is_clamped_sum(bnds, values):
    # 逐条 add_entry 的累加顺序与参考实现一致，结果应完全相等
    lower, upper = bnds
    agg = BoundedSum.create(epsilon=1.0, lower=lower, upper=upper, max_partitions_contributed=1, noise="laplace")
    for v in values:
        agg.add_entry(v)
    assert _partial_sum(agg) == _clamped_total(values, lower, upper)


@given(bounds(), entries(), st.integers(min_value=1, max_value=5), st.data())
def test_sharded_merge_matches_single_aggregator(bnds, values, shards, data):
    lower, upper = bnds
    config = dict(epsilon=0.5, lower=lower, upper=upper, max_partitions_contributed=2, noise="laplace")
    assignment = [data.draw(st.integers(0, shards - 1)) for _ in values]

    single = BoundedSum.create(**config)
    single.add_entries(values)

    coordinator = BoundedSum.create(**config)
    for shard in range(shards):
        worker = BoundedSum.create(**config)
        worker.add_entries(v for v, s in zip(values, assignment) if s == shard)
        coordinator.merge_with(worker.get_serializable_summary())

    assert _partial_sum(coordinator) == pytest.approx(_partial_sum(single), rel=1e-9, abs=1e-6)


@given(bounds(), entries(max_size=10), epsilons(), seeds(), st.floats(min_value=1e-4, max_value=0.9999))
def test_confidence_interval_is_sign_feasible(bnds, values, epsilon, seed, alpha):
    lower, upper = bnds
    from dpagg.cdp.mechanisms import LaplaceNoise

    agg = BoundedSum.create(
        epsilon=epsilon,
        lower=lower,
        upper=upper,
        max_partitions_contributed=1,
        noise=LaplaceNoise(rng=seed),
    )
    agg.add_entries(values)
    agg.compute_result()
    interval = agg.compute_confidence_interval(alpha)
    assert interval.lower_bound <= interval.upper_bound
    if lower >= 0:
        assert interval.lower_bound >= 0
    if upper <= 0:
        assert interval.upper_bound <= 0


@given(
    st.floats(allow_nan=False),
    epsilons(),
    st.one_of(st.none(), deltas()),
    bounds(),
    st.integers(min_value=1, max_value=1000),
    st.integers(min_value=1, max_value=1000),
)
def test_summary_roundtrip(partial_sum, epsilon, delta, bnds, l0, per_partition):
    from dpagg.cdp.aggregators import BoundedSumSummary

    summary = BoundedSumSummary(
        partial_sum=partial_sum,
        epsilon=epsilon,
        delta=delta,
        mechanism_type=MechanismType.LAPLACE if delta is None else MechanismType.GAUSSIAN,
        max_partitions_contributed=l0,
        max_contributions_per_partition=per_partition,
        lower=bnds[0],
        upper=bnds[1],
    )
    assert decode_summary(encode_summary(summary)) == summary
