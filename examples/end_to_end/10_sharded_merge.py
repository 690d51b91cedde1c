"""
Example 10: Sharded Aggregation with Summary Merge.

Goal:
    Each shard accumulates its slice of the data and emits an unnoised
    summary blob. A coordinator validates and merges the blobs, then
    releases the total exactly once. A shard configured with different
    bounds is rejected without disturbing the coordinator.

Usage:
    python examples/end_to_end/10_sharded_merge.py --mechanism gaussian --quick
"""
import dataclasses
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[2]
src_root = project_root / "src"
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from examples._shared import cli, io, toy_data
from dpagg.cdp.aggregators import BoundedSum, BoundedSumParams
from dpagg.cdp.mechanisms import create_noise
from dpagg.core.privacy import IncompatibleSummaryError
from dpagg.core.utils import create_rng, split_rng

SHARDS = 4

def main(argv=None):
    args = cli.parse_args("Sharded Merge", argv)
    root_rng = create_rng(args.seed)
    data_rng, *shard_rngs = split_rng(root_rng, SHARDS + 1)
    n_users = 400 if args.quick else 20000

    params = BoundedSumParams(
        epsilon=args.epsilon,
        delta=cli.delta_for(args),
        lower=-10.0,
        upper=10.0,
        max_partitions_contributed=1,
        noise=args.mechanism,
    )

    values = toy_data.build_contributions(n_users, -10.0, 10.0, data_rng)
    blobs = []
    for rng, shard_values in zip(shard_rngs, toy_data.split_into_shards(values, SHARDS)):
        worker = BoundedSum(dataclasses.replace(params, noise=create_noise(args.mechanism, rng=rng)))
        worker.add_entries(shard_values)
        blobs.append(worker.get_serializable_summary())

    # A misconfigured shard: same data model but wider bounds
    rogue = BoundedSum(dataclasses.replace(params, upper=100.0))
    rogue.add_entries([99.0])
    rejected_field = None

    coordinator = BoundedSum(dataclasses.replace(params, noise=create_noise(args.mechanism, rng=root_rng)))
    try:
        coordinator.merge_with(rogue.get_serializable_summary())
    except IncompatibleSummaryError as exc:
        rejected_field = exc.field
    for blob in blobs:
        coordinator.merge_with(blob)

    released = coordinator.compute_result()
    interval = coordinator.compute_confidence_interval(0.05)
    clamped_sum = sum(min(max(v, -10.0), 10.0) for v in values if v == v)

    result = {
        "name": "end_to_end/10_sharded_merge",
        "config": {
            "mechanism": args.mechanism,
            "epsilon": args.epsilon,
            "delta": params.delta,
            "shards": SHARDS,
            "n_users": n_users,
        },
        "release": {
            "summary_bytes": [len(b) for b in blobs],
            "rejected_shard_field": rejected_field,
            "clamped_sum": clamped_sum,
            "released_sum": released,
            "confidence_interval_95": interval.as_tuple(),
        },
        "artifacts": {},
    }
    out_path = io.write_json(result, Path(args.outdir) / "10_sharded_merge.json")
    result["artifacts"]["json"] = str(out_path)
    return result

if __name__ == "__main__":
    res = main()
    io.print_summary(res)
