"""
Example 01: Bounded Sum Quickstart.

Goal:
    Demonstrate the one-shot lifecycle of a bounded sum:
    Configure -> Add entries (clamped, NaN ignored) -> Release -> Confidence interval.

Usage:
    python examples/basic/01_bounded_sum_quickstart.py --mechanism gaussian
"""
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
from dpagg.core.privacy import AggregatorStateError
from dpagg.core.utils import create_rng

def main(argv=None):
    args = cli.parse_args("Bounded Sum Quickstart", argv)
    generator = create_rng(args.seed)
    n_users = 200 if args.quick else 5000

    # 1. Configure: each user contributes once to one partition, values clamped to [0, 50]
    params = BoundedSumParams(
        epsilon=args.epsilon,
        delta=cli.delta_for(args),
        lower=0.0,
        upper=50.0,
        max_partitions_contributed=1,
        noise=create_noise(args.mechanism, rng=generator),
    )
    agg = BoundedSum(params)

    # 2. Accumulate
    values = toy_data.build_contributions(n_users, 0.0, 50.0, generator)
    agg.add_entries(values)
    clamped_sum = sum(min(max(v, 0.0), 50.0) for v in values if v == v)

    # 3. Release exactly once
    released = agg.compute_result()
    interval = agg.compute_confidence_interval(0.05)

    # 4. The aggregator is now finalized
    try:
        agg.compute_result()
        second_release_rejected = False
    except AggregatorStateError:
        second_release_rejected = True

    result = {
        "name": "basic/01_bounded_sum_quickstart",
        "config": {
            "mechanism": args.mechanism,
            "epsilon": args.epsilon,
            "delta": params.delta,
            "l_inf_sensitivity": agg.l_inf_sensitivity,
            "n_users": n_users,
        },
        "release": {
            "clamped_sum": clamped_sum,
            "released_sum": released,
            "confidence_interval_95": interval.as_tuple(),
            "noise_variance": agg.noise.variance(agg.l0_sensitivity, agg.l_inf_sensitivity, agg.epsilon, agg.delta),
            "second_release_rejected": second_release_rejected,
        },
        "artifacts": {},
    }
    out_path = io.write_json(result, Path(args.outdir) / "01_bounded_sum_quickstart.json")
    result["artifacts"]["json"] = str(out_path)
    return result

if __name__ == "__main__":
    res = main()
    io.print_summary(res)
