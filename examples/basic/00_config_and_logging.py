"""
Example 00: Runtime Configuration and Logging.

Goal:
    Show how the runtime configuration drives default seeding and how the
    privacy filter masks unnoised partial sums in debug logs.

Usage:
    python examples/basic/00_config_and_logging.py
"""
import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[2]
src_root = project_root / "src"
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from examples._shared import cli, io
from dpagg.cdp.aggregators import BoundedSum
from dpagg.core.utils import configure, configure_logging, get_config

def main(argv=None):
    args = cli.parse_args("Config and Logging", argv)

    # 1. Mechanisms created without an explicit RNG fall back to this seed
    configure(rng_seed=args.seed)
    configure_logging(level="DEBUG")
    logging.getLogger("dpagg").setLevel(logging.DEBUG)

    releases = []
    for _ in range(2):
        agg = BoundedSum.create(
            epsilon=args.epsilon,
            delta=cli.delta_for(args),
            lower=0.0,
            upper=1.0,
            max_partitions_contributed=1,
            noise=args.mechanism,
        )
        agg.add_entries([1.0] * 10)
        # 2. The debug record carries partial_sum, which the filter replaces with ***
        releases.append(agg.compute_result())

    result = {
        "name": "basic/00_config_and_logging",
        "config": {
            "rng_seed": get_config().rng_seed,
            "mask_sensitive_fields": get_config().mask_sensitive_fields,
            "mechanism": args.mechanism,
        },
        "release": {
            "first": releases[0],
            "second": releases[1],
            "identical": releases[0] == releases[1],
        },
        "artifacts": {},
    }
    out_path = io.write_json(result, Path(args.outdir) / "00_config_and_logging.json")
    result["artifacts"]["json"] = str(out_path)
    return result

if __name__ == "__main__":
    res = main()
    io.print_summary(res)
