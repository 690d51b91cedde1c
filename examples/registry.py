"""
Registry of available examples.
"""
from typing import List, TypedDict

class ExampleMetadata(TypedDict):
    path: str
    tags: List[str]
    mechanisms: List[str]
    description: str

EXAMPLES: List[ExampleMetadata] = [
    # --- Basic ---
    {
        "path": "basic/00_config_and_logging.py",
        "tags": ["basic", "p0"],
        "mechanisms": ["laplace"],
        "description": "Demonstrates default seeding from configuration and masked debug logs."
    },
    {
        "path": "basic/01_bounded_sum_quickstart.py",
        "tags": ["basic", "p0"],
        "mechanisms": ["laplace", "gaussian"],
        "description": "Demonstrates the bounded-sum lifecycle: clamping, release, confidence interval."
    },
    # --- End to end ---
    {
        "path": "end_to_end/10_sharded_merge.py",
        "tags": ["end_to_end", "merge"],
        "mechanisms": ["laplace", "gaussian"],
        "description": "Shards emit summaries that a coordinator validates, merges and releases once."
    },
]
