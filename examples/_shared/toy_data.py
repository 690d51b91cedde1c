"""
Toy contribution data for bounded-sum examples.
"""
from typing import List
import numpy as np

def build_contributions(
    n_users: int,
    low: float,
    high: float,
    rng: np.random.Generator,
    outlier_rate: float = 0.02,
    missing_rate: float = 0.01,
) -> List[float]:
    """
    Generate per-user contributions with occasional outliers and missing values.

    Outliers fall far outside ``[low, high]`` so that clamping is visible;
    missing values are NaN and are ignored by the aggregator.
    """
    values = rng.uniform(low, high, size=n_users)
    outliers = rng.random(n_users) < outlier_rate
    values[outliers] = values[outliers] * 100.0
    missing = rng.random(n_users) < missing_rate
    values[missing] = np.nan
    return [float(v) for v in values]

def split_into_shards(values: List[float], shards: int) -> List[List[float]]:
    """Round-robin assignment of contributions to shards."""
    return [values[i::shards] for i in range(shards)]
