"""
Random number generation helpers.

Responsibilities
  - Centralize RNG creation and seeding.
  - Provide reproducible splits for per-shard workloads.
  - Offer noise sampling helpers used by mechanisms and tests.

Usage Context
  - Use when a consistent RNG interface is needed across modules.
  - Independent shard aggregators can draw from split generators.

Limitations
  - Relies on numpy Generator behavior for reproducibility.
  - Not a cryptographically secure source of randomness.
"""
# 说明：随机数生成与噪声采样辅助工具，用于在库中统一管理 RNG 的创建与分配。
# 职责：
# - create_rng / reseed_rng：集中封装 numpy Generator 的创建与重置逻辑
# - split_rng：从单一 RNG 派生出多个独立生成器，便于分片并行
# - sample_noise：按分布名称统一调度到拉普拉斯 / 高斯噪声采样接口

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import numpy as np


def create_rng(seed: Optional[Any] = None) -> np.random.Generator:
    """Create a numpy Generator from a seed, SeedSequence, or existing generator."""
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def reseed_rng(rng: np.random.Generator, seed: Optional[int]) -> np.random.Generator:
    """Replace RNG state with a new seed; returns the generator for chaining."""
    rng.bit_generator.state = create_rng(seed).bit_generator.state
    return rng


def split_rng(rng: np.random.Generator, num: int) -> List[np.random.Generator]:
    """Split an RNG into `num` independent generators."""
    if num <= 0:
        raise ValueError("num must be positive")
    seeds = rng.bit_generator._seed_seq.spawn(num)  # type: ignore[attr-defined]
    return [np.random.default_rng(seed) for seed in seeds]


def sample_noise(
    rng: np.random.Generator,
    distribution: str,
    size: Optional[Sequence[int]] = None,
    **kwargs: Any,
) -> Any:
    """Sample noise for a given distribution with named parameters."""
    distribution = distribution.lower()
    if distribution == "laplace":
        return rng.laplace(kwargs.get("loc", 0.0), kwargs["scale"], size=size)
    if distribution in ("gaussian", "normal"):
        return rng.normal(kwargs.get("loc", 0.0), kwargs["scale"], size=size)
    raise ValueError(f"unsupported distribution '{distribution}'")
