"""Shared utility helpers used across the core library."""

from .math_utils import (
    clamp,
    is_nan,
    l1_sensitivity,
    l2_sensitivity,
    linf_sensitivity,
)
from .random import (
    create_rng,
    reseed_rng,
    split_rng,
    sample_noise,
)
from .config import (
    RuntimeConfig,
    get_config,
    configure,
)
from .serialization import (
    serialize_to_json,
    deserialize_from_json,
    VersionedPayload,
)
from .logging import (
    get_logger,
    configure_logging,
)
from .param_validation import (
    ensure,
    ensure_type,
    ensure_positive_int,
    ParamValidationError,
)

__all__ = [
    "clamp",
    "is_nan",
    "l1_sensitivity",
    "l2_sensitivity",
    "linf_sensitivity",
    "create_rng",
    "reseed_rng",
    "split_rng",
    "sample_noise",
    "RuntimeConfig",
    "get_config",
    "configure",
    "serialize_to_json",
    "deserialize_from_json",
    "VersionedPayload",
    "get_logger",
    "configure_logging",
    "ensure",
    "ensure_type",
    "ensure_positive_int",
    "ParamValidationError",
]
