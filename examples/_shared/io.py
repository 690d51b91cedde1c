"""
Input/Output helpers for examples.
"""
import json
import math
from pathlib import Path
from typing import Any, Dict, Union

def ensure_outdir(path: Union[str, Path]) -> Path:
    """Ensure the output directory exists."""
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p

def _jsonable(value: Any) -> Any:
    # JSON 不支持 ±inf，区间的无界端点按字符串写出
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value

def write_json(data: Dict[str, Any], path: Union[str, Path]) -> Path:
    """Write an example result to a JSON file."""
    p = Path(path)
    ensure_outdir(p.parent)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(_jsonable(data), f, indent=2, default=str)
    return p

def print_summary(result: Dict[str, Any]) -> None:
    """
    Print a summary of the example result to stdout.

    Expects result dict to have keys: 'name', 'config', 'release', 'artifacts'.
    """
    print("=" * 60)
    print(f"EXAMPLE: {result.get('name', 'Unknown')}")
    for section in ("config", "release", "artifacts"):
        if result.get(section):
            print("-" * 60)
            print(f"{section.capitalize()}:")
            for k, v in result[section].items():
                print(f"  {k}: {v}")
    print("=" * 60)
