"""
Serialization helpers for summaries and configuration.

Provides JSON helpers and basic versioned payloads to ease backwards
compatibility of transported aggregator state.
"""
# 说明：序列化辅助工具，统一 JSON 编解码行为并内置简单的版本封装。
# 职责：
# - serialize_to_json / deserialize_from_json：支持 dataclass 与可选版本包装的 JSON 编解码
# - VersionedPayload：封装 version + payload 结构，提供 to_json / from_json 便捷方法

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, is_dataclass
from typing import Any, Dict, Optional


def _prepare(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return obj


def serialize_to_json(obj: Any, *, version: Optional[str] = None) -> str:
    # json 默认使用 float 的 repr，可精确往返；允许 Infinity 以保留溢出后的和
    payload = _prepare(obj)
    if version is not None:
        payload = {"version": version, "payload": payload}
    return json.dumps(payload, default=_prepare, ensure_ascii=False, allow_nan=True)


def deserialize_from_json(text: str) -> Any:
    return json.loads(text)


@dataclass
class VersionedPayload:
    version: str
    payload: Dict[str, Any]

    def to_json(self) -> str:
        return serialize_to_json(self.payload, version=self.version)

    @classmethod
    def from_json(cls, text: str) -> "VersionedPayload":
        data = json.loads(text)
        if not isinstance(data, dict) or "version" not in data or "payload" not in data:
            raise ValueError("serialized payload missing version or payload fields")
        if not isinstance(data["payload"], dict):
            raise ValueError("serialized payload must be a JSON object")
        return cls(version=str(data["version"]), payload=data["payload"])
