from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from .errors import InvalidInputError


class JsonKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class JsonValue:
    kind: JsonKind
    raw: Any

    @classmethod
    def of(cls, value: Any) -> "JsonValue":
        # bool before number: bool is an int subclass
        if isinstance(value, str):
            return cls(JsonKind.STRING, value)
        if isinstance(value, bool):
            return cls(JsonKind.BOOL, value)
        if isinstance(value, (int, float)):
            return cls(JsonKind.NUMBER, value)
        if value is None:
            return cls(JsonKind.NULL, None)
        if isinstance(value, (list, tuple)):
            return cls(JsonKind.ARRAY, list(value))
        if isinstance(value, Mapping):
            return cls(JsonKind.OBJECT, dict(value))
        raise InvalidInputError(
            f"Unsupported JSON value of type {type(value).__name__}",
            {"value": repr(value)},
        )

    def to_storage_string(self) -> str:
        if self.kind is JsonKind.STRING:
            return self.raw
        if self.kind is JsonKind.BOOL:
            return "true" if self.raw else "false"
        if self.kind is JsonKind.NUMBER:
            return str(self.raw)
        if self.kind is JsonKind.NULL:
            return "null"
        try:
            return json.dumps(self.raw, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Cannot serialize {self.kind.value}: {e}") from e


def stringify(value: Any) -> str:
    return JsonValue.of(value).to_storage_string()


def flatten(tree: Any, separator: str = ".") -> Dict[str, Any]:
    """Flatten nested mappings into ``{"a.b.c": leaf}``.

    Scalars and lists are leaves; lists are never walked into. Empty nested
    mappings contribute nothing.
    """
    if not isinstance(tree, Mapping):
        raise InvalidInputError(
            f"Expected a mapping at top level, got {type(tree).__name__}"
        )
    out: Dict[str, Any] = {}
    _walk(tree, None, separator, out)
    return out


def _walk(node: Mapping[str, Any], prefix: Optional[str], separator: str, out: Dict[str, Any]) -> None:
    for k, v in node.items():
        path = str(k) if prefix is None else f"{prefix}{separator}{k}"
        if isinstance(v, Mapping):
            _walk(v, path, separator, out)
        else:
            out[path] = v


@runtime_checkable
class JsonMapper(Protocol):
    def flatten_json(self, tree: Mapping[str, Any]) -> Dict[str, Any]: ...


class NestedJsonMapper:
    """Default mapper: dotted paths, or any other separator."""

    def __init__(self, separator: str = ".") -> None:
        self.separator = separator

    def flatten_json(self, tree: Mapping[str, Any]) -> Dict[str, Any]:
        return flatten(tree, self.separator)
