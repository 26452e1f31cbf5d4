"""Domain: tagged JSON values and the shallow merge used for raw overrides.

Raw request bodies arrive as untyped text. Parsing them into a ``JsonValue``
makes the kind of every value explicit, so merging can refuse anything that
is not an object at the top level instead of silently misbehaving.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any


class JsonKind(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"


@dataclass(frozen=True)
class JsonValue:
    """A JSON value tagged with its kind.

    ``value`` holds ``dict[str, JsonValue]`` for objects, ``list[JsonValue]``
    for arrays and the plain Python scalar otherwise.
    """

    kind: JsonKind
    value: Any = None

    @classmethod
    def from_python(cls, obj: Any) -> "JsonValue":
        # bool before int/float: bool is an int subclass
        if obj is None:
            return cls(JsonKind.NULL)
        if isinstance(obj, bool):
            return cls(JsonKind.BOOL, obj)
        if isinstance(obj, (int, float)):
            return cls(JsonKind.NUMBER, obj)
        if isinstance(obj, str):
            return cls(JsonKind.STRING, obj)
        if isinstance(obj, (list, tuple)):
            return cls(JsonKind.ARRAY, [cls.from_python(v) for v in obj])
        if isinstance(obj, dict):
            members: dict[str, JsonValue] = {}
            for k, v in obj.items():
                if not isinstance(k, str):
                    raise TypeError(f"JSON object keys must be strings, got {type(k).__name__}")
                members[k] = cls.from_python(v)
            return cls(JsonKind.OBJECT, members)
        raise TypeError(f"Not a JSON value: {type(obj).__name__}")

    @classmethod
    def empty_object(cls) -> "JsonValue":
        return cls(JsonKind.OBJECT, {})

    def to_python(self) -> Any:
        if self.kind is JsonKind.OBJECT:
            return {k: v.to_python() for k, v in self.value.items()}
        if self.kind is JsonKind.ARRAY:
            return [v.to_python() for v in self.value]
        return self.value

    @property
    def is_object(self) -> bool:
        return self.kind is JsonKind.OBJECT


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"number {literal} is out of range")
    return value


def parse_json(text: str) -> JsonValue:
    """Parse *text* strictly (no NaN/Infinity, no overflowing floats). Raises ``ValueError``."""
    return JsonValue.from_python(
        json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    )


def shallow_merge(base: JsonValue, override: JsonValue) -> JsonValue:
    """Overlay the top-level members of *override* onto *base*.

    Colliding keys take the override's value wholesale, whatever its kind.
    Keys only in *base* keep their values. Neither input is mutated.
    """
    if not base.is_object or not override.is_object:
        raise TypeError(
            f"shallow_merge needs two objects, got {base.kind.value} and {override.kind.value}"
        )
    merged = dict(base.value)
    merged.update(override.value)
    return JsonValue(JsonKind.OBJECT, merged)
