"""
Checked access to an already-decoded JSON value.

``json.loads`` hands back plain dicts, lists, strings, numbers, booleans and
``None``.  A ``JsonNode`` pairs one of those values with its structural path
(``data[SPUSBDataType][3][_items]``) so that every read either returns the
type the caller asked for or raises a ``ShapeError`` naming the exact spot.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterator

from .errors import ShapeError

INT64_MAX = 2**63 - 1


def json_type(value: Any) -> str:
    """Name of the JSON type of ``value`` (bool is checked before number)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


@dataclass(frozen=True, slots=True)
class JsonNode:
    value: Any
    path: str
    depth: int = 0

    @classmethod
    def root(cls, value: Any, label: str = "data") -> "JsonNode":
        return cls(value, label)

    @property
    def json_type(self) -> str:
        return json_type(self.value)

    def as_object(self) -> dict:
        if self.json_type != "object":
            raise ShapeError(self.path, "object", self.json_type)
        return self.value

    def as_array(self) -> list:
        if self.json_type != "array":
            raise ShapeError(self.path, "array", self.json_type)
        return self.value

    def elements(self) -> Iterator["JsonNode"]:
        for i, item in enumerate(self.as_array()):
            yield JsonNode(item, f"{self.path}[{i}]", self.depth + 1)

    def has(self, key: str) -> bool:
        return key in self.as_object()

    def child(self, key: str) -> "JsonNode":
        obj = self.as_object()
        if key not in obj:
            raise ShapeError(f"{self.path}[{key}]", "a value", "missing key")
        return JsonNode(obj[key], f"{self.path}[{key}]", self.depth + 1)

    def string(self, key: str) -> str:
        node = self.child(key)
        if node.json_type != "string":
            raise ShapeError(node.path, "string", node.json_type)
        return node.value

    def integer(self, key: str) -> int:
        """
        Read a JSON number as a byte count.

        Floats are truncated toward zero; the result must be a non-negative
        value that fits in a signed 64-bit integer.
        """
        node = self.child(key)
        if node.json_type != "number":
            raise ShapeError(node.path, "number", node.json_type)
        value = node.value
        if isinstance(value, float) and not math.isfinite(value):
            raise ShapeError(node.path, "finite number", repr(value))
        result = int(value)
        if result < 0 or result > INT64_MAX:
            raise ShapeError(node.path, "non-negative 64-bit integer", str(result))
        return result
