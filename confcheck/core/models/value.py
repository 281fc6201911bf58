"""
Value model: a tagged representation of configuration values.

Validators inspect Values instead of raw Python objects, so every check sees
the same closed set of shapes regardless of where the record came from.
"""

from collections.abc import Mapping, Set
from decimal import Decimal
from enum import Enum
from numbers import Integral, Real
from typing import Any

from pydantic import BaseModel

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1

_DISPLAY_LIMIT = 60


class ValueKind(str, Enum):
    """Shape tag of a Value."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    LIST = "list"
    MAP = "map"
    OPAQUE = "opaque"


class Value(BaseModel):
    """
    A configuration value lifted into the tagged model.

    Attributes:
        kind: Shape of the value
        payload: Python scalar for null/boolean/number/string, a tuple of
                 Values for lists, a tuple of (key, value) Value pairs for
                 maps, or the original object for opaque values
    """

    kind: ValueKind
    payload: Any = None

    class Config:
        frozen = True
        arbitrary_types_allowed = True

    @property
    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    @property
    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    @property
    def is_number(self) -> bool:
        return self.kind is ValueKind.NUMBER

    @property
    def is_list(self) -> bool:
        return self.kind is ValueKind.LIST

    @property
    def is_map(self) -> bool:
        return self.kind is ValueKind.MAP

    @property
    def is_nan(self) -> bool:
        """True for float and Decimal NaNs, which order against nothing."""
        if not self.is_number:
            return False
        if isinstance(self.payload, Decimal):
            return self.payload.is_nan()
        return self.payload != self.payload

    def __eq__(self, other: object) -> bool:
        """
        Value equality: 1 == 1.0, lists element-wise, maps regardless of key order.
        """
        if not isinstance(other, Value):
            return NotImplemented
        if self.kind is not other.kind:
            return False
        if self.is_list:
            return len(self.payload) == len(other.payload) and all(
                a == b for a, b in zip(self.payload, other.payload)
            )
        if self.is_map:
            return len(self.payload) == len(other.payload) and all(
                any(key == other_key and val == other_val for other_key, other_val in other.payload)
                for key, val in self.payload
            )
        return self.payload == other.payload

    def __hash__(self) -> int:
        if self.kind in (ValueKind.LIST, ValueKind.MAP):
            return hash((self.kind, len(self.payload)))
        if self.kind is ValueKind.OPAQUE:
            return hash(self.kind)
        return hash((self.kind, self.payload))

    @property
    def entries(self) -> tuple["Value", ...]:
        """Entries of a list value (empty for any other kind)."""
        return self.payload if self.is_list else ()

    @property
    def items(self) -> tuple[tuple["Value", "Value"], ...]:
        """Key/value pairs of a map value (empty for any other kind)."""
        return self.payload if self.is_map else ()

    def integral(self) -> int | None:
        """
        Return the value as an int when it is a number with no fractional part.

        Returns:
            The integer, or None for non-numbers, fractions, NaN and infinities
        """
        if not self.is_number:
            return None
        try:
            as_int = int(self.payload)
        except (OverflowError, ValueError):
            return None
        return as_int if as_int == self.payload else None

    def unwrap(self) -> Any:
        """Convert back to plain Python objects (lists and dicts for collections)."""
        if self.is_list:
            return [entry.unwrap() for entry in self.payload]
        if self.is_map:
            return {key.unwrap(): val.unwrap() for key, val in self.payload}
        return self.payload

    def display(self) -> str:
        """Short rendering of the value itself, e.g. 'abc', 5, [3 entries]."""
        if self.kind is ValueKind.NULL:
            return "null"
        if self.kind is ValueKind.BOOLEAN:
            return "true" if self.payload else "false"
        if self.kind is ValueKind.LIST:
            return f"[{_count(len(self.payload))}]"
        if self.kind is ValueKind.MAP:
            return f"{{{_count(len(self.payload))}}}"
        if self.kind is ValueKind.OPAQUE:
            return f"<{type(self.payload).__name__}>"
        text = repr(self.payload)
        if len(text) > _DISPLAY_LIMIT:
            text = text[: _DISPLAY_LIMIT - 3] + "..."
        return text

    def describe(self) -> str:
        """Human description used in failure messages, e.g. "string 'abc'"."""
        if self.kind is ValueKind.NULL:
            return "null"
        return f"{self.kind.value} {self.display()}"


NULL = Value(kind=ValueKind.NULL)


def _count(n: int) -> str:
    return f"{n} entry" if n == 1 else f"{n} entries"


def to_value(raw: Any) -> Value:
    """
    Lift any Python object into the Value model.

    Never raises: objects with no matching shape become OPAQUE values so the
    validator that cares about the type reports the mismatch.

    Args:
        raw: The object to convert

    Returns:
        The corresponding Value
    """
    if isinstance(raw, Value):
        return raw
    if raw is None:
        return NULL
    # bool is an int subclass, check it first
    if isinstance(raw, bool):
        return Value(kind=ValueKind.BOOLEAN, payload=raw)
    if isinstance(raw, (Real, Decimal)):
        return Value(kind=ValueKind.NUMBER, payload=raw)
    if isinstance(raw, str):
        return Value(kind=ValueKind.STRING, payload=raw)
    if isinstance(raw, Mapping):
        pairs = tuple((to_value(key), to_value(val)) for key, val in raw.items())
        return Value(kind=ValueKind.MAP, payload=pairs)
    if isinstance(raw, (list, tuple, Set)):
        return Value(kind=ValueKind.LIST, payload=tuple(to_value(entry) for entry in raw))
    return Value(kind=ValueKind.OPAQUE, payload=raw)


class ValueType(str, Enum):
    """Type tags accepted by IsType, IsListEntryType and IsMapEntryType."""

    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    INTEGER = "integer"
    LONG = "long"
    FLOAT = "float"
    LIST = "list"
    MAP = "map"

    def matches(self, value: Value) -> bool:
        """Check whether a (non-null) value is of this type."""
        if self is ValueType.STRING:
            return value.kind is ValueKind.STRING
        if self is ValueType.BOOLEAN:
            return value.kind is ValueKind.BOOLEAN
        if self is ValueType.NUMBER:
            return value.kind is ValueKind.NUMBER
        if self is ValueType.INTEGER:
            return in_range(value.integral(), INT32_MIN, INT32_MAX)
        if self is ValueType.LONG:
            return in_range(value.integral(), INT64_MIN, INT64_MAX)
        if self is ValueType.FLOAT:
            return value.kind is ValueKind.NUMBER and not isinstance(value.payload, Integral)
        if self is ValueType.LIST:
            return value.kind is ValueKind.LIST
        return value.kind is ValueKind.MAP

    @property
    def label(self) -> str:
        """Name used in messages, e.g. 'an integer'."""
        article = "an" if self.value[0] in "aeiou" else "a"
        return f"{article} {self.value}"


def in_range(number: int | None, low: int, high: int) -> bool:
    return number is not None and low <= number <= high
