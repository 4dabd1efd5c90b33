"""Tagged JSON values for state, config and daemon responses.

Stored values and daemon responses are arbitrary JSON. Wrapping them in a
JsonValue keeps the kind explicit, so a missing key (``None``), a stored
``null`` and a value of the wrong kind are three different outcomes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class JsonKind(Enum):
    """Kinds of JSON data."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class JsonTypeError(TypeError):
    """Raised when a JsonValue is read as a kind it does not hold."""

    def __init__(self, expected: JsonKind, actual: JsonKind) -> None:
        super().__init__(f"Expected JSON {expected.value}, got {actual.value}")
        self.expected = expected
        self.actual = actual


@dataclass(frozen=True)
class JsonValue:
    """A JSON value tagged with its kind.

    Attributes:
        kind: Which JSON kind this value holds
        value: The payload. Arrays hold a tuple of JsonValue, objects a
            dict of str to JsonValue, scalars their plain Python value.
    """

    kind: JsonKind
    value: Any = None

    @classmethod
    def from_python(cls, obj: Any) -> "JsonValue":
        """Build a tagged value from plain JSON-compatible Python data.

        Args:
            obj: None, bool, int, float, str, list/tuple or dict with str keys

        Returns:
            Tagged value mirroring obj

        Raises:
            TypeError: If obj (or anything nested in it) is not JSON-compatible
        """
        if isinstance(obj, JsonValue):
            return obj
        if obj is None:
            return cls(JsonKind.NULL)
        # bool is a subclass of int, so it must be checked first
        if isinstance(obj, bool):
            return cls(JsonKind.BOOL, obj)
        if isinstance(obj, (int, float)):
            return cls(JsonKind.NUMBER, obj)
        if isinstance(obj, str):
            return cls(JsonKind.STRING, obj)
        if isinstance(obj, (list, tuple)):
            return cls(JsonKind.ARRAY, tuple(cls.from_python(item) for item in obj))
        if isinstance(obj, dict):
            items = {}
            for key, item in obj.items():
                if not isinstance(key, str):
                    raise TypeError(f"JSON object keys must be str, got {type(key).__name__}")
                items[key] = cls.from_python(item)
            return cls(JsonKind.OBJECT, items)
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

    def to_python(self) -> Any:
        """Return the plain Python data this value wraps."""
        if self.kind is JsonKind.ARRAY:
            return [item.to_python() for item in self.value]
        if self.kind is JsonKind.OBJECT:
            return {key: item.to_python() for key, item in self.value.items()}
        return self.value

    @property
    def is_null(self) -> bool:
        return self.kind is JsonKind.NULL

    def _expect(self, kind: JsonKind) -> Any:
        if self.kind is not kind:
            raise JsonTypeError(kind, self.kind)
        return self.value

    def as_bool(self) -> bool:
        return self._expect(JsonKind.BOOL)

    def as_number(self) -> int | float:
        return self._expect(JsonKind.NUMBER)

    def as_str(self) -> str:
        return self._expect(JsonKind.STRING)

    def as_list(self) -> list["JsonValue"]:
        return list(self._expect(JsonKind.ARRAY))

    def as_dict(self) -> dict[str, "JsonValue"]:
        return dict(self._expect(JsonKind.OBJECT))


def to_json_object(data: dict[str, Any]) -> dict[str, JsonValue]:
    """Tag every value of a decoded JSON object."""
    return {key: JsonValue.from_python(value) for key, value in data.items()}
