from __future__ import annotations

import ipaddress
from enum import Enum
from typing import Any, Iterable

from hue_bridge.errors import InvalidAttribute
from hue_bridge.modifier import CoordinateModifierType, ModifierType


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Attribute:
    """One writable bridge field.

    `encode` renders a pending change into the fragment merged into the request
    body. Only overrides are accepted here; numeric subclasses add the relative
    forms.
    """

    def __init__(self, key: str) -> None:
        self.key = key

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key!r})"

    def encode(self, modifier_type: Any, value: Any) -> dict[str, Any]:
        if modifier_type is not ModifierType.OVERRIDE:
            self._fail(f"{modifier_type} is not supported")
        problem = self.check(value)
        if problem:
            self._fail(problem)
        return {self.key: self.to_wire(value)}

    def check(self, value: Any) -> str | None:
        return None

    def to_wire(self, value: Any) -> Any:
        return value

    def _fail(self, message: str) -> None:
        raise InvalidAttribute([(self.key, message)])


class Flag(Attribute):
    def check(self, value: Any) -> str | None:
        if not isinstance(value, bool):
            return "must be a boolean"
        return None


class Text(Attribute):
    def __init__(self, key: str, *, min_length: int = 0, max_length: int | None = None) -> None:
        super().__init__(key)
        self.min_length = min_length
        self.max_length = max_length

    def check(self, value: Any) -> str | None:
        if not isinstance(value, str):
            return "must be a string"
        if len(value) < self.min_length:
            return f"must be at least {self.min_length} characters"
        if self.max_length is not None and len(value) > self.max_length:
            return f"must be at most {self.max_length} characters"
        return None


class Choice(Attribute):
    def __init__(self, key: str, choices: Iterable[Any]) -> None:
        super().__init__(key)
        self.choices = tuple(choices)

    def check(self, value: Any) -> str | None:
        # Compared with ==, so plain strings match str-valued enum members.
        if isinstance(value, bool) or value not in self.choices:
            allowed = ", ".join(str(self.to_wire(c)) for c in self.choices)
            return f"must be one of: {allowed}"
        return None

    def to_wire(self, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value


class IdList(Attribute):
    def check(self, value: Any) -> str | None:
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            return "must be a list of ids"
        if not value:
            return "must not be empty"
        if not all(isinstance(item, (str, int)) and not isinstance(item, bool) for item in value):
            return "ids must be strings or integers"
        return None

    def to_wire(self, value: Any) -> Any:
        return [str(item) for item in value]


class IPAddress(Attribute):
    def __init__(self, key: str, *, allow_none: bool = False) -> None:
        super().__init__(key)
        self.allow_none = allow_none

    def check(self, value: Any) -> str | None:
        if value is None and self.allow_none:
            return None
        if not isinstance(value, (str, ipaddress.IPv4Address, ipaddress.IPv6Address)):
            return "must be an IP address"
        try:
            ipaddress.ip_address(value)
        except ValueError:
            return "must be an IP address"
        return None

    def to_wire(self, value: Any) -> Any:
        if value is None:
            return "none"
        return str(ipaddress.ip_address(value))


class Integer(Attribute):
    """Integer field with an optional `*_inc` companion for relative updates.

    The bridge takes relative updates on a separate field (e.g. `bri_inc`) holding
    a signed delta and clamps the result itself.
    """

    def __init__(
        self,
        key: str,
        *,
        minimum: int,
        maximum: int,
        increment_key: str | None = None,
        increment_maximum: int | None = None,
    ) -> None:
        super().__init__(key)
        self.minimum = minimum
        self.maximum = maximum
        self.increment_key = increment_key
        self.increment_maximum = increment_maximum

    def check(self, value: Any) -> str | None:
        if not _is_integer(value):
            return "must be an integer"
        if not self.minimum <= value <= self.maximum:
            return f"must be between {self.minimum} and {self.maximum}"
        return None

    def encode(self, modifier_type: Any, value: Any) -> dict[str, Any]:
        if modifier_type is ModifierType.OVERRIDE:
            return super().encode(modifier_type, value)
        if modifier_type not in (ModifierType.INCREMENT, ModifierType.DECREMENT):
            self._fail(f"{modifier_type} is not supported")
        if self.increment_key is None or self.increment_maximum is None:
            self._fail("relative changes are not supported")
        if not _is_integer(value):
            self._fail("must be an integer")
        if not 0 <= value <= self.increment_maximum:
            self._fail(f"delta must be between 0 and {self.increment_maximum}")
        delta = value if modifier_type is ModifierType.INCREMENT else -value
        return {self.increment_key: delta}


_COORDINATE_SIGNS: dict[Any, tuple[int, int]] = {
    ModifierType.INCREMENT: (1, 1),
    ModifierType.DECREMENT: (-1, -1),
    CoordinateModifierType.INCREMENT: (1, 1),
    CoordinateModifierType.DECREMENT: (-1, -1),
    CoordinateModifierType.INCREMENT_DECREMENT: (1, -1),
    CoordinateModifierType.DECREMENT_INCREMENT: (-1, 1),
}


class Coordinates(Attribute):
    """CIE `xy` pair; overrides lie in [0, 1], relative deltas in [0, 0.5]."""

    def __init__(self, key: str, *, increment_key: str | None = None) -> None:
        super().__init__(key)
        self.increment_key = increment_key

    def check(self, value: Any) -> str | None:
        return self._check_pair(value, 1.0)

    def to_wire(self, value: Any) -> Any:
        return [float(value[0]), float(value[1])]

    def encode(self, modifier_type: Any, value: Any) -> dict[str, Any]:
        if modifier_type in (ModifierType.OVERRIDE, CoordinateModifierType.OVERRIDE):
            problem = self.check(value)
            if problem:
                self._fail(problem)
            return {self.key: self.to_wire(value)}
        signs = _COORDINATE_SIGNS.get(modifier_type)
        if signs is None:
            self._fail(f"{modifier_type} is not supported")
        if self.increment_key is None:
            self._fail("relative changes are not supported")
        problem = self._check_pair(value, 0.5)
        if problem:
            self._fail(problem)
        return {self.increment_key: [signs[0] * float(value[0]), signs[1] * float(value[1])]}

    @staticmethod
    def _check_pair(value: Any, limit: float) -> str | None:
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)) or len(value) != 2:
            return "must be an (x, y) pair"
        if not all(_is_number(v) for v in value):
            return "coordinates must be numbers"
        if not all(0.0 <= v <= limit for v in value):
            return f"coordinates must be between 0 and {limit:g}"
        return None
