from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Iterator, Mapping

from hue_bridge.errors import EmptyModification, InvalidAttribute

if TYPE_CHECKING:
    from hue_bridge.attributes import Attribute


class ModifierType(Enum):
    OVERRIDE = "override"
    INCREMENT = "increment"
    DECREMENT = "decrement"

    def __str__(self) -> str:
        return self.value


class CoordinateModifierType(Enum):
    """How a change to an `xy` pair combines with the stored coordinates.

    The mixed members move the two coordinates in opposite directions:
    INCREMENT_DECREMENT adds to x and subtracts from y.
    """

    OVERRIDE = "override"
    INCREMENT = "increment"
    DECREMENT = "decrement"
    INCREMENT_DECREMENT = "increment_decrement"
    DECREMENT_INCREMENT = "decrement_increment"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PendingChange:
    attribute: str
    modifier_type: ModifierType | CoordinateModifierType
    value: Any


class StateModifier:
    """Accumulates pending changes for one kind of resource.

    Subclasses declare the bridge fields they may write in `attributes` and expose
    one setter per field. Setters never validate; every out-of-domain value is
    reported together by `serialize`. Setting a field again replaces the earlier
    change for it.
    """

    resource: ClassVar[str] = "resource"
    attributes: ClassVar[Mapping[str, "Attribute"]] = {}

    def __init__(self) -> None:
        self._changes: dict[str, PendingChange] = {}

    def _set(
        self,
        attribute: str,
        value: Any,
        modifier_type: ModifierType | CoordinateModifierType = ModifierType.OVERRIDE,
    ) -> None:
        if attribute not in self.attributes:
            raise KeyError(f"{attribute!r} is not an attribute of {self.resource}")
        self._changes[attribute] = PendingChange(attribute=attribute, modifier_type=modifier_type, value=value)

    @property
    def changes(self) -> tuple[PendingChange, ...]:
        return tuple(self._changes.values())

    def get(self, attribute: str) -> PendingChange | None:
        return self._changes.get(attribute)

    def is_empty(self) -> bool:
        return not self._changes

    def to_body(self) -> dict[str, Any]:
        return serialize(self)

    def __len__(self) -> int:
        return len(self._changes)

    def __iter__(self) -> Iterator[PendingChange]:
        return iter(self.changes)

    def __contains__(self, attribute: object) -> bool:
        return attribute in self._changes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StateModifier):
            return NotImplemented
        return type(self) is type(other) and self._changes == other._changes

    def __repr__(self) -> str:
        inner = ", ".join(f"{c.attribute}={c.modifier_type}:{c.value!r}" for c in self._changes.values())
        return f"{type(self).__name__}({inner})"


def serialize(modifier: StateModifier) -> dict[str, Any]:
    """Build the flat JSON body for a modifier's pending changes.

    Raises EmptyModification when there is nothing to send and InvalidAttribute
    listing every field whose value is out of its domain.
    """
    if modifier.is_empty():
        raise EmptyModification(modifier.resource)

    body: dict[str, Any] = {}
    problems: list[tuple[str, str]] = []
    for change in modifier.changes:
        attribute = modifier.attributes[change.attribute]
        try:
            body.update(attribute.encode(change.modifier_type, change.value))
        except InvalidAttribute as err:
            problems.extend(err.problems)

    if problems:
        raise InvalidAttribute(problems)
    return body
