from __future__ import annotations

from hue_bridge.attributes import Choice, IdList, Text
from hue_bridge.modifier import StateModifier
from hue_bridge.resources.light import COLOR_STATE_ATTRIBUTES, ColorStateModifier


# Room classes accepted by the bridge for groups of type "Room".
ROOM_CLASSES = (
    "Living room",
    "Kitchen",
    "Dining",
    "Bedroom",
    "Kids bedroom",
    "Bathroom",
    "Nursery",
    "Recreation",
    "Office",
    "Gym",
    "Hallway",
    "Toilet",
    "Front door",
    "Garage",
    "Terrace",
    "Garden",
    "Driveway",
    "Carport",
    "Other",
)


class GroupStateModifier(ColorStateModifier):
    """Action applied to every light of a group (`/groups/<id>/action`)."""

    resource = "group action"
    attributes = {**COLOR_STATE_ATTRIBUTES, "scene": Text("scene", min_length=1)}

    def scene(self, value: str) -> "GroupStateModifier":
        """Recall a scene on the group's lights."""
        self._set("scene", value)
        return self


class GroupAttributeModifier(StateModifier):
    resource = "group attributes"
    attributes = {
        "name": Text("name", min_length=1, max_length=32),
        "lights": IdList("lights"),
        "class": Choice("class", ROOM_CLASSES),
    }

    def name(self, value: str) -> "GroupAttributeModifier":
        self._set("name", value)
        return self

    def lights(self, value: list[str]) -> "GroupAttributeModifier":
        self._set("lights", value)
        return self

    def room_class(self, value: str) -> "GroupAttributeModifier":
        self._set("class", value)
        return self
