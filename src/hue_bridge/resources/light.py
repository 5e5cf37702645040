from __future__ import annotations

from enum import Enum
from typing import TypeVar

from hue_bridge.attributes import Choice, Coordinates, Flag, Integer, Text
from hue_bridge.modifier import CoordinateModifierType, ModifierType, StateModifier


class Alert(str, Enum):
    SELECT = "select"  # one breathe cycle
    LSELECT = "lselect"  # breathe cycles for 15 seconds
    NONE = "none"


class Effect(str, Enum):
    COLORLOOP = "colorloop"
    NONE = "none"


COLOR_STATE_ATTRIBUTES = {
    "on": Flag("on"),
    "bri": Integer("bri", minimum=1, maximum=254, increment_key="bri_inc", increment_maximum=254),
    "hue": Integer("hue", minimum=0, maximum=65535, increment_key="hue_inc", increment_maximum=65534),
    "sat": Integer("sat", minimum=0, maximum=254, increment_key="sat_inc", increment_maximum=254),
    "xy": Coordinates("xy", increment_key="xy_inc"),
    "ct": Integer("ct", minimum=153, maximum=500, increment_key="ct_inc", increment_maximum=65534),
    "alert": Choice("alert", Alert),
    "effect": Choice("effect", Effect),
    "transitiontime": Integer("transitiontime", minimum=0, maximum=65535),
}


_M = TypeVar("_M", bound="ColorStateModifier")


class ColorStateModifier(StateModifier):
    """Setters shared by every resource that drives light output."""

    attributes = COLOR_STATE_ATTRIBUTES

    def on(self: _M, value: bool) -> _M:
        self._set("on", value)
        return self

    def brightness(self: _M, modifier_type: ModifierType, value: int) -> _M:
        """Brightness, 1 (dimmest) to 254."""
        self._set("bri", value, modifier_type)
        return self

    def hue(self: _M, modifier_type: ModifierType, value: int) -> _M:
        """Hue, 0 to 65535. Both ends are red, 25500 is green and 46920 is blue."""
        self._set("hue", value, modifier_type)
        return self

    def saturation(self: _M, modifier_type: ModifierType, value: int) -> _M:
        """Saturation, 0 (white) to 254 (most colored)."""
        self._set("sat", value, modifier_type)
        return self

    def color_space_coordinates(self: _M, modifier_type: CoordinateModifierType, value: tuple[float, float]) -> _M:
        """CIE xy color. Overrides take values in [0, 1], relative changes deltas in [0, 0.5]."""
        self._set("xy", value, modifier_type)
        return self

    def color_temperature(self: _M, modifier_type: ModifierType, value: int) -> _M:
        """Mired color temperature, 153 (6500K) to 500 (2000K)."""
        self._set("ct", value, modifier_type)
        return self

    def alert(self: _M, value: Alert | str) -> _M:
        self._set("alert", value)
        return self

    def effect(self: _M, value: Effect | str) -> _M:
        self._set("effect", value)
        return self

    def transition_time(self: _M, value: int) -> _M:
        """Duration of the state change, in multiples of 100ms."""
        self._set("transitiontime", value)
        return self


class LightStateModifier(ColorStateModifier):
    resource = "light state"


class LightAttributeModifier(StateModifier):
    resource = "light attributes"
    attributes = {"name": Text("name", min_length=1, max_length=32)}

    def name(self, value: str) -> "LightAttributeModifier":
        self._set("name", value)
        return self

