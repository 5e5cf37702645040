from __future__ import annotations

from hue_bridge.attributes import Choice, Coordinates, Flag, IdList, Integer, Text
from hue_bridge.modifier import StateModifier
from hue_bridge.resources.light import Effect


class SceneModifier(StateModifier):
    resource = "scene"
    attributes = {
        "name": Text("name", min_length=1, max_length=32),
        "lights": IdList("lights"),
        "storelightstate": Flag("storelightstate"),
    }

    def name(self, value: str) -> "SceneModifier":
        self._set("name", value)
        return self

    def lights(self, value: list[str]) -> "SceneModifier":
        self._set("lights", value)
        return self

    def store_light_state(self, value: bool = True) -> "SceneModifier":
        """Overwrite the stored light states with the lights' current state."""
        self._set("storelightstate", value)
        return self


class SceneLightStateModifier(StateModifier):
    """State stored for one light of a scene.

    Values are absolute only: a stored scene state has no current value on the
    bridge that a delta could apply to.
    """

    resource = "scene light state"
    attributes = {
        "on": Flag("on"),
        "bri": Integer("bri", minimum=1, maximum=254),
        "hue": Integer("hue", minimum=0, maximum=65535),
        "sat": Integer("sat", minimum=0, maximum=254),
        "xy": Coordinates("xy"),
        "ct": Integer("ct", minimum=153, maximum=500),
        "effect": Choice("effect", Effect),
        "transitiontime": Integer("transitiontime", minimum=0, maximum=65535),
    }

    def on(self, value: bool) -> "SceneLightStateModifier":
        self._set("on", value)
        return self

    def brightness(self, value: int) -> "SceneLightStateModifier":
        self._set("bri", value)
        return self

    def hue(self, value: int) -> "SceneLightStateModifier":
        self._set("hue", value)
        return self

    def saturation(self, value: int) -> "SceneLightStateModifier":
        self._set("sat", value)
        return self

    def color_space_coordinates(self, value: tuple[float, float]) -> "SceneLightStateModifier":
        self._set("xy", value)
        return self

    def color_temperature(self, value: int) -> "SceneLightStateModifier":
        self._set("ct", value)
        return self

    def effect(self, value: Effect | str) -> "SceneLightStateModifier":
        self._set("effect", value)
        return self

    def transition_time(self, value: int) -> "SceneLightStateModifier":
        self._set("transitiontime", value)
        return self
