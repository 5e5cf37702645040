from __future__ import annotations

from hue_bridge.attributes import Flag, Text
from hue_bridge.modifier import StateModifier


class SensorAttributeModifier(StateModifier):
    resource = "sensor attributes"
    attributes = {"name": Text("name", min_length=1, max_length=32)}

    def name(self, value: str) -> "SensorAttributeModifier":
        self._set("name", value)
        return self


class SensorStateModifier(StateModifier):
    # Only CLIP sensors accept state writes.
    resource = "sensor state"
    attributes = {"presence": Flag("presence")}

    def presence(self, value: bool) -> "SensorStateModifier":
        self._set("presence", value)
        return self


class SensorConfigModifier(StateModifier):
    resource = "sensor config"
    attributes = {"on": Flag("on")}

    def on(self, value: bool) -> "SensorConfigModifier":
        self._set("on", value)
        return self
