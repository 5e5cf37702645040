from __future__ import annotations

from datetime import datetime, timezone as tz

from hue_bridge.attributes import Choice, Flag, Integer, IPAddress, Text
from hue_bridge.modifier import StateModifier


ZIGBEE_CHANNELS = (11, 15, 20, 25)


class ConfigModifier(StateModifier):
    """Changes to the bridge configuration (`/config`)."""

    resource = "config"
    attributes = {
        "name": Text("name", min_length=4, max_length=16),
        "ipaddress": IPAddress("ipaddress"),
        "netmask": IPAddress("netmask"),
        "gateway": IPAddress("gateway"),
        "dhcp": Flag("dhcp"),
        "proxyport": Integer("proxyport", minimum=0, maximum=65535),
        "proxyaddress": IPAddress("proxyaddress", allow_none=True),
        "linkbutton": Flag("linkbutton"),
        "touchlink": Flag("touchlink"),
        "zigbeechannel": Choice("zigbeechannel", ZIGBEE_CHANNELS),
        "UTC": Text("UTC", min_length=1),
        "timezone": Text("timezone", min_length=1),
    }

    def name(self, value: str) -> "ConfigModifier":
        self._set("name", value)
        return self

    def ip_address(self, value: str) -> "ConfigModifier":
        self._set("ipaddress", value)
        return self

    def netmask(self, value: str) -> "ConfigModifier":
        self._set("netmask", value)
        return self

    def gateway(self, value: str) -> "ConfigModifier":
        self._set("gateway", value)
        return self

    def dhcp(self, value: bool) -> "ConfigModifier":
        self._set("dhcp", value)
        return self

    def proxy_port(self, value: int) -> "ConfigModifier":
        """Proxy port of the bridge; 0 disables the proxy."""
        self._set("proxyport", value)
        return self

    def proxy_address(self, value: str | None) -> "ConfigModifier":
        """Proxy address of the bridge; None disables the proxy."""
        self._set("proxyaddress", value)
        return self

    def link_button(self, value: bool) -> "ConfigModifier":
        """Only writable through portal access."""
        self._set("linkbutton", value)
        return self

    def touchlink(self) -> "ConfigModifier":
        """Start a touchlink, adding the closest lamp to the ZigBee network."""
        self._set("touchlink", True)
        return self

    def zigbee_channel(self, value: int) -> "ConfigModifier":
        self._set("zigbeechannel", value)
        return self

    def current_time(self, value: datetime | str) -> "ConfigModifier":
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(tz.utc)
            value = value.strftime("%Y-%m-%dT%H:%M:%S")
        self._set("UTC", value)
        return self

    def timezone(self, value: str) -> "ConfigModifier":
        self._set("timezone", value)
        return self
