from datetime import datetime, timedelta, timezone

import pytest

from hue_bridge.errors import EmptyModification, InvalidAttribute
from hue_bridge.modifier import CoordinateModifierType, ModifierType, PendingChange, serialize
from hue_bridge.resources.config import ConfigModifier
from hue_bridge.resources.group import GroupAttributeModifier, GroupStateModifier
from hue_bridge.resources.light import Alert, Effect, LightAttributeModifier, LightStateModifier
from hue_bridge.resources.scene import SceneLightStateModifier, SceneModifier
from hue_bridge.resources.sensor import SensorConfigModifier, SensorStateModifier


def test_brightness_increment_and_saturation_override():
    modifier = (
        LightStateModifier()
        .brightness(ModifierType.INCREMENT, 40)
        .saturation(ModifierType.OVERRIDE, 200)
    )
    assert serialize(modifier) == {"bri_inc": 40, "sat": 200}


@pytest.mark.parametrize(
    "first,second",
    [
        ((ModifierType.OVERRIDE, 100), (ModifierType.OVERRIDE, 150)),
        ((ModifierType.OVERRIDE, 100), (ModifierType.DECREMENT, 30)),
        ((ModifierType.INCREMENT, 10), (ModifierType.OVERRIDE, 254)),
    ],
)
def test_setting_same_attribute_twice_keeps_last_write(first, second):
    modifier = LightStateModifier().brightness(*first).brightness(*second)
    assert len(modifier) == 1
    assert modifier.get("bri") == PendingChange(attribute="bri", modifier_type=second[0], value=second[1])


def test_last_write_replaces_increment_field_in_body():
    modifier = LightStateModifier().brightness(ModifierType.INCREMENT, 10).brightness(ModifierType.OVERRIDE, 90)
    assert modifier.to_body() == {"bri": 90}


def test_empty_modifier_fails_to_serialize():
    with pytest.raises(EmptyModification):
        serialize(LightStateModifier())
    with pytest.raises(EmptyModification):
        ConfigModifier().to_body()


def test_invalid_values_are_reported_together_at_serialization():
    modifier = (
        LightStateModifier()
        .on(True)
        .saturation(ModifierType.OVERRIDE, 300)
        .color_temperature(ModifierType.OVERRIDE, 100)
    )
    with pytest.raises(InvalidAttribute) as exc:
        modifier.to_body()
    assert exc.value.attributes == ["sat", "ct"]


def test_serialization_does_not_consume_the_builder():
    modifier = LightStateModifier().on(False).transition_time(4)
    first = modifier.to_body()
    second = modifier.to_body()
    assert first == second == {"on": False, "transitiontime": 4}
    assert len(modifier) == 2
    assert "on" in modifier


def test_full_light_state_body():
    modifier = (
        LightStateModifier()
        .on(True)
        .hue(ModifierType.DECREMENT, 1000)
        .color_space_coordinates(CoordinateModifierType.OVERRIDE, (0.3, 0.3))
        .color_temperature(ModifierType.INCREMENT, 20)
        .alert(Alert.SELECT)
        .effect(Effect.COLORLOOP)
    )
    assert modifier.to_body() == {
        "on": True,
        "hue_inc": -1000,
        "xy": [0.3, 0.3],
        "ct_inc": 20,
        "alert": "select",
        "effect": "colorloop",
    }


def test_builders_are_equal_by_kind_and_changes():
    assert LightStateModifier().on(True) == LightStateModifier().on(True)
    assert LightStateModifier().on(True) != GroupStateModifier().on(True)


def test_group_state_adds_scene():
    body = GroupStateModifier().scene("AB34EF5").brightness(ModifierType.DECREMENT, 20).to_body()
    assert body == {"scene": "AB34EF5", "bri_inc": -20}


def test_group_and_light_attributes():
    assert LightAttributeModifier().name("Desk").to_body() == {"name": "Desk"}
    body = GroupAttributeModifier().name("Kitchen").lights(["1", "2"]).room_class("Kitchen").to_body()
    assert body == {"name": "Kitchen", "lights": ["1", "2"], "class": "Kitchen"}
    with pytest.raises(InvalidAttribute):
        GroupAttributeModifier().room_class("Dungeon").to_body()


def test_scene_modifiers():
    assert SceneModifier().name("Relax").store_light_state().to_body() == {"name": "Relax", "storelightstate": True}
    body = SceneLightStateModifier().on(True).brightness(120).color_temperature(366).to_body()
    assert body == {"on": True, "bri": 120, "ct": 366}


def test_config_modifier():
    body = (
        ConfigModifier()
        .name("Hallway")
        .dhcp(False)
        .ip_address("192.168.1.2")
        .proxy_address(None)
        .zigbee_channel(15)
        .current_time(datetime(2024, 3, 1, 12, 30, 0))
        .touchlink()
        .to_body()
    )
    assert body == {
        "name": "Hallway",
        "dhcp": False,
        "ipaddress": "192.168.1.2",
        "proxyaddress": "none",
        "zigbeechannel": 15,
        "UTC": "2024-03-01T12:30:00",
        "touchlink": True,
    }
    with pytest.raises(InvalidAttribute) as exc:
        ConfigModifier().zigbee_channel(12).name("abc").to_body()
    assert exc.value.attributes == ["zigbeechannel", "name"]


def test_current_time_converts_aware_datetimes_to_utc():
    local = datetime(2024, 3, 1, 12, 30, 0, tzinfo=timezone(timedelta(hours=2)))
    assert ConfigModifier().current_time(local).to_body() == {"UTC": "2024-03-01T10:30:00"}
    assert ConfigModifier().current_time("2024-03-01T10:30:00").to_body() == {"UTC": "2024-03-01T10:30:00"}


def test_sensor_modifiers():
    assert SensorStateModifier().presence(True).to_body() == {"presence": True}
    assert SensorConfigModifier().on(False).to_body() == {"on": False}
