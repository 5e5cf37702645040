import ipaddress

import pytest

from hue_bridge.attributes import Choice, Coordinates, Flag, IdList, Integer, IPAddress, Text
from hue_bridge.errors import InvalidAttribute
from hue_bridge.modifier import CoordinateModifierType, ModifierType
from hue_bridge.resources.light import Alert

BRI = Integer("bri", minimum=1, maximum=254, increment_key="bri_inc", increment_maximum=254)
XY = Coordinates("xy", increment_key="xy_inc")


@pytest.mark.parametrize("value", [1, 40, 127, 254])
def test_override_and_increment_have_distinct_wire_shapes(value):
    override = BRI.encode(ModifierType.OVERRIDE, value)
    increment = BRI.encode(ModifierType.INCREMENT, value)
    assert override == {"bri": value}
    assert increment == {"bri_inc": value}
    assert override.keys() != increment.keys()


def test_decrement_sends_negative_delta():
    assert BRI.encode(ModifierType.DECREMENT, 40) == {"bri_inc": -40}


@pytest.mark.parametrize("value", [0, 255, -1])
def test_override_outside_domain_is_rejected(value):
    with pytest.raises(InvalidAttribute) as exc:
        BRI.encode(ModifierType.OVERRIDE, value)
    assert exc.value.attributes == ["bri"]


def test_increment_delta_must_be_non_negative_and_bounded():
    with pytest.raises(InvalidAttribute):
        BRI.encode(ModifierType.INCREMENT, -5)
    with pytest.raises(InvalidAttribute):
        BRI.encode(ModifierType.DECREMENT, 255)


def test_numeric_attribute_rejects_bool_and_float():
    with pytest.raises(InvalidAttribute):
        BRI.encode(ModifierType.OVERRIDE, True)
    with pytest.raises(InvalidAttribute):
        BRI.encode(ModifierType.OVERRIDE, 12.5)


def test_attribute_without_increment_key_rejects_relative_change():
    transition = Integer("transitiontime", minimum=0, maximum=65535)
    with pytest.raises(InvalidAttribute):
        transition.encode(ModifierType.INCREMENT, 4)


def test_non_numeric_attributes_only_accept_override():
    with pytest.raises(InvalidAttribute):
        Flag("on").encode(ModifierType.INCREMENT, True)


def test_choice_accepts_enum_members_and_their_values():
    alert = Choice("alert", Alert)
    assert alert.encode(ModifierType.OVERRIDE, Alert.LSELECT) == {"alert": "lselect"}
    assert alert.encode(ModifierType.OVERRIDE, "select") == {"alert": "select"}
    with pytest.raises(InvalidAttribute):
        alert.encode(ModifierType.OVERRIDE, "blink")


def test_text_length_bounds():
    name = Text("name", min_length=4, max_length=16)
    assert name.encode(ModifierType.OVERRIDE, "Bridge") == {"name": "Bridge"}
    with pytest.raises(InvalidAttribute):
        name.encode(ModifierType.OVERRIDE, "abc")
    with pytest.raises(InvalidAttribute):
        name.encode(ModifierType.OVERRIDE, "x" * 17)


def test_coordinates_override_and_mixed_increment():
    assert XY.encode(CoordinateModifierType.OVERRIDE, (0.4, 0.3)) == {"xy": [0.4, 0.3]}
    assert XY.encode(CoordinateModifierType.INCREMENT_DECREMENT, (0.1, 0.2)) == {"xy_inc": [0.1, -0.2]}
    assert XY.encode(CoordinateModifierType.DECREMENT_INCREMENT, (0.1, 0.2)) == {"xy_inc": [-0.1, 0.2]}
    assert XY.encode(ModifierType.DECREMENT, (0.1, 0.2)) == {"xy_inc": [-0.1, -0.2]}


def test_coordinates_domain():
    with pytest.raises(InvalidAttribute):
        XY.encode(CoordinateModifierType.OVERRIDE, (1.2, 0.3))
    with pytest.raises(InvalidAttribute):
        XY.encode(CoordinateModifierType.INCREMENT, (0.6, 0.1))
    with pytest.raises(InvalidAttribute):
        XY.encode(CoordinateModifierType.OVERRIDE, (0.1,))


def test_id_list_and_ip_address():
    assert IdList("lights").encode(ModifierType.OVERRIDE, [1, "2"]) == {"lights": ["1", "2"]}
    with pytest.raises(InvalidAttribute):
        IdList("lights").encode(ModifierType.OVERRIDE, "12")

    proxy = IPAddress("proxyaddress", allow_none=True)
    assert proxy.encode(ModifierType.OVERRIDE, None) == {"proxyaddress": "none"}
    assert proxy.encode(ModifierType.OVERRIDE, "192.168.1.10") == {"proxyaddress": "192.168.1.10"}
    with pytest.raises(InvalidAttribute):
        IPAddress("gateway").encode(ModifierType.OVERRIDE, "not-an-ip")
    for not_an_address in (True, 1, 3232235777):
        with pytest.raises(InvalidAttribute):
            IPAddress("gateway").encode(ModifierType.OVERRIDE, not_an_address)
    assert IPAddress("gateway").encode(ModifierType.OVERRIDE, ipaddress.ip_address("10.0.0.1")) == {"gateway": "10.0.0.1"}
