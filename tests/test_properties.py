import xml.etree.ElementTree as ET

import pytest

from meez3d.properties import PropertyError, PropertyMap

SAMPLE = """
<properties>
  <property name="speed" type="int" value="-12"/>
  <property name="color" value="red"/>
  <property name="label" type="string" value="hello"/>
  <property name="solid" type="bool" value="true"/>
  <property name="hidden" type="bool" value="false"/>
</properties>
"""


def test_parse_all_types():
    props = PropertyMap.from_xml_string(SAMPLE)
    assert props.get_int("speed") == -12
    assert props.get_string("color") == "red"
    assert props.get_string("label") == "hello"
    assert props.get_bool("solid") is True
    assert props.get_bool("hidden") is False


def test_from_xml_element_matches_string():
    element = ET.fromstring(SAMPLE)
    assert PropertyMap.from_xml(element) == PropertyMap.from_xml_string(SAMPLE)


def test_missing_key_is_none():
    props = PropertyMap.from_xml_string(SAMPLE)
    assert props.get_int("absent") is None
    assert props.get_string("absent") is None
    assert props.get_bool("absent") is None


def test_wrong_type_raises():
    props = PropertyMap.from_xml_string(SAMPLE)
    with pytest.raises(PropertyError):
        props.get_int("color")
    with pytest.raises(PropertyError):
        props.get_int("solid")
    with pytest.raises(PropertyError):
        props.get_string("speed")
    with pytest.raises(PropertyError):
        props.get_bool("speed")
    with pytest.raises(PropertyError):
        props.get_bool("color")
    assert props.get_string("color") == "red"
    assert props.get_int("speed") == -12


def test_bool_is_only_true_for_true():
    props = PropertyMap.from_xml_string(
        '<properties><property name="b" type="bool" value="True"/></properties>'
    )
    assert props.get_bool("b") is False


@pytest.mark.parametrize("value", ["abc", "1.5", "", "99999999999"])
def test_invalid_int_raises(value):
    text = f'<properties><property name="n" type="int" value="{value}"/></properties>'
    with pytest.raises(PropertyError):
        PropertyMap.from_xml_string(text)


def test_unknown_type_raises():
    text = '<properties><property name="f" type="float" value="1.0"/></properties>'
    with pytest.raises(PropertyError):
        PropertyMap.from_xml_string(text)


def test_missing_value_attribute_raises():
    with pytest.raises(PropertyError):
        PropertyMap.from_xml_string('<properties><property name="x"/></properties>')


def test_malformed_xml_raises():
    with pytest.raises(PropertyError):
        PropertyMap.from_xml_string("<properties><property")


def test_later_duplicate_wins():
    text = (
        "<properties>"
        '<property name="x" value="first"/>'
        '<property name="x" value="second"/>'
        "</properties>"
    )
    assert PropertyMap.from_xml_string(text).get_string("x") == "second"


def test_set_defaults_keeps_existing_and_adds_missing():
    props = PropertyMap({"a": 1, "b": "own"})
    defaults = PropertyMap({"b": "default", "c": True})
    props.set_defaults(defaults)
    assert props.get_int("a") == 1
    assert props.get_string("b") == "own"
    assert props.get_bool("c") is True
    assert len(props) == 3


def test_empty_properties():
    props = PropertyMap.from_xml_string("<properties/>")
    assert len(props) == 0
    assert "anything" not in props