"""Typed property maps read from map-editor XML."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Dict, Mapping, Optional, Union

PropertyValue = Union[int, str, bool]

_INT_PATTERN = re.compile(r"[+-]?[0-9]+\Z")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class PropertyError(ValueError):
    """Raised for malformed properties or a property of the wrong type."""


def _parse_int(name: str, text: str) -> int:
    if not _INT_PATTERN.match(text):
        raise PropertyError(f"invalid int value for property {name}: {text!r}")
    value = int(text)
    if not _INT_MIN <= value <= _INT_MAX:
        raise PropertyError(f"int value out of range for property {name}: {text!r}")
    return value


class PropertyMap:
    """A mapping from property names to int, string or bool values."""

    def __init__(self, values: Optional[Mapping[str, PropertyValue]] = None) -> None:
        self._values: Dict[str, PropertyValue] = dict(values or {})

    @classmethod
    def from_xml(cls, element: ET.Element) -> PropertyMap:
        """Build a map from a <properties> element holding <property> children."""
        values: Dict[str, PropertyValue] = {}
        for prop in element.findall("property"):
            name = prop.get("name")
            value = prop.get("value")
            if name is None or value is None:
                raise PropertyError(f"property missing name or value: {prop.attrib!r}")
            kind = prop.get("type", "string")
            if kind == "int":
                values[name] = _parse_int(name, value)
            elif kind == "string":
                values[name] = value
            elif kind == "bool":
                values[name] = value == "true"
            else:
                raise PropertyError(f"invalid property type {kind!r} for {name}")
        return cls(values)

    @classmethod
    def from_xml_string(cls, text: str) -> PropertyMap:
        try:
            element = ET.fromstring(text)
        except ET.ParseError as e:
            raise PropertyError(f"unable to parse properties: {e}") from e
        return cls.from_xml(element)

    def set_defaults(self, other: PropertyMap) -> None:
        """Copy in every property of other that this map lacks."""
        for key, value in other._values.items():
            self._values.setdefault(key, value)

    def get_int(self, key: str) -> Optional[int]:
        value = self._values.get(key)
        if value is None:
            return None
        if type(value) is not int:
            raise PropertyError(f"property {key} is not an int")
        return value

    def get_string(self, key: str) -> Optional[str]:
        value = self._values.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise PropertyError(f"property {key} is not a string")
        return value

    def get_bool(self, key: str) -> Optional[bool]:
        value = self._values.get(key)
        if value is None:
            return None
        if not isinstance(value, bool):
            raise PropertyError(f"property {key} is not a bool")
        return value

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyMap):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"PropertyMap({self._values!r})"