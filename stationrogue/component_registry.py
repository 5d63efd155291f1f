"""Component type ids and dynamic access to component properties."""

from __future__ import annotations

import dataclasses
import re
from enum import IntEnum
from typing import Any


class ComponentID(IntEnum):
    """Identifiers of the component types used by the game."""

    POSITION = 0
    RENDERABLE = 1
    PL = 2
    COLLISION = 3
    AI = 4
    MAP = 5
    APPEARANCE = 6
    CAMERA = 7
    PLAYER = 8
    STATS = 9
    MAP_TYPE = 10
    NAME = 11
    MAP_CONTEXT = 12
    INVENTORY = 13
    ITEM = 14
    FOV = 15
    EQUIPMENT = 16
    CONTAINER = 17


_COMPONENT_NAMES: dict[str, ComponentID] = {
    "Position": ComponentID.POSITION,
    "Renderable": ComponentID.RENDERABLE,
    "Collision": ComponentID.COLLISION,
    "AI": ComponentID.AI,
    "Map": ComponentID.MAP,
    "Appearance": ComponentID.APPEARANCE,
    "Camera": ComponentID.CAMERA,
    "Player": ComponentID.PLAYER,
    "Stats": ComponentID.STATS,
    "MapType": ComponentID.MAP_TYPE,
    "Name": ComponentID.NAME,
    "MapContext": ComponentID.MAP_CONTEXT,
    "Inventory": ComponentID.INVENTORY,
    "Item": ComponentID.ITEM,
    "FOV": ComponentID.FOV,
    "Equipment": ComponentID.EQUIPMENT,
}


def component_id_by_name(name: str) -> ComponentID | None:
    """Look up a component id by name, exact match first, then case-insensitively."""
    if name in _COMPONENT_NAMES:
        return _COMPONENT_NAMES[name]
    lowered = name.lower()
    return next(
        (cid for cname, cid in _COMPONENT_NAMES.items() if cname.lower() == lowered),
        None,
    )


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def _field_name(component: Any, property_name: str) -> str:
    if isinstance(component, type) or not dataclasses.is_dataclass(component):
        raise TypeError(f"component is not a struct: {type(component).__name__}")
    names = {f.name for f in dataclasses.fields(component)}
    if property_name in names:
        return property_name
    snake = _CAMEL_BOUNDARY.sub("_", property_name).lower()
    if snake in names:
        return snake
    raise AttributeError(f"property not found: {property_name}")


def get_component_property(component: Any, property_name: str) -> Any:
    """Return a field of a dataclass component.

    The name may be given as the field itself or in CamelCase (``MaxHealth``).
    """
    return getattr(component, _field_name(component, property_name))


def _convert(current: Any, value: Any, property_name: str) -> Any:
    kind = type(value).__name__
    if isinstance(current, bool):
        if not isinstance(value, bool):
            raise ValueError(f"cannot convert {kind} to bool for property {property_name}")
        return value
    if isinstance(current, int):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"cannot convert {kind} to int for property {property_name}")
        return int(value)
    if isinstance(current, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"cannot convert {kind} to float for property {property_name}")
        return float(value)
    if isinstance(current, str):
        if not isinstance(value, str):
            raise ValueError(f"cannot convert {kind} to string for property {property_name}")
        return value
    if type(current) is type(value):
        return value
    raise ValueError(
        f"unsupported property type: {type(current).__name__} for {property_name}"
    )


def set_component_property(component: Any, property_name: str, value: Any) -> None:
    """Set a field of a dataclass component, converting numbers as needed.

    Integer fields take ints or floats (truncated), float fields take ints or
    floats, bool and string fields take only their own type; any other field
    must be given a value of exactly its current type.
    """
    name = _field_name(component, property_name)
    current = getattr(component, name)
    setattr(component, name, _convert(current, value, property_name))