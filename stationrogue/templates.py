"""Templates for monsters, items and containers, loaded from JSON files."""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, TypeVar

from stationrogue.components import RGBA


class TemplateError(Exception):
    """Raised when a template cannot be read, decoded or validated."""


_T = TypeVar("_T")


def _lookup(obj: dict[str, Any], key: str) -> Any:
    """Find a key exactly, else case-insensitively; None when absent."""
    if key in obj:
        return obj[key]
    folded = key.casefold()
    for name, value in obj.items():
        if name.casefold() == folded:
            return value
    return None


def _kind(value: Any) -> str:
    return type(value).__name__


def _int(obj: dict[str, Any], key: str) -> int:
    value = _lookup(obj, key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TemplateError(f"cannot decode {_kind(value)} into int field {key!r}")
    return value


def _str(obj: dict[str, Any], key: str) -> str:
    value = _lookup(obj, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TemplateError(f"cannot decode {_kind(value)} into string field {key!r}")
    return value


def _bool(obj: dict[str, Any], key: str) -> bool:
    value = _lookup(obj, key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TemplateError(f"cannot decode {_kind(value)} into bool field {key!r}")
    return value


def _object(value: Any, what: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TemplateError(f"cannot decode {_kind(value)} into object {what!r}")
    return value


def _list(obj: dict[str, Any], key: str, item: Callable[[Any], _T]) -> list[_T]:
    value = _lookup(obj, key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TemplateError(f"cannot decode {_kind(value)} into list field {key!r}")
    return [item(element) for element in value]


def _tag(value: Any) -> str:
    if not isinstance(value, str):
        raise TemplateError(f"cannot decode {_kind(value)} into tag string")
    return value


@dataclass
class EntityTemplate:
    """A template for creating monsters, NPCs and other creatures."""

    id: str = ""
    name: str = ""
    description: str = ""
    tile_x: int = 0
    tile_y: int = 0
    color: str = ""
    health: int = 0
    attack: int = 0
    defense: int = 0
    level: int = 0
    xp: int = 0
    recovery: int = 0
    action_points: int = 0
    max_action_points: int = 0
    healing_factor: int = 0
    ai_type: str = ""
    tags: list[str] = field(default_factory=list)
    blocks_path: bool = False
    spawn_weight: int = 0

    @classmethod
    def from_json(cls, data: Any) -> "EntityTemplate":
        obj = _object(data, "entity template")
        return cls(
            id=_str(obj, "id"),
            name=_str(obj, "name"),
            description=_str(obj, "description"),
            tile_x=_int(obj, "tileX"),
            tile_y=_int(obj, "tileY"),
            color=_str(obj, "color"),
            health=_int(obj, "health"),
            attack=_int(obj, "attack"),
            defense=_int(obj, "defense"),
            level=_int(obj, "level"),
            xp=_int(obj, "xp"),
            recovery=_int(obj, "recovery"),
            action_points=_int(obj, "actionPoints"),
            max_action_points=_int(obj, "maxActionPoints"),
            healing_factor=_int(obj, "healingFactor"),
            ai_type=_str(obj, "aiType"),
            tags=_list(obj, "tags", _tag),
            blocks_path=_bool(obj, "blocksPath"),
            spawn_weight=_int(obj, "spawnWeight"),
        )


def _effect(value: Any) -> dict[str, Any]:
    return dict(_object(value, "effect"))


@dataclass
class ItemTemplate:
    """A template for creating items."""

    id: str = ""
    name: str = ""
    description: str = ""
    item_type: str = ""
    tile_x: int = 0
    tile_y: int = 0
    color: str = ""
    value: int = 0
    weight: int = 0
    tags: list[str] = field(default_factory=list)
    equip_slot: str = ""
    effects: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "ItemTemplate":
        obj = _object(data, "item template")
        return cls(
            id=_str(obj, "id"),
            name=_str(obj, "name"),
            description=_str(obj, "description"),
            item_type=_str(obj, "item_type"),
            tile_x=_int(obj, "tile_x"),
            tile_y=_int(obj, "tile_y"),
            color=_str(obj, "color"),
            value=_int(obj, "value"),
            weight=_int(obj, "weight"),
            tags=_list(obj, "tags", _tag),
            equip_slot=_str(obj, "equip_slot"),
            effects=_list(obj, "effects", _effect),
        )


@dataclass
class InitialItem:
    """Items a container starts with."""

    template_id: str = ""
    count: int = 0

    @classmethod
    def from_json(cls, data: Any) -> "InitialItem":
        obj = _object(data, "initial item")
        return cls(template_id=_str(obj, "template_id"), count=_int(obj, "count"))


@dataclass
class LootEntry:
    """One possible drop in a loot table."""

    template_id: str = ""
    weight: int = 0
    min_count: int = 0
    max_count: int = 0

    @classmethod
    def from_json(cls, data: Any) -> "LootEntry":
        obj = _object(data, "loot entry")
        return cls(
            template_id=_str(obj, "template_id"),
            weight=_int(obj, "weight"),
            min_count=_int(obj, "min_count"),
            max_count=_int(obj, "max_count"),
        )


@dataclass
class LootTable:
    """Weighted entries from which random container contents are drawn."""

    entries: list[LootEntry] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "LootTable":
        obj = _object(data, "loot table")
        return cls(entries=_list(obj, "entries", LootEntry.from_json))


@dataclass
class ContainerTemplate:
    """A template for creating containers."""

    id: str = ""
    name: str = ""
    description: str = ""
    tile_x: int = 0
    tile_y: int = 0
    color: str = ""
    capacity: int = 0
    locked: bool = False
    key_id: str = ""
    initial_items: list[InitialItem] = field(default_factory=list)
    loot_table: LootTable = field(default_factory=LootTable)

    @classmethod
    def from_json(cls, data: Any) -> "ContainerTemplate":
        obj = _object(data, "container template")
        return cls(
            id=_str(obj, "id"),
            name=_str(obj, "name"),
            description=_str(obj, "description"),
            tile_x=_int(obj, "tile_x"),
            tile_y=_int(obj, "tile_y"),
            color=_str(obj, "color"),
            capacity=_int(obj, "capacity"),
            locked=_bool(obj, "locked"),
            key_id=_str(obj, "key_id"),
            initial_items=_list(obj, "initial_items", InitialItem.from_json),
            loot_table=LootTable.from_json(_lookup(obj, "loot_table")),
        )


_HEX_COLOR = re.compile(r"#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})")
_WHITE = RGBA(255, 255, 255, 255)


def parse_hex_color(hex_string: str) -> RGBA:
    """Parse '#rrggbb' into an opaque colour.

    Strings shorter than seven characters give opaque black; malformed ones
    give opaque white.
    """
    if len(hex_string) < 7:
        return RGBA(0, 0, 0, 255)
    match = _HEX_COLOR.match(hex_string)
    if match is None:
        return _WHITE
    r, g, b = (int(part, 16) for part in match.groups())
    return RGBA(r, g, b, 255)


def validate_item_template(template: ItemTemplate) -> None:
    """Raise TemplateError unless the item template has an id, a name and a type."""
    if not template.id:
        raise TemplateError("item template missing ID")
    if not template.name:
        raise TemplateError(f"item template '{template.id}' missing name")
    if not template.item_type:
        raise TemplateError(f"item template '{template.id}' missing item_type")


def validate_container_template(template: ContainerTemplate) -> None:
    """Raise TemplateError unless the container template has an id and a name."""
    if not template.id:
        raise TemplateError("container template missing ID")
    if not template.name:
        raise TemplateError(f"container template '{template.id}' missing name")


def _read_json(file_path: str | os.PathLike[str]) -> Any:
    try:
        raw = Path(file_path).read_bytes()
    except OSError as exc:
        raise TemplateError(str(exc)) from exc
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError) as exc:
        raise TemplateError(f"invalid JSON in {file_path}: {exc}") from exc


def _json_files(dir_path: str | os.PathLike[str], what: str) -> list[Path]:
    try:
        entries = sorted(Path(dir_path).iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise TemplateError(f"failed to read {what} directory: {exc}") from exc
    return [entry for entry in entries if entry.name.endswith(".json")]


class EntityTemplateManager:
    """Holds every loaded entity, item and container template by id."""

    def __init__(self) -> None:
        self.templates: dict[str, EntityTemplate] = {}
        self.item_templates: dict[str, ItemTemplate] = {}
        self.container_templates: dict[str, ContainerTemplate] = {}

    def _load_directory(
        self,
        dir_path: str | os.PathLike[str],
        what: str,
        load: Callable[[Path], None],
    ) -> None:
        for path in _json_files(dir_path, what):
            try:
                load(path)
            except TemplateError as exc:
                raise TemplateError(f"failed to load {what} from {path.name}: {exc}") from exc

    def load_templates_from_directory(self, dir_path: str | os.PathLike[str]) -> None:
        """Load every .json entity template in a directory, in name order."""
        self._load_directory(dir_path, "template", self.load_template_from_file)

    def load_item_templates_from_directory(self, dir_path: str | os.PathLike[str]) -> None:
        """Load every .json item template in a directory, in name order."""
        self._load_directory(dir_path, "item template", self.load_item_template_from_file)

    def load_container_templates_from_directory(
        self, dir_path: str | os.PathLike[str]
    ) -> None:
        """Load every .json container template in a directory, in name order."""
        self._load_directory(
            dir_path, "container template", self.load_container_template_from_file
        )

    def load_template_from_file(self, file_path: str | os.PathLike[str]) -> None:
        template = EntityTemplate.from_json(_read_json(file_path))
        if not template.id:
            raise TemplateError(f"template ID cannot be empty: {file_path}")
        self.templates[template.id] = template

    def load_item_template_from_file(self, file_path: str | os.PathLike[str]) -> None:
        template = ItemTemplate.from_json(_read_json(file_path))
        try:
            validate_item_template(template)
        except TemplateError as exc:
            raise TemplateError(f"invalid item template in {file_path}: {exc}") from exc
        self.item_templates[template.id] = template

    def load_container_template_from_file(self, file_path: str | os.PathLike[str]) -> None:
        template = ContainerTemplate.from_json(_read_json(file_path))
        try:
            validate_container_template(template)
        except TemplateError as exc:
            raise TemplateError(f"invalid container template in {file_path}: {exc}") from exc
        self.container_templates[template.id] = template

    def get_template(self, template_id: str) -> EntityTemplate | None:
        return self.templates.get(template_id)

    def get_item_template(self, template_id: str) -> ItemTemplate | None:
        return self.item_templates.get(template_id)

    def get_container_template(self, template_id: str) -> ContainerTemplate | None:
        return self.container_templates.get(template_id)