"""Data components attached to game entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from itertools import chain
from typing import Any

from stationrogue.ecs import EntityID


@dataclass(frozen=True)
class RGBA:
    """An 8-bit-per-channel colour."""

    r: int
    g: int
    b: int
    a: int = 255


BLACK = RGBA(0, 0, 0, 255)


@dataclass
class PositionComponent:
    """Where an entity stands on its map."""

    x: int = 0
    y: int = 0


@dataclass
class RenderableComponent:
    """How an entity is drawn: by glyph or by a position in the tileset."""

    char: str = ""
    tile_x: int = 0
    tile_y: int = 0
    use_tile_pos: bool = False
    fg: RGBA | None = None
    bg: RGBA | None = BLACK

    @classmethod
    def from_glyph(cls, glyph: str, fg: RGBA) -> "RenderableComponent":
        """Draw with a character of the tileset on a black background."""
        return cls(char=glyph, use_tile_pos=False, fg=fg, bg=BLACK)

    @classmethod
    def from_tile_pos(cls, tile_x: int, tile_y: int, fg: RGBA) -> "RenderableComponent":
        """Draw with the tile at (tile_x, tile_y) of the tileset on a black background."""
        return cls(tile_x=tile_x, tile_y=tile_y, use_tile_pos=True, fg=fg, bg=BLACK)


@dataclass
class PlayerComponent:
    """Marks an entity as controlled by the player."""


@dataclass
class StatsComponent:
    """Combat and progression statistics."""

    health: int = 0
    max_health: int = 0
    attack: int = 0
    defense: int = 0
    level: int = 0
    exp: int = 0
    recovery: int = 0
    action_points: int = 0
    max_action_points: int = 0
    healing_factor: int = 0


@dataclass
class CollisionComponent:
    """Whether an entity blocks movement."""

    blocks: bool = False


@dataclass
class PathNode:
    """One step of a path."""

    x: int
    y: int


@dataclass
class AIComponent:
    """AI behaviour state."""

    type: str = ""
    sight_range: int = 0
    target: int = 0
    path: list[PathNode] = field(default_factory=list)
    last_known_target_x: int = 0
    last_known_target_y: int = 0


@dataclass
class CameraComponent:
    """Viewport top-left corner and the entity it follows."""

    x: int = 0
    y: int = 0
    target: int = 0


@dataclass
class InventoryComponent:
    """Items carried by an entity, up to a fixed capacity."""

    max_capacity: int
    items: list[EntityID] = field(default_factory=list)

    def add_item(self, item_id: EntityID) -> bool:
        """Add an item; return False if the inventory is full."""
        if self.is_full():
            return False
        self.items.append(item_id)
        return True

    def remove_item(self, item_id: EntityID) -> bool:
        """Remove an item, moving the last item into its place."""
        try:
            idx = self.items.index(item_id)
        except ValueError:
            return False
        last = self.items.pop()
        if idx < len(self.items):
            self.items[idx] = last
        return True

    def item_at(self, index: int) -> EntityID:
        """Return the item at index, or 0 if the index is out of range."""
        if 0 <= index < len(self.items):
            return self.items[index]
        return 0

    def has_space(self) -> bool:
        return len(self.items) < self.max_capacity

    def is_full(self) -> bool:
        return len(self.items) >= self.max_capacity

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class ItemComponent:
    """Marks an entity as a collectible item."""

    item_type: str
    value: int
    weight: int
    description: str = ""
    template_id: str = ""
    data: Any = None

    @classmethod
    def from_template(
        cls, template_id: str, item_type: str, value: int, weight: int, description: str
    ) -> "ItemComponent":
        return cls(
            item_type=item_type,
            value=value,
            weight=weight,
            description=description,
            template_id=template_id,
        )


@dataclass
class FOVComponent:
    """Field of vision, optionally emitting light."""

    range: int
    emits_light: bool = False
    light_range: int = 0

    @classmethod
    def light_source(cls, vision_range: int, light_range: int) -> "FOVComponent":
        """A field of vision that also lights its surroundings."""
        return cls(range=vision_range, emits_light=True, light_range=light_range)


class EquipmentSlot(str, Enum):
    HEAD = "head"
    BODY = "body"
    MAIN_HAND = "mainhand"
    OFF_HAND = "offhand"
    FEET = "feet"
    ACCESSORY = "accessory"


@dataclass
class ItemEffect:
    """An effect an equipped item has on a component property."""

    component: str
    property: str
    operation: str
    value: Any


@dataclass
class EquipmentComponent:
    """Equipped items by slot and the effects they grant."""

    equipped_items: dict[EquipmentSlot, EntityID] = field(default_factory=dict)
    active_effects: dict[EntityID, list[ItemEffect]] = field(default_factory=dict)

    def is_slot_occupied(self, slot: EquipmentSlot) -> bool:
        return slot in self.equipped_items

    def equipped_item(self, slot: EquipmentSlot) -> EntityID:
        """Return the item in a slot, or 0 if the slot is empty."""
        return self.equipped_items.get(slot, 0)

    def equip_item(self, slot: EquipmentSlot, item_id: EntityID) -> None:
        self.equipped_items[slot] = item_id

    def unequip_item(self, slot: EquipmentSlot) -> EntityID:
        """Empty a slot and return what was in it, or 0 if it was empty."""
        return self.equipped_items.pop(slot, 0)

    def add_effect(self, item_id: EntityID, effect: ItemEffect) -> None:
        self.active_effects.setdefault(item_id, []).append(effect)

    def remove_effects(self, item_id: EntityID) -> None:
        self.active_effects.pop(item_id, None)

    def all_effects(self) -> list[ItemEffect]:
        return list(chain.from_iterable(self.active_effects.values()))


@dataclass
class ContainerComponent:
    """A container holding items, possibly locked."""

    max_capacity: int
    items: list[EntityID] = field(default_factory=list)
    locked: bool = False
    key_id: str = ""
    looted: bool = False

    def add_item(self, item_id: EntityID) -> bool:
        """Add an item; return False if the container is full."""
        if len(self.items) >= self.max_capacity:
            return False
        self.items.append(item_id)
        return True

    def remove_item(self, item_id: EntityID) -> bool:
        """Remove the first occurrence of an item, keeping the order of the rest."""
        try:
            self.items.remove(item_id)
        except ValueError:
            return False
        return True


@dataclass
class MapContextComponent:
    """Which map entity an entity belongs to."""

    map_id: EntityID


class TransitionType(IntEnum):
    STAIRS_DOWN = 0
    STAIRS_UP = 1
    PORTAL = 2


MAP_TRANSITION = "map_transition"


@dataclass
class MapTransitionComponent:
    """Where a transition tile leads."""

    transition_type: TransitionType
    destination_map_type: str
    destination_x: int
    destination_y: int


@dataclass
class MapTypeComponent:
    """What kind of map an entity represents and, for dungeons, its depth."""

    map_type: str
    level: int


@dataclass
class NameComponent:
    """Display name of an entity."""

    name: str