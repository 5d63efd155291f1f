"""Map data: tile types, their appearance and the map grid itself."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Optional

from stationrogue.components import RGBA


class TileType(IntEnum):
    """Kinds of map tile."""

    FLOOR = 0
    WALL = 1
    DOOR = 2
    STAIRS_DOWN = 3
    STAIRS_UP = 4
    WATER = 5
    LAVA = 6
    GRASS = 7
    TREE = 8

    # Box drawing walls
    WALL_HORIZONTAL = 10
    WALL_VERTICAL = 11
    WALL_TOP_LEFT = 12
    WALL_TOP_RIGHT = 13
    WALL_BOTTOM_LEFT = 14
    WALL_BOTTOM_RIGHT = 15
    WALL_TEE_LEFT = 16
    WALL_TEE_RIGHT = 17
    WALL_TEE_TOP = 18
    WALL_TEE_BOTTOM = 19
    WALL_CROSS = 20

    # World map biomes
    WASTELAND = 100
    DESERT = 101
    DARK_FOREST = 102
    MOUNTAINS = 103
    RUINED_RAILWAY = 104
    SUBSTATION = 105

    # Railway pieces
    RAILWAY_HORIZONTAL = 106
    RAILWAY_VERTICAL = 107
    RAILWAY_TOP_LEFT = 108
    RAILWAY_TOP_RIGHT = 109
    RAILWAY_BOTTOM_LEFT = 110
    RAILWAY_BOTTOM_RIGHT = 111
    RAILWAY_TEE_LEFT = 112
    RAILWAY_TEE_RIGHT = 113
    RAILWAY_TEE_TOP = 114
    RAILWAY_TEE_BOTTOM = 115
    RAILWAY_CROSS = 116


@dataclass(frozen=True)
class TileDefinition:
    """How a tile type looks: a glyph or a position in the tileset, with colours."""

    glyph: str = ""
    tile_x: int = 0
    tile_y: int = 0
    use_tile_pos: bool = False
    fg: Optional[RGBA] = None
    bg: Optional[RGBA] = None

    @classmethod
    def from_glyph(cls, glyph: str, fg: RGBA) -> "TileDefinition":
        return cls(glyph=glyph, use_tile_pos=False, fg=fg)

    @classmethod
    def from_tile_pos(cls, tile_x: int, tile_y: int, fg: RGBA) -> "TileDefinition":
        return cls(tile_x=tile_x, tile_y=tile_y, use_tile_pos=True, fg=fg)


UNDEFINED_TILE = TileDefinition(glyph="?", fg=RGBA(255, 0, 255, 255))


@dataclass
class TileMappingComponent:
    """Maps tile types to their visual definitions."""

    definitions: dict[int, TileDefinition] = field(default_factory=dict)

    @classmethod
    def default(cls) -> "TileMappingComponent":
        """Build the standard tile mapping used by the game."""
        glyph = TileDefinition.from_glyph
        pos = TileDefinition.from_tile_pos
        wall = RGBA(160, 160, 160, 255)
        rail = RGBA(184, 49, 42, 255)
        t = TileType
        defs: dict[int, TileDefinition] = {
            t.FLOOR: glyph(".", RGBA(64, 64, 64, 255)),
            t.WALL: glyph("#", RGBA(128, 128, 128, 255)),
            t.DOOR: glyph("+", RGBA(139, 69, 19, 255)),
            t.STAIRS_DOWN: glyph(">", RGBA(255, 255, 255, 255)),
            t.STAIRS_UP: glyph("<", RGBA(255, 255, 255, 255)),
            t.WALL_HORIZONTAL: pos(4, 12, wall),
            t.WALL_VERTICAL: pos(3, 11, wall),
            t.WALL_TOP_LEFT: pos(10, 13, wall),
            t.WALL_TOP_RIGHT: pos(15, 11, wall),
            t.WALL_BOTTOM_LEFT: pos(0, 12, wall),
            t.WALL_BOTTOM_RIGHT: pos(9, 13, wall),
            t.WALL_TEE_LEFT: pos(3, 12, wall),
            t.WALL_TEE_RIGHT: pos(4, 11, wall),
            t.WALL_TEE_TOP: pos(2, 12, wall),
            t.WALL_TEE_BOTTOM: pos(1, 12, wall),
            t.WALL_CROSS: pos(5, 12, wall),
            t.WATER: pos(7, 15, RGBA(0, 0, 255, 255)),
            t.LAVA: pos(14, 7, RGBA(255, 0, 0, 255)),
            t.GRASS: pos(0, 11, RGBA(0, 128, 0, 255)),
            t.TREE: pos(8, 1, RGBA(0, 100, 0, 255)),
            t.WASTELAND: pos(1, 11, RGBA(150, 140, 100, 255)),
            t.DESERT: pos(2, 11, RGBA(230, 210, 150, 255)),
            t.DARK_FOREST: pos(8, 1, RGBA(40, 80, 40, 255)),
            t.MOUNTAINS: pos(14, 1, RGBA(120, 120, 120, 255)),
            t.RUINED_RAILWAY: pos(13, 3, RGBA(100, 100, 110, 255)),
            t.SUBSTATION: pos(15, 0, RGBA(200, 200, 0, 255)),
            t.RAILWAY_HORIZONTAL: pos(4, 12, rail),
            t.RAILWAY_VERTICAL: pos(3, 11, rail),
            t.RAILWAY_TOP_LEFT: pos(10, 13, rail),
            t.RAILWAY_TOP_RIGHT: pos(15, 11, rail),
            t.RAILWAY_BOTTOM_LEFT: pos(0, 12, rail),
            t.RAILWAY_BOTTOM_RIGHT: pos(9, 13, rail),
            t.RAILWAY_TEE_LEFT: pos(3, 12, rail),
            t.RAILWAY_TEE_RIGHT: pos(4, 11, rail),
            t.RAILWAY_TEE_TOP: pos(2, 12, rail),
            t.RAILWAY_TEE_BOTTOM: pos(1, 12, rail),
            t.RAILWAY_CROSS: pos(5, 12, rail),
        }
        return cls({int(k): v for k, v in defs.items()})

    def definition(self, tile_type: int) -> TileDefinition:
        """Return the definition for a tile type, or a magenta '?' if unknown."""
        return self.definitions.get(int(tile_type), UNDEFINED_TILE)


WallDetector = Callable[[int], bool]
FloorDetector = Callable[[int], bool]
BoxDrawer = Callable[["MapComponent"], None]


@dataclass
class _Hooks:
    is_wall: Optional[WallDetector] = None
    box_drawing: Optional[BoxDrawer] = None
    is_floor: Optional[FloorDetector] = None


_hooks = _Hooks()


def register_wall_detector(func: Optional[WallDetector]) -> None:
    """Install the function that decides whether a tile type is a wall (None clears it)."""
    _hooks.is_wall = func


def register_box_drawing(func: Optional[BoxDrawer]) -> None:
    """Install the function that turns plain walls into box-drawing walls."""
    _hooks.box_drawing = func


def register_floor_detector(func: Optional[FloorDetector]) -> None:
    """Install the function that decides whether a tile type is a floor."""
    _hooks.is_floor = func


def floor_detector() -> Optional[FloorDetector]:
    """Return the installed floor detector, if any."""
    return _hooks.is_floor


@dataclass
class MapComponent:
    """A rectangular grid of tiles with visibility and exploration state."""

    width: int
    height: int
    tiles: list[list[int]] = field(init=False)
    visible: list[list[bool]] = field(init=False)
    explored: list[list[bool]] = field(init=False)

    def __post_init__(self) -> None:
        self.tiles = [[int(TileType.WALL)] * self.width for _ in range(self.height)]
        self.visible = [[False] * self.width for _ in range(self.height)]
        self.explored = [[False] * self.width for _ in range(self.height)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_wall(self, x: int, y: int) -> bool:
        """Whether (x, y) is a wall; anything out of bounds counts as one."""
        if not self.in_bounds(x, y):
            return True
        tile_type = self.tiles[y][x]
        if _hooks.is_wall is not None:
            return _hooks.is_wall(tile_type)
        return tile_type == TileType.WALL

    def set_tile(self, x: int, y: int, tile_type: int) -> None:
        """Set a tile; positions out of bounds are ignored."""
        if self.in_bounds(x, y):
            self.tiles[y][x] = int(tile_type)

    def apply_box_drawing_walls(self) -> None:
        """Replace plain walls with box-drawing pieces, if a drawer is installed."""
        if _hooks.box_drawing is not None:
            _hooks.box_drawing(self)


_DEBUG_TILES = [
    ("TileWall", TileType.WALL),
    ("TileFloor", TileType.FLOOR),
    ("TileWallHorizontal", TileType.WALL_HORIZONTAL),
    ("TileWallVertical", TileType.WALL_VERTICAL),
    ("TileWallTopLeft", TileType.WALL_TOP_LEFT),
    ("TileWallTopRight", TileType.WALL_TOP_RIGHT),
    ("TileWallBottomLeft", TileType.WALL_BOTTOM_LEFT),
    ("TileWallBottomRight", TileType.WALL_BOTTOM_RIGHT),
    ("TileWallTeeLeft", TileType.WALL_TEE_LEFT),
    ("TileWallTeeRight", TileType.WALL_TEE_RIGHT),
    ("TileWallTeeTop", TileType.WALL_TEE_TOP),
    ("TileWallTeeBottom", TileType.WALL_TEE_BOTTOM),
    ("TileWallCross", TileType.WALL_CROSS),
]


def debug_wall_detection() -> None:
    """Print whether each wall-related tile type is detected as a wall."""
    print("DEBUG: Testing wall detection on all tile types")
    for name, tile_type in _DEBUG_TILES:
        if _hooks.is_wall is not None:
            result, method = _hooks.is_wall(int(tile_type)), "IsWallFunc"
        else:
            result, method = tile_type == TileType.WALL, "fallback"
        print(f"{name} ({int(tile_type)}): {str(bool(result)).lower()} using {method}")