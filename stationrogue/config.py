"""Screen layout configuration."""

TILE_SIZE = 12

SCREEN_WIDTH = 85
SCREEN_HEIGHT = 65

GAME_SCREEN_WIDTH = 50
GAME_SCREEN_HEIGHT = 40

WINDOW_WIDTH = SCREEN_WIDTH * TILE_SIZE
WINDOW_HEIGHT = SCREEN_HEIGHT * TILE_SIZE


def screen_dimensions() -> tuple[int, int]:
    """Return the screen size in pixels."""
    return WINDOW_WIDTH, WINDOW_HEIGHT


def window_size() -> tuple[int, int]:
    """Return the recommended window size in pixels."""
    return WINDOW_WIDTH, WINDOW_HEIGHT