"""Maps raw client input to snake directions."""

from __future__ import annotations

from torus_snake.snake import Direction

_DIRECTION_MAP: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

# Browser ``KeyboardEvent.key`` values, lower-cased.
_KEY_MAP: dict[str, Direction] = {
    "arrowup": Direction.UP,
    "arrowdown": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "arrowright": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}


def parse_direction(value: object) -> Direction | None:
    """Return the direction named by *value*, or ``None``."""
    if not isinstance(value, str):
        return None
    return _DIRECTION_MAP.get(value.strip().lower())


def direction_from_key(key: object) -> Direction | None:
    """Return the direction bound to a key name, or ``None`` if unbound."""
    if not isinstance(key, str):
        return None
    return _KEY_MAP.get(key.strip().lower())


def direction_from_message(msg: object) -> Direction | None:
    """Extract a direction from a ``{"direction": ...}`` or ``{"key": ...}`` message."""
    if not isinstance(msg, dict):
        return None
    if "direction" in msg:
        return parse_direction(msg["direction"])
    if "key" in msg:
        return direction_from_key(msg["key"])
    return None
