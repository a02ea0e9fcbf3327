"""Deterministic category colors.

Every category name hashes to the same display color regardless of which
other categories exist or in what order they were seen, so charts keep a
stable legend across refreshes.
"""

from collections.abc import Iterable

NEUTRAL_COLOR = "#CCCCCC"
BRIGHTNESS_FACTOR = 1.2


def _to_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _code_units(text: str) -> list[int]:
    """UTF-16 code units of text (astral characters yield surrogate pairs)."""
    encoded = text.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(encoded[i : i + 2], "little") for i in range(0, len(encoded), 2)]


def string_hash(text: str) -> int:
    """Signed 32-bit rolling hash, ``hash * 31 + code`` per code unit."""
    result = 0
    for code in _code_units(text):
        result = _to_int32(code + ((result << 5) - result))
    return result


def _brighten(channel: int) -> int:
    return min(255, int(channel * BRIGHTNESS_FACTOR))


def assign_color(category: str) -> str:
    """Map a category name to a ``#rrggbb`` display color.

    Args:
        category: Category name

    Returns:
        Lowercase hex color string. The empty name maps to ``#000000``.
    """
    value = string_hash(category)

    # Mask before brightening so negative hashes still give 0..255 channels
    red = value & 0xFF
    green = (value >> 8) & 0xFF
    blue = (value >> 16) & 0xFF

    return "#{:02x}{:02x}{:02x}".format(_brighten(red), _brighten(green), _brighten(blue))


def category_colors(categories: Iterable[str]) -> dict[str, str]:
    """Build the name -> color map, keyed in the given category order."""
    return {category: assign_color(category) for category in categories}


__all__ = [
    "BRIGHTNESS_FACTOR",
    "NEUTRAL_COLOR",
    "assign_color",
    "category_colors",
    "string_hash",
]
