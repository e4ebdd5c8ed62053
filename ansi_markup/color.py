"""
ANSI color palette utilities for markup output.

Resolves the three terminal color encodings to CSS color strings:
- 16-color palette (standard + bright)
- 256-color palette (16 base colors, 6x6x6 cube, 24-step grayscale ramp)
- 24-bit true color triples
"""

import numpy as np

# Standard + bright ANSI colors (palette indices 0-15)
ANSI_COLORS_16 = (
    "#000000",  # Black
    "#cd0000",  # Red
    "#00cd00",  # Green
    "#cdcd00",  # Yellow
    "#0000ee",  # Blue
    "#cd00cd",  # Magenta
    "#00cdcd",  # Cyan
    "#e5e5e5",  # White
    "#7f7f7f",  # Bright Black
    "#ff0000",  # Bright Red
    "#00ff00",  # Bright Green
    "#ffff00",  # Bright Yellow
    "#5c5cff",  # Bright Blue
    "#ff00ff",  # Bright Magenta
    "#00ffff",  # Bright Cyan
    "#ffffff",  # Bright White
)

FALLBACK_COLOR = "#ffffff"


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Parse a #rrggbb string into an (r, g, b) tuple."""
    value = color.lstrip("#")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format color components (0-255) as a zero-padded #rrggbb string."""
    return f"#{r:02x}{g:02x}{b:02x}"


def cube_component(n: int) -> int:
    """Map a 6x6x6 cube coordinate (0-5) to a channel value."""
    return 0 if n == 0 else 55 + 40 * n


def _build_palette() -> np.ndarray:
    """
    Build the full 256-color palette.

    Returns:
        Read-only uint8 array of shape (256, 3).
    """
    palette = np.zeros((256, 3), dtype=np.uint8)

    palette[:16] = [hex_to_rgb(c) for c in ANSI_COLORS_16]

    # 216 colors (6x6x6 cube)
    n = np.arange(216)
    coords = np.stack([n // 36, (n % 36) // 6, n % 6], axis=1)
    palette[16:232] = np.where(coords == 0, 0, 55 + 40 * coords)

    # 24 grayscale colors
    gray = (np.arange(232, 256) - 232) * 10 + 8
    palette[232:] = gray[:, np.newaxis]

    palette.setflags(write=False)
    return palette


PALETTE_256 = _build_palette()


def palette_rgb(code: int) -> tuple[int, int, int]:
    """Return the (r, g, b) components of a 256-color palette index."""
    r, g, b = PALETTE_256[code]
    return int(r), int(g), int(b)


def resolve_indexed(code: int) -> str:
    """
    Resolve a 256-color palette index to a hex color.

    Args:
        code: Palette index (0-255).

    Returns:
        Hex color string. Indices outside the palette fall back to white.
    """
    if code < 16:
        return ANSI_COLORS_16[code] if 0 <= code else FALLBACK_COLOR
    if code > 255:
        return FALLBACK_COLOR
    return rgb_to_hex(*palette_rgb(code))


def resolve_truecolor(r: int, g: int, b: int) -> str:
    """Return a CSS rgb() color for a 24-bit true color triple."""
    return f"rgb({r},{g},{b})"
