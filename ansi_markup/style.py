"""
SGR style state and its rendering as inline CSS.

A StyleState is the cumulative effect of every SGR code seen so far on a
line. apply_codes() folds one escape sequence's codes into a new state;
style_declarations() turns a state into CSS declarations for a span.
"""

from dataclasses import dataclass, replace

from .color import ANSI_COLORS_16, resolve_indexed, resolve_truecolor

DEFAULT_DIM_OPACITY = 0.6

# Extended color selectors and their sub-parameter windows
FG_EXTENDED = 38
BG_EXTENDED = 48
MODE_INDEXED = 5
MODE_TRUECOLOR = 2
WINDOW_SIZE = {MODE_INDEXED: 2, MODE_TRUECOLOR: 4}

# Stand-in for parameters that cannot be read as an integer; never matches
UNKNOWN_CODE = -1


@dataclass(frozen=True)
class StyleState:
    """Active colors and attributes. All fields unset means default style."""
    foreground: str | None = None
    background: str | None = None
    bold: bool = False
    dim: bool = False
    italic: bool = False
    underline: bool = False

    @property
    def is_default(self) -> bool:
        return self == DEFAULT_STYLE


DEFAULT_STYLE = StyleState()


def parse_params(params: str) -> list[int]:
    """
    Parse an SGR parameter string like "1;38;5;196".

    Empty parameters (including an empty string) mean 0.
    """
    return [_parse_code(token) for token in params.split(";")]


def _parse_code(token: str) -> int:
    if not token:
        return 0
    try:
        return int(token)
    except ValueError:
        # Longer than the interpreter's int conversion limit
        return UNKNOWN_CODE


def read_extended_color(codes: list[int], start: int) -> tuple[str | None, int]:
    """
    Read the sub-parameters following a 38/48 selector.

    Args:
        codes: All codes of the escape sequence.
        start: Index of the first code after the selector.

    Returns:
        Tuple of (color, consumed) where color is None when the sub-parameters
        are unusable and consumed is how many codes after the selector to skip.
    """
    if start >= len(codes):
        return None, 0

    mode = codes[start]
    size = WINDOW_SIZE.get(mode)
    if size is None:
        return None, 0

    window = codes[start:start + size]
    if len(window) < size:
        # Truncated: swallow what is there, change nothing
        return None, len(window)

    values = window[1:]
    if any(not 0 <= v <= 255 for v in values):
        return None, size

    if mode == MODE_INDEXED:
        return resolve_indexed(values[0]), size
    return resolve_truecolor(*values), size


def apply_code(state: StyleState, code: int) -> StyleState:
    """Apply a single-parameter SGR code. Unknown codes return state unchanged."""
    if code == 0:
        return DEFAULT_STYLE
    if code == 1:
        return replace(state, bold=True)
    if code == 2:
        return replace(state, dim=True)
    if code == 3:
        return replace(state, italic=True)
    if code == 4:
        return replace(state, underline=True)
    if code == 22:
        return replace(state, bold=False, dim=False)
    if code == 23:
        return replace(state, italic=False)
    if code == 24:
        return replace(state, underline=False)
    if 30 <= code <= 37:
        return replace(state, foreground=ANSI_COLORS_16[code - 30])
    if code == 39:
        return replace(state, foreground=None)
    if 40 <= code <= 47:
        return replace(state, background=ANSI_COLORS_16[code - 40])
    if code == 49:
        return replace(state, background=None)
    if 90 <= code <= 97:
        return replace(state, foreground=ANSI_COLORS_16[8 + code - 90])
    if 100 <= code <= 107:
        return replace(state, background=ANSI_COLORS_16[8 + code - 100])
    return state


def apply_codes(state: StyleState, codes: list[int]) -> StyleState:
    """
    Fold the codes of one escape sequence into a new style state.

    Args:
        state: Style before the sequence.
        codes: Parsed SGR parameters.

    Returns:
        Style after the sequence. The input state is never modified.
    """
    i = 0
    while i < len(codes):
        code = codes[i]
        i += 1

        if code in (FG_EXTENDED, BG_EXTENDED):
            color, consumed = read_extended_color(codes, i)
            i += consumed
            if color is None:
                continue
            if code == FG_EXTENDED:
                state = replace(state, foreground=color)
            else:
                state = replace(state, background=color)
            continue

        state = apply_code(state, code)

    return state


def style_declarations(
    state: StyleState,
    dim_opacity: float = DEFAULT_DIM_OPACITY,
) -> list[str]:
    """Return CSS declarations for a style, in fixed order."""
    styles = []
    if state.foreground:
        styles.append(f"color:{state.foreground}")
    if state.background:
        styles.append(f"background-color:{state.background}")
    if state.bold:
        styles.append("font-weight:bold")
    if state.italic:
        styles.append("font-style:italic")
    if state.underline:
        styles.append("text-decoration:underline")
    if state.dim:
        styles.append(f"opacity:{dim_opacity}")
    return styles


def wrap(text: str, state: StyleState, dim_opacity: float = DEFAULT_DIM_OPACITY) -> str:
    """Wrap already-escaped text in a span for the style, if it has any."""
    styles = style_declarations(state, dim_opacity)
    if not styles:
        return text
    return f'<span style="{";".join(styles)}">{text}</span>'
