"""
ANSI escape sequence to HTML conversion.

Converts terminal-formatted lines to HTML by:
1. Scanning each line for SGR escape sequences (ESC [ params m)
2. Escaping the literal text between sequences
3. Wrapping that text in a styled span when the active style is not default
4. Folding each sequence's codes into the style for the text that follows
5. Joining converted lines with a line break marker

Style never carries over between calls: every line starts unstyled.
"""

import html
import re
from collections.abc import Iterable
from dataclasses import dataclass

from .style import (
    DEFAULT_DIM_OPACITY,
    DEFAULT_STYLE,
    apply_codes,
    parse_params,
    wrap,
)

# SGR color/attribute sequences only
ANSI_SGR_RE = re.compile(r"\x1b\[([0-9;]*)m")
# Any CSI sequence (cursor movement, erase, etc.)
ANSI_CSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
# OSC sequences (e.g., hyperlinks, titles)
ANSI_OSC_RE = re.compile(r"\x1b\].*?(?:\x1b\\|\x07)")
# Single ESC sequences
ANSI_ESC_RE = re.compile(r"\x1b[@-Z\\-_]")


@dataclass
class MarkupConfig:
    """Configuration for HTML conversion."""
    line_separator: str = "<br>"  # Inserted between converted lines
    dim_opacity: float = DEFAULT_DIM_OPACITY  # Opacity used to render dim text
    strip_controls: bool = False  # Drop non-SGR escape sequences before scanning


def escape_text(text: str) -> str:
    """Escape &, < and > for embedding in an HTML body."""
    return html.escape(text, quote=False)


def strip_controls(text: str) -> str:
    """Remove escape sequences other than SGR, leaving colors intact."""
    text = ANSI_OSC_RE.sub("", text)
    text = ANSI_CSI_RE.sub(
        lambda m: m.group(0) if ANSI_SGR_RE.fullmatch(m.group(0)) else "",
        text,
    )
    return ANSI_ESC_RE.sub("", text)


def strip_ansi(text: str) -> str:
    """Remove all escape sequences from text."""
    text = ANSI_OSC_RE.sub("", text)
    text = ANSI_CSI_RE.sub("", text)
    return ANSI_ESC_RE.sub("", text)


def convert_line(line: str, config: MarkupConfig | None = None) -> str:
    """
    Convert one line of ANSI-formatted text to HTML.

    Args:
        line: Text possibly containing SGR escape sequences.
        config: Conversion configuration.

    Returns:
        HTML with inline-styled spans. Never raises for any string input;
        unknown or malformed codes leave the style unchanged.
    """
    if config is None:
        config = MarkupConfig()

    if config.strip_controls:
        line = strip_controls(line)

    state = DEFAULT_STYLE
    parts = []
    last_index = 0

    for match in ANSI_SGR_RE.finditer(line):
        before = line[last_index:match.start()]
        if before:
            parts.append(wrap(escape_text(before), state, config.dim_opacity))

        state = apply_codes(state, parse_params(match.group(1)))
        last_index = match.end()

    remaining = line[last_index:]
    if remaining:
        parts.append(wrap(escape_text(remaining), state, config.dim_opacity))

    return "".join(parts)


def convert_lines(lines: Iterable[str], config: MarkupConfig | None = None) -> str:
    """
    Convert a sequence of ANSI-formatted lines to HTML.

    Args:
        lines: Lines as rendered by a terminal component, in order.
        config: Conversion configuration.

    Returns:
        Converted lines joined with the configured line separator.
    """
    if config is None:
        config = MarkupConfig()

    return config.line_separator.join(convert_line(line, config) for line in lines)


def convert_text(text: str, config: MarkupConfig | None = None) -> str:
    """Split text on line breaks and convert each line."""
    return convert_lines(text.splitlines(), config)


def read_text(path: str) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


def convert_file(path: str, config: MarkupConfig | None = None) -> str:
    """
    Load a text file and convert it to HTML.

    Args:
        path: Path to a UTF-8 text file with ANSI escape sequences.
        config: Conversion configuration.

    Returns:
        HTML string.
    """
    return convert_text(read_text(path), config)
