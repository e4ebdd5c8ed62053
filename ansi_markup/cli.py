"""
Command-line interface for ANSI to HTML conversion.
"""

import argparse
import sys

from .processor import MarkupConfig, convert_file, convert_text, escape_text, read_text, strip_ansi


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="ansi-markup",
        description="Convert terminal output with ANSI color codes to styled HTML.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ansi-markup build.log
  ansi-markup build.log --output build.html
  ls --color=always | ansi-markup -
  ansi-markup session.txt --separator "\\n" --strip-controls
  ansi-markup session.txt --plain
        """,
    )

    parser.add_argument(
        "input",
        help="Path to input text file, or - for stdin",
    )

    parser.add_argument(
        "-s", "--separator",
        type=str,
        default="<br>",
        help="Markup inserted between lines (default: <br>)",
    )

    parser.add_argument(
        "-d", "--dim-opacity",
        type=float,
        default=0.6,
        metavar="N",
        help="Opacity used to render dim text (default: 0.6)",
    )

    parser.add_argument(
        "--strip-controls",
        action="store_true",
        help="Remove cursor, erase and other non-color escape sequences",
    )

    parser.add_argument(
        "-p", "--plain",
        action="store_true",
        help="Drop all styling and output escaped plain text",
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        metavar="FILE",
        help="Output file path (default: stdout)",
    )

    return parser.parse_args(args)


def main(args: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parsed = parse_args(args)

    # Allow a literal "\n" on the command line to mean a newline
    separator = parsed.separator.replace("\\n", "\n")

    config = MarkupConfig(
        line_separator=separator,
        dim_opacity=parsed.dim_opacity,
        strip_controls=parsed.strip_controls,
    )

    try:
        if parsed.plain:
            text = sys.stdin.read() if parsed.input == "-" else read_text(parsed.input)
            result = separator.join(escape_text(strip_ansi(line)) for line in text.splitlines())
        elif parsed.input == "-":
            result = convert_text(sys.stdin.read(), config)
        else:
            result = convert_file(parsed.input, config)
    except FileNotFoundError:
        print(f"Error: Input file not found: {parsed.input}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error converting input: {e}", file=sys.stderr)
        return 1

    if parsed.output:
        with open(parsed.output, "w", encoding="utf-8") as f:
            f.write(result)
        print(f"Written to {parsed.output}")
    else:
        print(result)

    return 0


if __name__ == "__main__":
    sys.exit(main())
