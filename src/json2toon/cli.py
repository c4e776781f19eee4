"""Command-line front end: convert JSON to TOON, or TOON back to JSON."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson
from funlog import log_calls
from rich.console import Console
from rich.logging import RichHandler

from json2toon import __version__
from json2toon.decoder import decode_value
from json2toon.encoder import ConversionResult, EncodeOptions, encode_json
from json2toon.errors import ToonError
from json2toon.stats import count_tokens, format_stats
from json2toon.values import to_json_data

EPILOG = """\
examples:
  json2toon -i data.json -o output.toon
  json2toon -i data.json -s
  cat data.json | json2toon
  json2toon -i data.json --indent 4 --sort-keys
  json2toon -d -i output.toon
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json2toon",
        description="Convert JSON to TOON format (or back with --decode).",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-i", "--input", help="Input file (default: stdin)")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument("-s", "--stats", action="store_true", help="Show conversion statistics")
    parser.add_argument("--indent", type=int, default=2, help="Indentation spaces (default: 2)")
    parser.add_argument("--sort-keys", action="store_true", help="Sort object keys alphabetically")
    parser.add_argument("-d", "--decode", action="store_true", help="Convert TOON input to JSON")
    parser.add_argument(
        "--tokenizer",
        metavar="ENCODING",
        help="Also report exact token counts with this tiktoken encoding (e.g. o200k_base)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log decoding diagnostics")
    parser.add_argument("-v", "--version", action="version", version=f"json2toon v{__version__}")
    return parser


@log_calls(level="info", show_timing_only=True)
def read_input(path: str | None) -> str:
    if path:
        return Path(path).read_text(encoding="utf-8")
    return sys.stdin.read()


@log_calls(level="info", show_timing_only=True)
def write_output(content: str, path: str | None, console: Console) -> None:
    if path:
        Path(path).write_text(content, encoding="utf-8")
        console.print(f"✓ Output written to {path}", markup=False, highlight=False)
    else:
        sys.stdout.write(content)


def convert(args: argparse.Namespace, console: Console) -> None:
    """Run one conversion described by parsed arguments."""
    source = read_input(args.input)

    if args.decode:
        option = orjson.OPT_INDENT_2 | (orjson.OPT_SORT_KEYS if args.sort_keys else 0)
        text = orjson.dumps(to_json_data(decode_value(source)), option=option).decode()
        write_output(text + "\n", args.output, console)
        return

    options = EncodeOptions(args.indent, args.sort_keys, include_stats=args.stats)
    result = encode_json(source, options)

    if isinstance(result, ConversionResult):
        write_output(result.text + "\n", args.output, console)
        if result.stats is not None:
            console.print()
            console.print(format_stats(result.stats), markup=False, highlight=False)
            if args.tokenizer:
                json_tokens = count_tokens(source, encoding=args.tokenizer)
                toon_tokens = count_tokens(result.text, encoding=args.tokenizer)
                console.print(
                    f"Exact ({args.tokenizer}): "
                    f"JSON {json_tokens} tokens, TOON {toon_tokens} tokens",
                    markup=False,
                    highlight=False,
                )
    else:
        write_output(result + "\n", args.output, console)


def main(argv: list[str] | None = None) -> int:
    """Entry point; returns the process exit status."""
    args = build_parser().parse_args(argv)
    console = Console(stderr=True, soft_wrap=True)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )

    try:
        convert(args, console)
    except (ToonError, OSError, ValueError, orjson.JSONEncodeError) as e:
        console.print(
            f"Error: {type(e).__name__}: {e}", style="bold red", markup=False, highlight=False
        )
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
