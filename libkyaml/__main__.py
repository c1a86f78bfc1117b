"""
Command line converter between JSON and KYAML.
"""

import argparse
import json
import logging
import sys

from . import __version__, dump, load
from .errors import KyamlError

logger = logging.getLogger("libkyaml.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kyaml", description="Convert JSON to KYAML, or KYAML back to JSON"
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=argparse.FileType("r", encoding="utf-8"),
        default=sys.stdin,
        help="Input file (default: stdin)",
    )
    parser.add_argument(
        "-d", "--decode", action="store_true", help="Read KYAML and write JSON"
    )
    parser.add_argument(
        "--indent", type=int, default=2, help="JSON indentation when decoding"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr"
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    with args.file as fp:
        content = fp.read()
    logger.debug("read %d characters from %s", len(content), getattr(fp, "name", "?"))

    try:
        if args.decode:
            output = json.dumps(load(content), indent=args.indent, ensure_ascii=False)
            output += "\n"
        else:
            output = dump(json.loads(content))
    except (KyamlError, json.JSONDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
