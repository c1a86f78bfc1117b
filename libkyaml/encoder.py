"""
KYAML encoder - renders Python values as canonical KYAML text.
"""

import math
import re
from decimal import Decimal
from typing import Any

from .errors import EncodeError, UnsupportedTypeError

DEFAULT_MAX_DEPTH = 128

INDENT = "  "

# Keys that a YAML 1.1 reader would turn into booleans or null.
AMBIGUOUS_KEYWORDS = frozenset(
    spelling
    for word in ("true", "false", "yes", "no", "on", "off", "null")
    for spelling in (word, word.title(), word.upper())
)

# Wider than what the decoder accepts as a number: hex, octal, binary,
# exponents and digit separators are quoted too.
NUMERIC_PATTERN = re.compile(
    r"[+-]?(\d[\d_]*\.?[\d_]*([eE][+-]?\d+)?"
    r"|0x[\da-fA-F_]+"
    r"|0o[0-7_]+"
    r"|0b[01_]+"
    r"|\.\d[\d_]*([eE][+-]?\d+)?)",
    re.ASCII,
)

SAFE_KEY_PATTERN = re.compile(r"[a-zA-Z_][a-zA-Z0-9_./-]*")

_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t"})


def _escape(s: str) -> str:
    """Escape backslash, double quote, newline and tab."""
    return s.translate(_ESCAPES)


def _format_float(value: float) -> str:
    """Format a float as the shortest positional decimal that reads back exactly."""
    if math.isnan(value) or math.isinf(value):
        raise EncodeError(f"cannot encode non-finite float: {value!r}")
    s = repr(value)
    if "e" in s:
        # repr switches to exponent notation for very large or small
        # magnitudes; the decoder only reads plain fixed-point numbers.
        s = format(Decimal(s), "f")
        if "." not in s:
            s += ".0"
    return s


def _fold(s: str) -> str:
    """
    Render a multi-line string in folded form.

    Every line sits between escaped blank lines. A line keeps its leading
    whitespace behind a backslash, other lines get one space of alignment.
    """
    parts = []
    for line in s.split("\n"):
        if line.startswith((" ", "\t")):
            parts.append("\\" + _escape(line))
        elif not line:
            parts.append("")
        else:
            parts.append(" " + _escape(line))
    return '"\\n' + "\\n\\n".join(parts) + '\\n"'


def encode_string(s: str) -> str:
    """Encode a string value, folding it when it spans three or more lines."""
    if s.count("\n") >= 2:
        return _fold(s)
    return f'"{_escape(s)}"'


def encode_key(key: str) -> str:
    """Encode a mapping key, bare when a YAML reader cannot mistake it."""
    if (
        not key
        or key in AMBIGUOUS_KEYWORDS
        or NUMERIC_PATTERN.fullmatch(key)
        or not SAFE_KEY_PATTERN.fullmatch(key)
    ):
        return encode_string(key)
    return key


class Encoder:
    """
    Renders a value tree as KYAML.

    Mappings and sequences use block form, one entry per line with a
    trailing comma. A sequence made only of mappings is cuddled:
    ``[{...}, {...}]`` with each mapping kept at the sequence's depth.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth

    def encode(self, value: Any, depth: int = 0) -> str:
        if depth > self.max_depth:
            raise EncodeError(f"maximum nesting depth exceeded ({self.max_depth})")

        if value is None:
            return "null"

        if isinstance(value, bool):
            return "true" if value else "false"

        if isinstance(value, int):
            return str(int(value))

        if isinstance(value, float):
            return _format_float(float(value))

        if isinstance(value, str):
            return encode_string(value)

        if isinstance(value, dict):
            return self.encode_mapping(value, depth)

        if isinstance(value, (list, tuple)):
            return self.encode_sequence(value, depth)

        raise UnsupportedTypeError(value)

    def encode_mapping(self, mapping: dict, depth: int) -> str:
        if not mapping:
            return "{}"

        prefix = INDENT * (depth + 1)
        lines = []
        for key, value in mapping.items():
            if not isinstance(key, str):
                raise UnsupportedTypeError(key)
            lines.append(f"{prefix}{encode_key(key)}: {self.encode(value, depth + 1)},")
        return "{\n" + "\n".join(lines) + "\n" + INDENT * depth + "}"

    def encode_sequence(self, items: list | tuple, depth: int) -> str:
        if not items:
            return "[]"

        if all(isinstance(item, dict) for item in items):
            cuddled = [self.encode_mapping(item, depth) for item in items]
            return "[" + ", ".join(cuddled) + "]"

        prefix = INDENT * (depth + 1)
        lines = [f"{prefix}{self.encode(item, depth + 1)}," for item in items]
        return "[\n" + "\n".join(lines) + "\n" + INDENT * depth + "]"
