"""
KYAML decoder - parses KYAML text into Python values.
"""

from typing import Any

from .errors import ParseError

DOCUMENT_PREFIX = "---\n"

DEFAULT_MAX_DEPTH = 128

WHITESPACE = " \t\n\r"
DIGITS = "0123456789"
KEY_START = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"
KEY_CHARS = KEY_START + DIGITS + "./-"

ESCAPES = {
    "n": "\n",
    "t": "\t",
    "\\": "\\",
    '"': '"',
    # Kept as two characters; unfold reads it as a leading-whitespace marker.
    " ": "\\ ",
}


def unfold(s: str) -> str:
    """
    Undo the folding applied to multi-line strings.

    Strings that do not start and end with a newline, or that contain no
    blank line, are returned unchanged.
    """
    if not (len(s) > 1 and s.startswith("\n") and s.endswith("\n") and "\n\n" in s):
        return s

    lines = []
    for segment in s[1:-1].split("\n\n"):
        if segment.startswith(" "):
            segment = segment[1:]
        elif segment.startswith("\\"):
            segment = segment[1:]
            if segment.startswith("t"):
                # A tab-indented line: the line marker swallowed the
                # backslash of the leading "\t" escape.
                segment = "\t" + segment[1:]
        lines.append(segment)
    return "\n".join(lines)


class Decoder:
    """
    Recursive descent decoder for KYAML.

    Handles:
    - The ``---`` document prefix
    - Scalars (null, booleans, integers, fixed-point floats, strings)
    - Mappings and sequences with optional trailing commas
    - Folded multi-line strings
    """

    def __init__(self, source: str, max_depth: int = DEFAULT_MAX_DEPTH):
        self.source = source
        self.pos = 0
        self.depth = 0
        self.max_depth = max_depth

    def error(self, message: str) -> ParseError:
        return ParseError(message, self.pos)

    def peek(self) -> str:
        """Return the current character, or "" at end of input."""
        if self.pos >= len(self.source):
            return ""
        return self.source[self.pos]

    def advance(self) -> str:
        """Consume and return the current character."""
        ch = self.peek()
        self.pos += 1
        return ch

    def expect(self, expected: str) -> None:
        """Consume the expected character or raise an error."""
        ch = self.peek()
        if ch != expected:
            got = repr(ch) if ch else "end of input"
            raise self.error(f"expected {expected!r}, got {got}")
        self.advance()

    def expect_literal(self, literal: str) -> None:
        """Consume an exact run of characters or raise an error."""
        if not self.source.startswith(literal, self.pos):
            raise self.error(f"expected {literal!r}")
        self.pos += len(literal)

    def skip_whitespace(self) -> None:
        while self.peek() and self.peek() in WHITESPACE:
            self.advance()

    def decode(self) -> Any:
        """Decode the entire document."""
        self.expect_literal(DOCUMENT_PREFIX)
        value = self.parse_value()
        self.skip_whitespace()
        if self.pos != len(self.source):
            raise self.error("unexpected content after value")
        return value

    def parse_value(self) -> Any:
        self.skip_whitespace()
        ch = self.peek()

        if ch == '"':
            return self.parse_string()

        if ch == "{":
            return self.parse_mapping()

        if ch == "[":
            return self.parse_sequence()

        if ch == "t":
            self.expect_literal("true")
            return True

        if ch == "f":
            self.expect_literal("false")
            return False

        if ch == "n":
            self.expect_literal("null")
            return None

        if ch and ch in "-" + DIGITS:
            return self.parse_number()

        got = repr(ch) if ch else "end of input"
        raise self.error(f"unexpected character: {got}")

    def read_digits(self) -> bool:
        """Consume a run of digits, returning whether there was any."""
        start = self.pos
        while self.peek() and self.peek() in DIGITS:
            self.advance()
        return self.pos > start

    def parse_number(self) -> int | float:
        start = self.pos
        if self.peek() == "-":
            self.advance()
        if not self.read_digits():
            raise self.error("expected digit")

        if self.peek() != ".":
            return int(self.source[start : self.pos])

        self.advance()
        if not self.read_digits():
            raise self.error("expected digit after decimal point")
        return float(self.source[start : self.pos])

    def parse_string(self) -> str:
        self.expect('"')
        chars = []

        while True:
            ch = self.peek()
            if not ch:
                raise self.error("unterminated string")
            self.advance()
            if ch == '"':
                break
            if ch == "\\":
                chars.append(self.parse_escape())
            else:
                chars.append(ch)

        return unfold("".join(chars))

    def parse_escape(self) -> str:
        ch = self.peek()
        if not ch:
            raise self.error("unterminated escape")
        if ch not in ESCAPES:
            raise self.error(f"unknown escape: \\{ch}")
        self.advance()
        return ESCAPES[ch]

    def parse_key(self) -> str:
        """Parse a mapping key (quoted string or bare key)."""
        if self.peek() == '"':
            return self.parse_string()

        start = self.pos
        if not (self.peek() and self.peek() in KEY_START):
            raise self.error("expected key")
        self.advance()
        while self.peek() and self.peek() in KEY_CHARS:
            self.advance()
        return self.source[start : self.pos]

    def enter(self) -> None:
        """Track one more level of nesting."""
        self.depth += 1
        if self.depth > self.max_depth:
            raise self.error("maximum nesting depth exceeded")

    def parse_mapping(self) -> dict:
        self.expect("{")
        self.enter()
        self.skip_whitespace()
        result = {}

        if self.peek() != "}":
            while True:
                self.skip_whitespace()
                key = self.parse_key()
                self.skip_whitespace()
                self.expect(":")
                self.skip_whitespace()
                # Duplicate keys overwrite: last write wins.
                result[key] = self.parse_value()
                self.skip_whitespace()
                if self.peek() != ",":
                    break
                self.advance()
                self.skip_whitespace()
                if self.peek() == "}":
                    break

        self.expect("}")
        self.depth -= 1
        return result

    def parse_sequence(self) -> list:
        self.expect("[")
        self.enter()
        self.skip_whitespace()
        result = []

        if self.peek() != "]":
            while True:
                result.append(self.parse_value())
                self.skip_whitespace()
                if self.peek() != ",":
                    break
                self.advance()
                self.skip_whitespace()
                if self.peek() == "]":
                    break

        self.expect("]")
        self.depth -= 1
        return result
