"""
KYAML error types.
"""


class KyamlError(Exception):
    """Base exception for KYAML parsing/serialization errors."""

    def __init__(self, message: str, position: int | None = None):
        self.position = position
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message)


class ParseError(KyamlError):
    """Malformed KYAML input."""

    def __init__(self, message: str, position: int):
        super().__init__(message, position)


class EncodeError(KyamlError):
    """A value that cannot be written as KYAML."""

    pass


class UnsupportedTypeError(EncodeError, TypeError):
    """A value outside the KYAML data model."""

    def __init__(self, value: object):
        self.value_type = type(value)
        super().__init__(f"unsupported type: {type(value).__name__}")
