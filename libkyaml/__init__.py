"""
KYAML - a strict, canonical subset of YAML flow style

A Python encoder and decoder for the KYAML data format.
"""

import logging
from typing import Any, TextIO

from .decoder import DOCUMENT_PREFIX, Decoder
from .encoder import Encoder
from .errors import EncodeError, KyamlError, ParseError, UnsupportedTypeError

__all__ = [
    "dump",
    "load",
    "dump_file",
    "load_file",
    "Encoder",
    "Decoder",
    "KyamlError",
    "ParseError",
    "EncodeError",
    "UnsupportedTypeError",
]
__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def dump(value: Any) -> str:
    """Serialize a value to a KYAML document string."""
    logger.debug("dumping %s", type(value).__name__)
    return DOCUMENT_PREFIX + Encoder().encode(value) + "\n"


def load(text: str) -> Any:
    """Parse a KYAML document string into Python values."""
    logger.debug("loading %d characters", len(text))
    return Decoder(text).decode()


def dump_file(value: Any, fp: TextIO) -> None:
    """Serialize a value to a KYAML document in a text file."""
    fp.write(dump(value))


def load_file(fp: TextIO) -> Any:
    """Parse a KYAML document from a text file."""
    return load(fp.read())
