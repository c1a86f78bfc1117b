"""Shared pytest fixtures."""

import pytest

from libkyaml import Encoder


@pytest.fixture
def encoder() -> Encoder:
    return Encoder()


@pytest.fixture
def encode(encoder):
    """Encode a value without the document prefix."""
    return encoder.encode
