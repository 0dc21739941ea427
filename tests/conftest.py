import logging
import os

import pytest

from builders import (
    PRIMARY_EMPTY,
    NonSeekable,
    format_card,
    format_header,
    format_unit,
    image_extension,
)


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)


@pytest.fixture
def card():
    return format_card


@pytest.fixture
def header_bytes():
    return format_header


@pytest.fixture
def two_units():
    '''Primary without data followed by an image extension of 100 bytes.'''
    return format_unit(PRIMARY_EMPTY) + format_unit(image_extension(100), data=b'\x01' * 100)


@pytest.fixture
def non_seekable():
    return NonSeekable
