"""
# Fitstruct: structural decoding of FITS-like containers.

A container is a sequence of fixed size blocks (2880 bytes) where each
logical unit is made of

 1. a header: 80 columns text cards (keyword, value, comment) terminated
    by the END card and padded to the block boundary
 2. a data region, whose size is declared by the header, again padded
    to the block boundary

The main operations are

 1. scan(): a single forward pass over the stream that builds a
    LocatorTable, the index with the offsets of header and data of
    every unit, skipping over the data without reading it when the
    stream is seekable

 2. read_header(): given a record of the table, decode again the header
    of that unit by jumping directly at its offset

The data itself is not decoded.
"""
from .cards import Card, parse
from .core import LocatorTable, UnitRecord, iter_units, read_header, scan
from .enum import Compliant, UnitKind, ValueKind
from .exceptions import (
    FitstructException,
    ScanError,
    TruncatedStreamError,
    UnterminatedHeaderError,
    MagicError,
    MalformedCardError,
    MalformedCardWarning,
    UnseekableStreamError,
)
from .header import Header, HeaderAccumulator, classify
from .values import Boolean, Integer, Real, Text, Undefined, Value, infer
