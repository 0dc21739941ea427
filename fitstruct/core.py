"""
Core module: index the units of a container in a single forward pass.

For each unit we record where its header starts, where its data starts
and how long the data is, so that afterwards it's possible to jump
directly to any of them without reading the file again.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .constants import BLOCK_SIZE
from .enum import Compliant, UnitKind
from .exceptions import (
    ScanError,
    MagicError,
    UnterminatedHeaderError,
    UnseekableStreamError,
)
from .header import Header, HeaderAccumulator
from .streams import Stream, BlockReader


logger = logging.getLogger(__name__)


def padded_length(length, block_size=BLOCK_SIZE):
    '''Round length up to the next multiple of the block size.'''
    return -(-length // block_size) * block_size


@dataclass(frozen=True)
class UnitRecord:
    """
    Location of one unit into the stream.

    - index: position of the unit into the file (0 is the primary)
    - header_block_offset: offset of the first header block
    - data_block_offset: offset of the first data block
    - data_byte_length: size of the data without the padding
    """
    index: int
    header_block_offset: int
    data_block_offset: int
    data_byte_length: int
    unit_kind: UnitKind
    name: Optional[str] = None
    version: int = 1
    block_size: int = BLOCK_SIZE
    header: Optional[Header] = field(default=None, repr=False, compare=False)

    @property
    def padded_data_length(self) -> int:
        return padded_length(self.data_byte_length, self.block_size)

    @property
    def end_offset(self) -> int:
        '''Offset of the first byte after this unit.'''
        return self.data_block_offset + self.padded_data_length


class LocatorTable(object):
    '''Ordered index of the units, in the same order as they are in the file.

    Other than by position, a unit can be looked up by name (case insensitive)
    or by the couple (name, version).'''

    def __init__(self, records=None):
        self._records: List[UnitRecord] = list(records) if records else []

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._records!r})>'

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def __getitem__(self, item):
        if isinstance(item, (int, slice)):
            return self._records[item]

        if isinstance(item, tuple):
            name, version = item
        else:
            name, version = item, None

        return self._records[self.index_of(name, version)]

    def __contains__(self, name):
        try:
            self.index_of(name)
        except KeyError:
            return False

        return True

    @property
    def names(self) -> List[Optional[str]]:
        return [_.name for _ in self._records]

    def append(self, record: UnitRecord):
        self._records.append(record)

    def index_of(self, name: str, version: int = None) -> int:
        for idx, record in enumerate(self._records):
            if record.name is None or record.name.upper() != name.upper():
                continue
            if version is not None and record.version != version:
                continue
            return idx

        raise KeyError(name if version is None else (name, version))


@contextmanager
def as_stream(source):
    '''Wrap source in a Stream, closing it at the end only if we created it.'''
    if isinstance(source, Stream):
        yield source
        return

    stream = Stream(source)
    try:
        yield stream
    finally:
        stream.close()


def _accumulate(reader: BlockReader, first_block, header_offset, compliant) -> Header:
    accumulator = HeaderAccumulator(
        offset=header_offset,
        block_size=reader.block_size,
        compliant=compliant,
    )

    block = first_block
    while not accumulator.feed(block):
        block = reader.next_block()
        if block is None:
            raise UnterminatedHeaderError(
                f'no END card for the header starting at offset {header_offset}',
                offset=reader.current_offset(),
                header_offset=header_offset,
            )

    return accumulator.header


def iter_units(source, compliant=Compliant.NONE, block_size=BLOCK_SIZE) -> Iterator[UnitRecord]:
    '''Generate the record of each unit in the stream, in order.

    The source can be a path, some bytes or a binary file object: the offsets
    are from the beginning of the stream, or from the position at the start
    when the stream cannot seek.'''
    with as_stream(source) as stream:
        start = stream.tell() if stream.seekable() else 0
        reader = BlockReader(stream, block_size=block_size, offset=start)

        index = 0
        while True:
            header_offset = reader.current_offset()

            block = reader.next_block()
            if block is None:
                break

            header = _accumulate(reader, block, header_offset, compliant)

            unit_kind = header.unit_kind
            if unit_kind == UnitKind.UNKNOWN:
                if compliant & Compliant.MAGIC:
                    raise MagicError(
                        f'unit {index} starts with {header.keywords[0]!r}', offset=header_offset)
                logger.warning('unit %d at offset %d is of unknown kind' % (index, header_offset))

            data_offset = reader.current_offset()
            data_length = header.declared_data_length
            reader.skip(padded_length(data_length, block_size) // block_size)

            record = UnitRecord(
                index=index,
                header_block_offset=header_offset,
                data_block_offset=data_offset,
                data_byte_length=data_length,
                unit_kind=unit_kind,
                name=header.name,
                version=header.version,
                block_size=block_size,
                header=header,
            )
            logger.debug('indexed %r' % (record,))

            yield record

            index += 1


def scan(source, compliant=Compliant.NONE, block_size=BLOCK_SIZE) -> LocatorTable:
    '''Build the LocatorTable of the source.

    On failure the exception raised has the attribute "table" holding
    the units indexed until that point.'''
    table = LocatorTable()

    try:
        for record in iter_units(source, compliant=compliant, block_size=block_size):
            table.append(record)
    except ScanError as e:
        logger.error('scan stopped after %d units: %s' % (len(table), e))
        e.table = table
        raise

    return table


def read_header(source, record: UnitRecord, compliant=Compliant.NONE) -> Header:
    '''Read again the header of the unit described by record.

    The source needs to be seekable; the position of a file object passed
    as source is preserved.'''
    with as_stream(source) as stream:
        if not stream.seekable():
            raise UnseekableStreamError(
                f'cannot jump to the header of unit {record.index}, the source is not seekable',
                offset=record.header_block_offset,
            )

        stream.save()
        try:
            stream.seek(record.header_block_offset)
            reader = BlockReader(stream, block_size=record.block_size, offset=record.header_block_offset)

            block = reader.next_block()
            if block is None:
                raise UnterminatedHeaderError(
                    f'no header at offset {record.header_block_offset}',
                    offset=record.header_block_offset,
                    header_offset=record.header_block_offset,
                )

            return _accumulate(reader, block, record.header_block_offset, compliant)
        finally:
            stream.restore()
