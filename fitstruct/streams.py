import io
import logging
import os

from .constants import BLOCK_SIZE, CARD_LENGTH
from .exceptions import TruncatedStreamError


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/path/file object to
    uniform its properties: mainly we need to know if we can seek()
    or we are forced to read sequentially.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj
        self.owned = False  # we close only what we opened
        self.history = []

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._type.__name__})>'

    def close(self):
        if self.owned:
            self.obj.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, 'rb')
        self.owned = True

    init_PosixPath = init_str
    init_WindowsPath = init_str

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)
        self.owned = True

    init_bytearray = init_bytes
    init_memoryview = init_bytes

    def init_file(self):
        if not hasattr(self.obj, 'read'):
            raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self._type.__name__)

    def seekable(self):
        seekable = getattr(self.obj, 'seekable', None)
        if seekable is None:
            return hasattr(self.obj, 'seek') and hasattr(self.obj, 'tell')

        return seekable()

    @property
    def size(self):
        '''Total size in bytes, None if the stream cannot seek.'''
        if not self.seekable():
            return None

        self.save()
        size = self.obj.seek(0, os.SEEK_END)
        self.restore()

        return size

    def read_exactly(self, n):
        '''Read n bytes, retrying on short reads; it returns less only at the end of the stream.'''
        chunks = []
        missing = n
        while missing > 0:
            chunk = self.obj.read(missing)
            if not chunk:
                break
            chunks.append(chunk)
            missing -= len(chunk)

        return b''.join(chunks)

    def save(self):
        self.history.append(self.obj.tell())

    def restore(self):
        old_seek = self.history.pop()
        self.obj.seek(old_seek)


class BlockReader(object):
    '''Pull fixed-size blocks out of a Stream.

    The offsets are relative to the position the stream had when
    the reader was created, plus the initial offset passed.'''

    def __init__(self, stream, block_size=BLOCK_SIZE, offset=0):
        if block_size <= 0 or block_size % CARD_LENGTH:
            raise ValueError(f'block size must be a positive multiple of {CARD_LENGTH}, not {block_size}')

        self.stream = stream if isinstance(stream, Stream) else Stream(stream)
        self.block_size = block_size
        self._offset = offset

    def current_offset(self) -> int:
        return self._offset

    def next_block(self):
        '''Return the next block or None at the end of the stream.'''
        block = self.stream.read_exactly(self.block_size)

        if not block:
            logger.debug('end of stream at offset %d' % self._offset)
            return None

        if len(block) != self.block_size:
            raise TruncatedStreamError(
                f'partial block of {len(block)} bytes (expected {self.block_size})',
                offset=self._offset)

        self._offset += self.block_size

        return block

    def skip(self, n_blocks):
        '''Advance past n_blocks blocks without looking at them.'''
        if n_blocks <= 0:
            return

        length = n_blocks * self.block_size

        if self.stream.seekable():
            self._seek_over(length)
        else:
            self._read_over(n_blocks)

    def _seek_over(self, length):
        start = self.stream.tell()
        available = self.stream.size - start

        if available < length:
            raise TruncatedStreamError(
                f'stream ends {available} bytes into a region of {length} bytes',
                offset=self._offset + available)

        logger.debug('seeking over %d bytes from offset %d' % (length, self._offset))
        self.stream.seek(start + length)
        self._offset += length

    def _read_over(self, n_blocks):
        logger.debug('reading over %d blocks from offset %d' % (n_blocks, self._offset))
        for _ in range(n_blocks):
            if self.next_block() is None:
                raise TruncatedStreamError('stream ended inside a data region', offset=self._offset)
