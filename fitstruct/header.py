'''
# Headers

A header is the ordered list of cards describing one unit, terminated
by the END card; it can span more than one block and whatever follows
the END card in its last block is padding.

The size of the data following a header is given by

    |BITPIX| * GCOUNT * (PCOUNT + NAXIS1 * NAXIS2 * ... * NAXISn) / 8

that works for images (GCOUNT=1, PCOUNT=0), for tables (NAXIS1 is the
width of a row, NAXIS2 the number of rows and PCOUNT the size of the heap)
and for random groups (where NAXIS1 is zero and it's not counted).
'''
import logging
from typing import List, Optional

from .cards import Card, parse
from .constants import (
    BLOCK_SIZE,
    CARD_LENGTH,
    END_KEYWORD,
    PRIMARY_KEYWORD,
    EXTENSION_KEYWORD,
    BITPIX_KEYWORD,
    NAXIS_KEYWORD,
    PCOUNT_KEYWORD,
    GCOUNT_KEYWORD,
    GROUPS_KEYWORD,
    EXTNAME_KEYWORD,
    EXTVER_KEYWORD,
    MAX_NAXIS,
)
from .enum import AccumulatorState, Compliant, UnitKind
from .values import Integer, Text


logger = logging.getLogger(__name__)


EXTENSION_KINDS = {
    'IMAGE': UnitKind.IMAGE,
    'IUEIMAGE': UnitKind.IMAGE,
    'BINTABLE': UnitKind.BINARY_TABLE,
    'A3DTABLE': UnitKind.BINARY_TABLE,
    'TABLE': UnitKind.ASCII_TABLE,
}


def classify(cards: List[Card]) -> UnitKind:
    '''Tell the kind of unit from its first card.'''
    if not cards:
        return UnitKind.UNKNOWN

    first = cards[0]

    if first.keyword == PRIMARY_KEYWORD:
        return UnitKind.IMAGE

    if first.keyword == EXTENSION_KEYWORD and isinstance(first.value, Text):
        return EXTENSION_KINDS.get(first.value.value.strip().upper(), UnitKind.UNKNOWN)

    return UnitKind.UNKNOWN


class Header(object):
    '''Ordered sequence of cards; looking up by keyword returns the python
    value of the last card with that keyword.'''

    def __init__(self, cards: List[Card], n_blocks=0):
        self.cards = list(cards)
        self.n_blocks = n_blocks

    def __repr__(self):
        return '<%s(%s, %d cards)>' % (self.__class__.__name__, self.unit_kind.name, len(self.cards))

    def __str__(self):
        return '\n'.join(card.image.rstrip() if card.image else card.keyword for card in self.cards)

    def __len__(self):
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def __contains__(self, keyword):
        return self.get_card(keyword) is not None

    def __getitem__(self, item):
        if isinstance(item, int):
            return self.cards[item]

        card = self.get_card(item)
        if card is None:
            raise KeyError(item)

        return card.value.value

    @property
    def keywords(self) -> List[str]:
        return [_.keyword for _ in self.cards]

    def get_card(self, keyword) -> Optional[Card]:
        for card in reversed(self.cards):
            if card.keyword == keyword:
                return card

        return None

    def get(self, keyword, default=None):
        try:
            return self[keyword]
        except KeyError:
            return default

    def get_int(self, keyword, default=None):
        '''Like get() but only for cards with an integer value.'''
        card = self.get_card(keyword)
        if card is None:
            return default

        if not isinstance(card.value, Integer):
            logger.warning('keyword %s has value %r instead of an integer' % (keyword, card.value))
            return default

        return card.value.value

    @property
    def unit_kind(self) -> UnitKind:
        return classify(self.cards)

    @property
    def name(self) -> Optional[str]:
        card = self.get_card(EXTNAME_KEYWORD)
        if card is None or not isinstance(card.value, Text):
            return None

        return card.value.value

    @property
    def version(self) -> int:
        return self.get_int(EXTVER_KEYWORD, 1)

    @property
    def is_random_groups(self):
        return (self.cards[0].keyword == PRIMARY_KEYWORD if self.cards else False) \
            and self.get(GROUPS_KEYWORD) is True \
            and self.get_int(NAXIS_KEYWORD + '1') == 0

    @property
    def shape(self) -> List[int]:
        '''The NAXISn values in order.

        The first missing one counts as zero and ends the list, since the
        product is zero anyway; NAXIS outside 0-999 gives no axes at all.'''
        naxis = self.get_int(NAXIS_KEYWORD, 0)

        if not 0 <= naxis <= MAX_NAXIS:
            logger.warning('NAXIS = %d is out of range, ignoring the axes' % naxis)
            return []

        dims = []
        for idx in range(1, naxis + 1):
            keyword = f'{NAXIS_KEYWORD}{idx}'
            size = self.get_int(keyword)
            if size is None:
                logger.warning('%s is missing, counting it as zero' % keyword)
                dims.append(0)
                break
            dims.append(size)

        return dims

    @property
    def declared_data_length(self) -> int:
        bitpix = self.get_int(BITPIX_KEYWORD)
        dims = self.shape

        if bitpix is None or not dims:
            return 0

        if self.is_random_groups:
            dims = dims[1:]

        n_elements = 1
        for size in dims:
            n_elements *= size

        gcount = self.get_int(GCOUNT_KEYWORD, 1)
        pcount = self.get_int(PCOUNT_KEYWORD, 0)

        if gcount < 0 or pcount < 0 or any(size < 0 for size in dims):
            logger.warning('negative size in %r (GCOUNT=%d, PCOUNT=%d), assuming no data' % (dims, gcount, pcount))
            return 0

        return abs(bitpix) * gcount * (pcount + n_elements) // 8


class HeaderAccumulator(object):
    '''Consume blocks until the END card is found.

    The offset is where the first block fed is into the stream, it's
    used only to report the position of malformed cards.'''

    def __init__(self, offset=0, block_size=BLOCK_SIZE, compliant=Compliant.NONE):
        self.state = AccumulatorState.ACCUMULATING
        self.offset = offset
        self.block_size = block_size
        self.compliant = compliant
        self.cards: List[Card] = []
        self.n_blocks = 0

    @property
    def done(self):
        return self.state == AccumulatorState.DONE

    def feed(self, block) -> bool:
        '''Append the cards of the block; returns True when the header is complete.'''
        if self.done:
            raise ValueError('the header is already complete')

        block_offset = self.offset + self.n_blocks * self.block_size
        self.n_blocks += 1

        for idx in range(0, len(block), CARD_LENGTH):
            card = parse(block[idx:idx + CARD_LENGTH], compliant=self.compliant, offset=block_offset + idx)
            if card is None:
                continue

            self.cards.append(card)

            if card.keyword == END_KEYWORD:
                logger.debug('END card found at offset %d' % (block_offset + idx))
                self.state = AccumulatorState.DONE
                break

        return self.done

    @property
    def header(self) -> Header:
        if not self.done:
            raise ValueError('the header is not complete yet')

        return Header(self.cards, n_blocks=self.n_blocks)
