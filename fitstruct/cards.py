'''
# Header cards

A card is an 80 columns record of ASCII text with a fixed layout

    columns  1-8   keyword, left justified and blank filled
    column   9     value indicator '='
    columns 10-80  value, optionally followed by '/' and a comment

Cards without the value indicator in column 9 (COMMENT, HISTORY, blank
keyword and END itself) have only the keyword.
'''
import logging
import warnings

from .constants import (
    CARD_LENGTH,
    KEYWORD_LENGTH,
    VALUE_INDICATOR,
    COMMENT_DELIMITER,
    QUOTE,
    NO_INDICATOR_KEYWORDS,
)
from .enum import Compliant
from .exceptions import MalformedCardError, MalformedCardWarning
from .values import Value, Undefined, infer


logger = logging.getLogger(__name__)


class Card(object):

    def __init__(self, keyword: str, value: Value = None, comment: str = None, image: str = None):
        self.keyword = keyword
        self.value = value if value is not None else Undefined()
        self.comment = comment
        self.image = image

    def __repr__(self):
        return '<%s(%r, %r, %r)>' % (self.__class__.__name__, self.keyword, self.value, self.comment)

    def __eq__(self, other):
        if not isinstance(other, Card):
            return NotImplemented

        return (self.keyword, self.value, self.comment) == (other.keyword, other.value, other.comment)

    @property
    def has_value(self):
        return not isinstance(self.value, Undefined)


def split_value_comment(text: str):
    '''Split at the first comment delimiter not enclosed in quotes.

    It returns the couple (raw value, comment) where comment is None if no
    delimiter is found. A doubled quote inside a literal toggles the state
    twice so it doesn't need special handling.'''
    in_quotes = False
    for idx, char in enumerate(text):
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == COMMENT_DELIMITER and not in_quotes:
            return text[:idx], text[idx + 1:].strip()

    return text, None


def _malformed(message, compliant, offset):
    if compliant & Compliant.CARD:
        raise MalformedCardError(message, offset=offset)

    warnings.warn(message, MalformedCardWarning, stacklevel=3)


def parse(card_bytes, compliant=Compliant.NONE, offset=None):
    '''Decode one card; it returns None if the slice is too short to be a card.

    The offset is used only to report problems.'''
    if len(card_bytes) < CARD_LENGTH:
        logger.debug('slice of %d bytes is too short for a card' % len(card_bytes))
        return None

    image = bytes(card_bytes[:CARD_LENGTH]).decode('ascii', errors='replace')

    field = image[:KEYWORD_LENGTH]
    keyword = field.rstrip()

    if VALUE_INDICATOR in keyword:
        keyword = keyword.split(VALUE_INDICATOR)[0].rstrip()
        _malformed(f'value indicator inside the keyword field of card {image.rstrip()!r}', compliant, offset)
        return Card(keyword, image=image)

    if image[KEYWORD_LENGTH] != VALUE_INDICATOR:
        if keyword not in NO_INDICATOR_KEYWORDS:
            _malformed(f'card {keyword!r} has no value indicator', compliant, offset)
        return Card(keyword, image=image)

    raw_value, comment = split_value_comment(image[KEYWORD_LENGTH + 1:])

    return Card(keyword, infer(raw_value), comment, image=image)
