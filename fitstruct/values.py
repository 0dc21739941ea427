'''
Lexical typing of the value field of a card.

The value of a card is a small language: a logical constant (T or F),
an integer, a floating point number (where the exponent can be marked
with D as in fortran), a quoted string or nothing at all. Whatever
doesn't fit is kept as text verbatim so that a header is never rejected
because of a value.
'''
import re

from .constants import QUOTE
from .enum import ValueKind


INTEGER_RE = re.compile(r'[+-]?[0-9]+')
REAL_RE = re.compile(
    r'[+-]?'
    r'(?:[0-9]+\.[0-9]*|\.[0-9]+|[0-9]+(?=[EeDd]))'
    r'(?:[EeDd][+-]?[0-9]+)?'
)

BOOLEAN_LITERALS = {
    'T': True,
    'F': False,
}


class Value(object):
    '''Base class of the variants: use infer() to build one from the raw text.'''
    kind = None

    __slots__ = ('value',)

    def __init__(self, value=None):
        object.__setattr__(self, 'value', value)

    def __setattr__(self, name, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented

        return self.kind == other.kind and self.value == other.value

    def __hash__(self):
        return hash((self.kind, self.value))

    def __repr__(self):
        return f'{self.__class__.__name__}({self.value!r})'


class Boolean(Value):
    kind = ValueKind.BOOLEAN
    __slots__ = ()


class Integer(Value):
    kind = ValueKind.INTEGER
    __slots__ = ()


class Real(Value):
    kind = ValueKind.REAL
    __slots__ = ()


class Text(Value):
    kind = ValueKind.TEXT
    __slots__ = ()


class Undefined(Value):
    kind = ValueKind.UNDEFINED
    __slots__ = ()

    def __repr__(self):
        return f'{self.__class__.__name__}()'


def _parse_real(text: str) -> float:
    return float(text.replace('D', 'E').replace('d', 'e'))


def _unquote(text: str):
    '''Return the content of a quoted literal or None if text is not one.

    The closing quote is the first quote not doubled; trailing blanks
    inside the quotes are not significant.'''
    if not text.startswith(QUOTE):
        return None

    chars = []
    idx = 1
    while idx < len(text):
        char = text[idx]
        if char == QUOTE:
            if text[idx + 1:idx + 2] == QUOTE:
                chars.append(QUOTE)
                idx += 2
                continue
            # something after the closing quote is not a literal
            if idx != len(text) - 1:
                return None
            return ''.join(chars).rstrip(' ')
        chars.append(char)
        idx += 1

    return None


def infer(raw: str) -> Value:
    text = raw.strip()

    if text in BOOLEAN_LITERALS:
        return Boolean(BOOLEAN_LITERALS[text])

    if INTEGER_RE.fullmatch(text):
        return Integer(int(text))

    if REAL_RE.fullmatch(text):
        return Real(_parse_real(text))

    unquoted = _unquote(text)
    if unquoted is not None:
        return Text(unquoted)

    if not text:
        return Undefined()

    return Text(text)
