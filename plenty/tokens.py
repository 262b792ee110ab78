# coding= utf-8
import collections
import logging
import re

log = logging.getLogger(__name__)

__all__ = [
    'PlentyError', 'ParseError', 'InvalidFunctionName',
    'DISPLAY', 'INT', 'WIDE_INT', 'TEXT', 'MAKE_INT_ARRAY', 'MAKE_TEXT_ARRAY',
    'INT_ARRAY', 'TEXT_ARRAY', 'JOIN', 'PLUS', 'MINUS', 'MULTIPLY', 'DIVIDE',
    'GROUP_OPEN', 'GROUP_CLOSE', 'INVOKE', 'OPEN_FILE', 'READ_LINES', 'CLEAR',
    'LIST_DIR', 'VALUE_KINDS', 'INT_MIN', 'INT_MAX', 'WIDE_INT_MIN',
    'WIDE_INT_MAX', 'CALL_SIGIL', 'SYMBOLS', 'Token', 'int_literal',
    'text_literal', 'int_array', 'text_array', 'parse_int', 'tokenize_word',
]


class PlentyError(Exception): pass
class ParseError(PlentyError): pass
class InvalidFunctionName(ParseError): pass


DISPLAY = 'Display'
INT = 'IntLiteral'
WIDE_INT = 'WideIntLiteral'
TEXT = 'TextLiteral'
MAKE_INT_ARRAY = 'MakeIntArray'
MAKE_TEXT_ARRAY = 'MakeTextArray'
INT_ARRAY = 'IntArray'
TEXT_ARRAY = 'TextArray'
JOIN = 'Join'
PLUS = 'Plus'
MINUS = 'Minus'
MULTIPLY = 'Multiply'
DIVIDE = 'Divide'
GROUP_OPEN = 'GroupOpen'
GROUP_CLOSE = 'GroupClose'
INVOKE = 'Invoke'
OPEN_FILE = 'OpenFile'
READ_LINES = 'ReadLines'
CLEAR = 'Clear'
LIST_DIR = 'ListDir'

VALUE_KINDS = frozenset([INT, WIDE_INT, TEXT, INT_ARRAY, TEXT_ARRAY])

INT_MIN, INT_MAX = -2 ** 31, 2 ** 31 - 1
WIDE_INT_MIN, WIDE_INT_MAX = -2 ** 63, 2 ** 63 - 1

CALL_SIGIL = ':'

SYMBOLS = {
    '.': DISPLAY,
    '+': PLUS,
    '-': MINUS,
    '*': MULTIPLY,
    '/': DIVIDE,
    '(': GROUP_OPEN,
    ')': GROUP_CLOSE,
    ':clear': CLEAR,
    ':listdir': LIST_DIR,
}

_NUMBER = re.compile(r'[+-]?[0-9]+\Z')


class Token(collections.namedtuple('Token', 'kind value')):
    """
    One instruction or value. Tokens compare equal when both their kind and
    their value do, so ``Token(INT, 3) == int_literal(3)``.

    The repr is the debug format used for the stack listing, e.g.
    ``IntLiteral(3)`` or ``Plus``.
    """
    __slots__ = ()

    def __new__(cls, kind, value=None):
        return super(Token, cls).__new__(cls, kind, value)

    def __repr__(self):
        if self.value is None:
            return self.kind
        if isinstance(self.value, tuple):
            return '%s(%r)' % (self.kind, list(self.value))
        return '%s(%r)' % (self.kind, self.value)

    @property
    def is_value(self):
        return self.kind in VALUE_KINDS


def int_literal(number):
    return Token(INT, number)


def text_literal(text):
    return Token(TEXT, text)


def int_array(items):
    return Token(INT_ARRAY, tuple(items))


def text_array(items):
    return Token(TEXT_ARRAY, tuple(items))


def parse_int(word):
    """
    Returns `word` as a 32-bit signed integer, or None if it isn't one. Only
    an optional sign and ASCII digits are accepted.
    """
    if not _NUMBER.match(word):
        return None
    number = int(word)
    if INT_MIN <= number <= INT_MAX:
        return number
    return None


def tokenize_word(word):
    """
    Maps a single word onto exactly one :class:`Token`.

    Fixed symbols win, then the call sigil, then 32-bit integers; every other
    word is text. The only failure is a lone call sigil, which raises
    :exc:`InvalidFunctionName`.
    """
    log.debug('Parsing token: %s', word)
    if word in SYMBOLS:
        return Token(SYMBOLS[word])

    if word.startswith(CALL_SIGIL):
        if len(word) == len(CALL_SIGIL):
            raise InvalidFunctionName('invalid function name')
        return Token(INVOKE, word[len(CALL_SIGIL):])

    number = parse_int(word)
    if number is not None:
        return int_literal(number)

    return text_literal(word)
