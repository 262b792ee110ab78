# coding= utf-8
from plenty import tokens
from plenty.parser import Parser
from plenty.tokens import *

import inspect
import logging
import os
import sys

log = logging.getLogger(__name__)

__all__ = tokens.__all__ + [
    'OperandError', 'OperandTypeError', 'ArityError', 'StateError',
    'DivisionByZero', 'IntegerOverflow', 'UndefinedFunction',
    'MalformedDefinition', 'CallDepthExceeded', 'Unimplemented',
    'PlentyIOError', 'LITERAL_ESCAPE', 'LITERAL_EXIT', 'MAKE_FUNCTION',
    'DEFAULT_MAX_CALL_DEPTH', 'Machine', 'Parser',
]


class OperandError(PlentyError): pass
class OperandTypeError(OperandError): pass
class ArityError(OperandError): pass
class StateError(PlentyError): pass
class DivisionByZero(StateError): pass
class IntegerOverflow(StateError): pass
class UndefinedFunction(StateError): pass
class MalformedDefinition(StateError): pass
class CallDepthExceeded(StateError): pass
class Unimplemented(PlentyError): pass
class PlentyIOError(PlentyError): pass

LITERAL_ESCAPE = '`'
LITERAL_EXIT = '~'
MAKE_FUNCTION = ':make-fn'
DEFAULT_MAX_CALL_DEPTH = 200


def _handles(*kinds):
    """
    Creates a decorator that adds a .kinds member to its given func, which may
    then be inspected for by the :class:`Machine`'s __init__ method to route
    tokens of those kinds to it.
    """
    def decorator(func):
        func.kinds = kinds
        return func
    return decorator


def _checked(number):
    if not INT_MIN <= number <= INT_MAX:
        raise IntegerOverflow('integer overflow: %d' % number)
    return int_literal(number)


def _truncating_div(a, b):
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        return -quotient
    return quotient


class Machine(object):
    """
    A Plenty machine. It has a stack, a function registry and a literal-mode
    flag, and nothing else: everything it knows lives on one instance.

    Words come in through :meth:`ingest`; tokens (from the tokenizer, from a
    function body or from a caller building them by hand) go through
    :meth:`dispatch`. Both raise :exc:`PlentyError` subclasses and leave the
    stack as it was at the point of failure; deciding what to do about an
    error is up to the caller (see :meth:`eval` for the read loop's policy).
    """
    def __init__(self, output=None, max_call_depth=DEFAULT_MAX_CALL_DEPTH):
        self.data_stack = []
        self.functions = {}
        self.literal_mode = False
        self.output = output
        self.max_call_depth = max_call_depth
        self.call_depth = 0
        self.handlers = {}

        for name, method in inspect.getmembers(self, inspect.ismethod):
            for kind in getattr(method, 'kinds', ()):
                self.handlers[kind] = method

    def __repr__(self):
        return repr(self.data_stack)

    def repr(self):
        return repr(self)

    def _write(self, text):
        print(text, file=self.output if self.output is not None else sys.stdout)

    def _push(self, val):
        self.data_stack.append(val)

    def _pop(self):
        if self.data_stack:
            return self.data_stack.pop()
        return None

    def _pop_int(self):
        token = self._pop()
        if token is None:
            return None, True
        if token.kind != INT:
            return None, False
        return token.value, False

    def _pop_two_numbers(self):
        b, b_missing = self._pop_int()
        a, a_missing = self._pop_int()
        if b_missing or a_missing:
            raise ArityError('expected two numbers')
        if a is None or b is None:
            raise OperandTypeError('expected two numbers')
        return a, b

    def ingest(self, word):
        """
        Takes one raw word of program text. Literal-mode handling and the
        function-definition command are decided here, before the tokenizer
        ever sees the word.
        """
        if word.startswith(LITERAL_ESCAPE) and len(word) > len(LITERAL_ESCAPE):
            self._push(text_literal(word[len(LITERAL_ESCAPE):]))
        elif word == LITERAL_ESCAPE:
            self.literal_mode = True
        elif word == LITERAL_EXIT and self.literal_mode:
            self.literal_mode = False
        elif self.literal_mode:
            self._push(text_literal(word))
        elif word == MAKE_FUNCTION:
            self.make_function()
        else:
            try:
                token = tokenize_word(word)
            except InvalidFunctionName:
                token = text_literal(word)
            self.dispatch(token)

    def dispatch(self, token):
        if token.is_value:
            self._push(token)
            return

        handler = self.handlers.get(token.kind)
        if handler is None:
            raise Unimplemented('unknown token type: %s' % token.kind)
        handler(token)

    @_handles(GROUP_OPEN, GROUP_CLOSE, OPEN_FILE, READ_LINES)
    def _not_supported(self, token):
        raise Unimplemented('not yet supported: %r' % (token,))

    @_handles(DISPLAY)
    def _display(self, token):
        self.display()

    def display(self):
        self._write(repr(self))
        self._write('Functions: %r' % self.functions)

    @_handles(CLEAR)
    def _clear(self, token):
        self.clear()

    def clear(self):
        del self.data_stack[:]

    @_handles(LIST_DIR)
    def _list_dir(self, token):
        try:
            entries = sorted(entry.name for entry in os.scandir(os.curdir))
        except OSError as e:
            raise PlentyIOError('cannot list directory: %s' % e)

        for name in entries:
            path = os.path.join(os.curdir, name)
            try:
                path.encode('utf-8')
            except UnicodeEncodeError:
                raise PlentyIOError('unrepresentable path: %r' % path)
            self._write(path)

    @_handles(PLUS)
    def _add(self, token):
        if len(self.data_stack) < 2:
            return

        a = self._pop()
        b = self._pop()
        if a.kind == INT and b.kind == INT:
            self._push(_checked(a.value + b.value))
        elif a.kind == TEXT and b.kind == TEXT:
            self._push(text_literal(a.value + b.value))
        else:
            raise OperandTypeError('cannot add %r to %r' % (a, b))

    @_handles(MINUS)
    def _subtract(self, token):
        a, b = self._pop_two_numbers()
        self._push(_checked(a - b))

    @_handles(MULTIPLY)
    def _multiply(self, token):
        a, b = self._pop_two_numbers()
        self._push(_checked(a * b))

    @_handles(DIVIDE)
    def _divide(self, token):
        a, b = self._pop_two_numbers()
        if b == 0:
            raise DivisionByZero('division by zero')
        self._push(_checked(_truncating_div(a, b)))

    def _collect(self, kind):
        count, _ = self._pop_int()
        if count is None:
            raise OperandTypeError('expected a number')

        items = []
        for _ in range(count):
            if not self.data_stack or self.data_stack[-1].kind != kind:
                break
            items.append(self._pop().value)
        return items

    @_handles(MAKE_INT_ARRAY)
    def _make_int_array(self, token):
        self._push(int_array(self._collect(INT)))

    @_handles(MAKE_TEXT_ARRAY)
    def _make_text_array(self, token):
        self._push(text_array(self._collect(TEXT)))

    @_handles(JOIN)
    def _join(self, token):
        array = self._pop()
        if array is None or array.kind != TEXT_ARRAY:
            raise OperandTypeError('expected an array of text')
        self._push(text_literal(''.join(array.value)))

    @_handles(INVOKE)
    def _invoke(self, token):
        self.call_function(token.value)

    def call_function(self, name):
        """
        Re-tokenizes and runs the body stored under `name`. Bodies are kept
        as raw text, so a body may call a function that only got defined
        after it.
        """
        log.debug('Calling function: %s', name)
        if name not in self.functions:
            raise UndefinedFunction('undefined function: %s' % name)
        if self.call_depth >= self.max_call_depth:
            raise CallDepthExceeded('call depth exceeded: %s' % name)

        definition = list(self.functions[name])
        log.debug('Function definition: %r', definition)
        self.call_depth += 1
        try:
            for entry in definition:
                if entry.kind != TEXT:
                    raise OperandTypeError('expected a text value')
                self.dispatch(tokenize_word(entry.value))
        finally:
            self.call_depth -= 1

    def make_function(self):
        """
        Builds a function out of the text values on the stack: everything down
        to the end marker (or the bottom of the stack) is taken, the deepest
        of those is the name and the rest, top of stack first, is the body.

        Nothing is put back if this fails half-way.
        """
        tokens = []
        while True:
            token = self._pop()
            if token is None:
                break
            if token.kind != TEXT:
                raise MalformedDefinition('expected a text value')
            if token.value == LITERAL_EXIT:
                break
            tokens.append(token)
        log.debug('Function tokens: %r', tokens)

        if not tokens:
            raise MalformedDefinition('expected a function name')
        name = tokens.pop().value
        self.functions[name] = tokens
        log.info('defined function %s', name)

    def tokenize(self, text):
        return [tokenize_word(word) for word in Parser(text).words()]

    def run_program(self, text):
        """
        Ingests every word of `text` and returns a one-element list holding
        the debug form of the stack afterwards. The first error is raised
        as-is; words after it are not ingested.
        """
        for word in Parser(text).words():
            self.ingest(word)
        return [repr(self)]

    def eval(self, text=''):
        """
        Ingests one line the way the read loop does: the first error abandons
        the rest of the line and is reported in the return value, but the
        stack and functions are kept as the error left them.
        """
        try:
            for word in Parser(text).words():
                self.ingest(word)
        except PlentyError as e:
            return ' ? %s' % e
        return ' ok'
