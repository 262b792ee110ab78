# coding= utf-8
"""
Implements a Plenty machine, i.e., an object capable of maintaining a stack
and a set of user-defined functions, and of evaluating whitespace-separated
words of Plenty code against them one at a time.

Usage should be as simple as:
    >>> import plenty
    >>> plenty.Machine().run_program("1 2 + .")
    [IntLiteral(3)]
    Functions: {}
    ['[IntLiteral(3)]']

The machine may also be fed a line at a time, the way the read loop does it:
    >>> m = plenty.Machine()
    >>> m.eval("5 0 /")
    ' ? division by zero'

Wherein the return value is ' ok' when every word of the line was evaluated,
or ' ? ' followed by the error that stopped it.

Words prefixed with a backtick are pushed as text; a lone backtick switches
literal mode on (every following word is pushed as text) until a lone '~'.
Text on the stack is turned into a function by ':make-fn', and called with
':name':
    >>> m = plenty.Machine()
    >>> m.run_program("` add + ~ :make-fn 1 2 :add")
    ['[IntLiteral(3)]']
"""
from plenty.machine import *
