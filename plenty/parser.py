import re


class Parser(object):
    """
    Very simple program-text parser -- not much more than a few primitives
    useful for consuming an input string one word or one line at a time.

    The parser is stateful, in as much as each instance thereof is given an
    initial string to operate on, and calls to parse_whatever will advance the
    parser's position within that string, if necessary (thus, the next call
    will start from where the previous left off).

    The parser is not a tokenizer nor an evaluator: it only splits text into
    words. What a word means is decided by :func:`plenty.tokens.tokenize_word`
    and, above that, by the :class:`plenty.Machine` ingesting it (which may
    be in literal mode and not tokenize at all).

    The parse_* methods raise :exc:`StopIteration` when the string has been
    completely consumed; at that point, the current :class:`Parser` instance
    may be thrown away and a fresh one made for the next bits of input.

    Line breaks carry no meaning beyond separating words: `words` yields the
    words of "1 2 +\\n3 +" exactly as it would those of "1 2 + 3 +".
    """
    def __init__(self, text):
        self.text = text
        self.pos = 0

    @property
    def is_finished(self):
        return self.pos >= len(self.text)

    def _consume(self, pattern):
        """
        Consume (advancing self.pos) some characters based on a regex. The
        regex is applied to a slice of self.text starting from self.pos and
        ending at the end of the string.

        Note that matches are only ever expected at the start of the string
        slice.
        """
        if self.is_finished:
            raise StopIteration()
        found = re.match(pattern, self.text[self.pos:])
        if found is None:
            return None
        self.pos += found.end()
        return found.group()

    def parse_whitespace(self):
        return self._consume(r'\s*')

    def parse_word(self):
        return self._consume(r'\S+')

    def parse_rest_of_line(self):
        line = self._consume(r'[^\n]*')
        if not self.is_finished:
            self.pos += 1  # the newline itself
        return line

    def next_word(self):
        self.parse_whitespace()
        return self.parse_word()

    def lines(self):
        """ Yields the stripped, non-empty lines left in the text. """
        while not self.is_finished:
            line = self.parse_rest_of_line().strip()
            if line:
                yield line

    def words(self):
        """ Yields every word of every non-empty line, in order. """
        for line in self.lines():
            line_parser = Parser(line)
            while not line_parser.is_finished:
                yield line_parser.next_word()
