import plenty
import plenty_repl


def _reader(lines):
    lines = iter(lines)

    def read(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError()
    return read


class TestRepl():
    def test_lines_and_quit(self, capsys):
        m = plenty.Machine()
        ret = plenty_repl.plenty_repl(m, _reader(['1 2 +', '5 0 /', 'quit', '9']))

        out, err = capsys.readouterr()
        assert ret == 0
        assert ' ok\n ? division by zero\n' in out
        assert ':::::::::' in out
        assert m.data_stack == [plenty.int_literal(3)]

    def test_error_does_not_stop_loop(self):
        m = plenty.Machine()
        plenty_repl.plenty_repl(m, _reader(['1 :nope 2', '3', 'exit']))

        assert m.data_stack == [plenty.int_literal(1), plenty.int_literal(3)]

    def test_unsupported_word_does_not_stop_loop(self, capsys):
        m = plenty.Machine()
        plenty_repl.plenty_repl(m, _reader(['1 ( 2', ') 3', '3']))

        out, err = capsys.readouterr()
        assert out.count(' ? not yet supported') == 2
        assert m.data_stack == [plenty.int_literal(1), plenty.int_literal(3)]

    def test_end_of_file(self):
        m = plenty.Machine()
        ret = plenty_repl.plenty_repl(m, _reader(['` add + ~ :make-fn']))

        assert ret == 0
        assert 'add' in m.functions

    def test_exit_words(self):
        for word in plenty_repl.EXIT_WORDS:
            m = plenty.Machine()
            plenty_repl.plenty_repl(m, _reader(['  %s  ' % word, '1']))

            assert not m.data_stack


class TestCommandLine():
    def test_command(self, capsys):
        ret = plenty_repl.main(['-c', '1 2 +'])

        out, err = capsys.readouterr()
        assert ret == 0
        assert out == '[IntLiteral(3)]\n'

    def test_command_error(self, capsys):
        ret = plenty_repl.main(['-c', '5 0 /'])

        out, err = capsys.readouterr()
        assert ret == 1
        assert 'Error: division by zero' in err

    def test_program_file(self, tmp_path, capsys):
        source = tmp_path / 'add.plenty'
        source.write_text('` add + ~ :make-fn\n\n1 2 :add\n')

        ret = plenty_repl.main([str(source)])

        out, err = capsys.readouterr()
        assert ret == 0
        assert out == '[IntLiteral(3)]\n'

    def test_missing_file(self, tmp_path, capsys):
        ret = plenty_repl.main([str(tmp_path / 'nope.plenty')])

        out, err = capsys.readouterr()
        assert ret == 1
        assert 'Failed to read' in err
