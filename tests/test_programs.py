"""
Runs whole Plenty programs and checks the stack they leave behind, without
looking inside the machine.
"""
import pytest
import plenty


@pytest.mark.parametrize('program, expected', [
    ("1 2 + .", ["[IntLiteral(3)]"]),
    ("3 4 + .", ["[IntLiteral(7)]"]),
    ("5 5 * .", ["[IntLiteral(25)]"]),
    ("10 2 - .", ["[IntLiteral(8)]"]),
    ("1 2 3 4 5 6 +", ["[IntLiteral(1), IntLiteral(2), IntLiteral(3), "
                       "IntLiteral(4), IntLiteral(11)]"]),
    ("1 2 +\n3 +", ["[IntLiteral(6)]"]),
    ("", ["[]"]),
    ("\n\n   \n", ["[]"]),
])
def test_programs(program, expected):
    m = plenty.Machine()
    assert m.run_program(program) == expected


def test_function_creation():
    m = plenty.Machine()
    m.run_program("` add + ~ :make-fn")

    assert repr(m.functions) == "{'add': [TextLiteral('+')]}"


@pytest.mark.parametrize('program', [
    "` add + ~ :make-fn\n1 2 :add",
    # no difference between newline or space
    "` add + ~ :make-fn 1 2 :add",
])
def test_function_calling(program):
    m = plenty.Machine()
    assert m.run_program(program) == ["[IntLiteral(3)]"]


def test_division_by_zero():
    m = plenty.Machine()

    with pytest.raises(plenty.DivisionByZero):
        m.run_program("5 0 /")

    assert m.repr() == "[]"


def test_first_error_stops_program():
    m = plenty.Machine()

    with pytest.raises(plenty.UndefinedFunction):
        m.run_program("1 :missing\n2 3")

    assert m.repr() == "[IntLiteral(1)]"


@pytest.mark.parametrize('program', [
    "hello world 1 2 3",
    "` a b c ~ ~ `d",
    "+ + + 1 + `x",
    ": x : `:",
    ":clear . :clear .",
    "` any words at all ( ) / - :nope",
    "-5 +5 007 2147483648 1.5",
])
def test_value_paths_never_fail(program, capsys):
    m = plenty.Machine()
    m.run_program(program)
