## linebasic — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from fractions import Fraction

import pytest

from linebasic import types as T
from linebasic.parser import parse_line
from linebasic.errors import BasicParseError, BasicLexError


def N(value): return T.NumberLiteral(Fraction(value))
def V(letter): return T.VariableRef(letter)


def test_direct_and_numbered_lines():
    assert parse_line("END") == (None, T.End())
    assert parse_line("10 END") == (10, T.End())


def test_bare_line_number_means_delete():
    assert parse_line("  30  ") == (30, None)


def test_line_number_zero_is_rejected():
    with pytest.raises(BasicParseError):
        parse_line("0 END")


def test_precedence_and_left_associativity():
    _, stmt = parse_line("LET X = 1 - 2 - 3 * 4 / 5")
    # ((1 - 2) - ((3 * 4) / 5))
    expected = T.BinaryOp('-', T.BinaryOp('-', N(1), N(2)), T.BinaryOp('/', T.BinaryOp('*', N(3), N(4)), N(5)))
    assert stmt == T.Let('X', expected)


def test_unary_binds_tighter_than_binary():
    _, stmt = parse_line("PRINT -A * 2")
    assert stmt == T.Print((T.BinaryOp('*', T.UnaryOp('-', V('A')), N(2)),))


def test_parentheses_are_kept_in_tree():
    _, stmt = parse_line("PRINT (5 + 2) * 3")
    assert stmt.items[0] == T.BinaryOp('*', T.Parenthesized(T.BinaryOp('+', N(5), N(2))), N(3))


def test_print_items_mix_strings_and_expressions():
    _, stmt = parse_line('PRINT "one", 1, "two", 2')
    assert stmt == T.Print((T.StringLiteral("one"), N(1), T.StringLiteral("two"), N(2)))


def test_print_without_items():
    assert parse_line("PRINT") == (None, T.Print(()))


def test_input_letters():
    assert parse_line("20 input a, b, c") == (20, T.Input(('A', 'B', 'C')))


def test_if_with_nested_statement():
    _, stmt = parse_line("IF 1 >< 0 THEN IF A = B THEN GOTO 100")
    assert stmt == T.If(N(1), '<>', N(0), T.If(V('A'), '=', V('B'), T.Goto(N(100))))


def test_goto_accepts_expressions():
    assert parse_line("GOSUB 10 * A") == (None, T.Gosub(T.BinaryOp('*', N(10), V('A'))))


def test_rem_save_and_load():
    assert parse_line("10 REM hello") == (10, T.Rem(" hello"))
    assert parse_line("10 REM") == (10, T.Rem(""))
    assert parse_line('SAVE "prog.bas"') == (None, T.Save("prog.bas"))
    assert parse_line('LOAD "prog.bas"') == (None, T.Load("prog.bas"))


def test_simple_commands():
    for text, stmt in [("RETURN", T.Return()), ("LIST", T.List()), ("RUN", T.Run()), ("CLEAR", T.Clear()),
                       ("CLIPSAVE", T.ClipSave()), ("CLIPLOAD", T.ClipLoad()), ("BYE", T.Bye())]:
        assert parse_line(text) == (None, stmt)


def test_relation_only_allowed_in_if():
    with pytest.raises(BasicParseError):
        parse_line("PRINT 1 < 2")


def test_string_not_allowed_in_arithmetic():
    with pytest.raises(BasicParseError):
        parse_line('PRINT "a" + 1')


def test_missing_then_is_parse_error():
    with pytest.raises(BasicParseError) as info:
        parse_line("IF A = 1 PRINT A")
    assert info.value.source == "IF A = 1 PRINT A"


def test_unknown_statement_is_parse_error():
    with pytest.raises(BasicParseError) as info:
        parse_line("X = 5")
    assert "Unknown statement" in info.value.message
    assert info.value.column == 1


def test_incomplete_expression_points_past_end():
    with pytest.raises(BasicParseError) as info:
        parse_line("PRINT 1 +")
    assert info.value.column == 10
    assert "end of line" in info.value.message


def test_lex_errors_pass_through():
    with pytest.raises(BasicLexError):
        parse_line('PRINT "oops')


def test_multi_letter_identifiers_are_rejected():
    with pytest.raises(BasicParseError):
        parse_line("LET AB = 1")


def test_deeply_nested_expression_is_rejected():
    with pytest.raises(BasicParseError) as info:
        parse_line("PRINT " + "(" * 3000 + "1" + ")" * 3000)
    assert "too deeply nested" in info.value.message
    with pytest.raises(BasicParseError):
        parse_line("PRINT " + "-" * 3000 + "1")
    with pytest.raises(BasicParseError):
        parse_line("IF 1 = 1 THEN " * 500 + "END")


def test_long_flat_sum_is_accepted():
    _, stmt = parse_line("PRINT " + " + ".join(["1"] * 150))
    assert isinstance(stmt.items[0], T.BinaryOp)
