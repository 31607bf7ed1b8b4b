## linebasic — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from fractions import Fraction

import pytest

from linebasic.parser import parse_line
from linebasic.formatting import format_number, format_line, write_without_ansi, describe_error
from linebasic.errors import BasicParseError, DivisionByZeroError


def canonical(text: str) -> str:
    number, stmt = parse_line(text)
    return format_line(number, stmt)


@pytest.mark.parametrize("source, listed", [
    ('10 print "hello" , "world"', '10 PRINT "hello", "world"'),
    ('20 let x=10*y+(2*z)', '20 LET X = 10 * Y + (2 * Z)'),
    ('30 INPUT a,b , c', '30 INPUT A, B, C'),
    ('50 if y<(x+1) then ? "foo","bar"', '50 IF Y < (X + 1) THEN PRINT "foo", "bar"'),
    ('60 IF A >< B THEN GOTO 10', '60 IF A <> B THEN GOTO 10'),
    ('70 IF A => B THEN GOSUB 100', '70 IF A >= B THEN GOSUB 100'),
    ('80 PRINT -A, +3, -(1 - 2)', '80 PRINT -A, +3, -(1 - 2)'),
    ('10 LIST', '10 LIST'),
    ('10 end', '10 END'),
    ('10 rem-This is a comment', '10 REM-This is a comment'),
    ('10 REM  two spaces', '10 REM  two spaces'),
    ('10 PRINT', '10 PRINT'),
    ('10 SAVE "a.bas"', '10 SAVE "a.bas"'),
    ('10 r e t u r n', '10 RETURN'),
])
def test_canonical_listing_form(source, listed):
    assert canonical(source) == listed


def test_listing_is_stable_when_reparsed():
    source = '40 IF X*2 <= (Y - -3)/4 THEN PR "ok", X'
    once = canonical(source)
    assert canonical(once) == once


def test_format_number_shortest_exact_decimal():
    assert format_number(Fraction(12)) == "12"
    assert format_number(Fraction(3, 2)) == "1.5"
    assert format_number(Fraction(1, 20)) == "0.05"
    assert format_number(Fraction(-1, 4)) == "-0.25"
    assert canonical("10 PRINT 1.50, 007, .5") == "10 PRINT 1.5, 7, 0.5"


def test_write_without_ansi_strips_color_codes():
    written = []
    write_without_ansi(written.append)("\033[30;43m ERROR. \033[0m text")
    assert written == [" ERROR.  text"]


def test_describe_errors():
    exc = BasicParseError("Unexpected `X`.", source="PRINT 1 X", column=9)
    assert describe_error(exc) == "Syntax error at column 9: Unexpected `X`. In `PRINT 1 X`."
    assert describe_error(DivisionByZeroError("Division by zero.", line_number=30)) == \
        "Runtime error in line 30: Division by zero."
    assert describe_error(DivisionByZeroError("Division by zero.")) == "Runtime error: Division by zero."


@pytest.mark.parametrize("source", [
    '50 if y<(x+1) then ? "foo","bar"',
    '60 IF T => 1 THEN IF A >< T THEN GOTO 10',
    '70 let t = t - -1',
    '80 PRINT -A, +3, - -2, -(1 - 2) * +B',
    '90 PRINT 1.50 / .25, 007',
    '100 rem  Keep   THIS text',
    '110 ? "x", T, 3',
    '120 G O S U B T * 10',
    '130 INPUT T, H, E, N',
])
def test_listing_parses_back_to_same_statement(source):
    parsed = parse_line(source)
    assert parse_line(format_line(*parsed)) == parsed
