## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
from fractions import Fraction

from . import types as T
from .errors import BasicError, BasicSyntaxError


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_number(value: T.num) -> str:
    """Render a literal in its shortest exact decimal form, e.g. `1.50` as `1.5`."""
    value = Fraction(value)
    if value.denominator == 1:
        return str(value.numerator)
    # Literals come from decimal text, so the denominator only has factors 2 and 5.
    digits, scaled = 0, value
    while scaled.denominator != 1:
        digits, scaled = digits + 1, scaled * 10
    sign, text = ('-' if scaled < 0 else ''), str(abs(scaled.numerator)).rjust(digits + 1, '0')
    return f"{sign}{text[:-digits]}.{text[-digits:]}"

def format_value(value: T.num) -> str:
    """Printed form of a runtime value: truncated toward zero."""
    return str(int(value))


def format_expression(expr: T.Expression) -> str:
    match expr:
        case T.NumberLiteral(value):
            return format_number(value)
        case T.StringLiteral(text):
            return f'"{text}"'
        case T.VariableRef(letter):
            return letter
        case T.UnaryOp(sign, operand):
            return sign + format_expression(operand)
        case T.BinaryOp(operator, left, right):
            return f"{format_expression(left)} {operator} {format_expression(right)}"
        case T.Parenthesized(inner):
            return f"({format_expression(inner)})"
    raise NotImplementedError(f"Cannot format expression {expr!r}.")


def format_statement(stmt: T.Statement) -> str:
    match stmt:
        case T.Print(items):
            return f"PRINT {', '.join(format_expression(it) for it in items)}" if items else "PRINT"
        case T.Let(letter, expression):
            return f"LET {letter} = {format_expression(expression)}"
        case T.Input(letters):
            return f"INPUT {', '.join(letters)}"
        case T.If(left, relation, right, then):
            return f"IF {format_expression(left)} {relation} {format_expression(right)} THEN {format_statement(then)}"
        case T.Goto(target):
            return f"GOTO {format_expression(target)}"
        case T.Gosub(target):
            return f"GOSUB {format_expression(target)}"
        case T.Rem(text):
            return f"REM{text}"
        case T.Save(filename):
            return f'SAVE "{filename}"'
        case T.Load(filename):
            return f'LOAD "{filename}"'
        case T.Return() | T.End() | T.List() | T.Run() | T.Clear() | T.ClipSave() | T.ClipLoad() | T.Bye():
            return type(stmt).__name__.upper()
    raise NotImplementedError(f"Cannot format statement {stmt!r}.")


def format_line(number: int, stmt: T.Statement) -> str:
    return f"{number} {format_statement(stmt)}"

def format_listing(lines) -> str:
    """Canonical program text: one `<number> <statement>` per line, ascending, newline-terminated."""
    return ''.join(format_line(number, stmt) + '\n' for number, stmt in lines)


def describe_error(exc: BasicError) -> str:
    """One-line diagnostic for any BASIC error, as passed to `show_error()`."""
    if isinstance(exc, BasicSyntaxError):
        where = f" at column {exc.column}" if exc.column else ""
        return f"Syntax error{where}: {exc.message} In `{exc.source}`."
    where = f" in line {exc.line_number}" if exc.line_number is not None else ""
    return f"Runtime error{where}: {exc.message}"
