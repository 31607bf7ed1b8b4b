## linebasic — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from string import ascii_uppercase
from fractions import Fraction
from dataclasses import dataclass


LETTERS = tuple(ascii_uppercase)

# Canonical spellings; `><`, `=<` and `=>` are folded into these by the lexer.
RELATIONS = ('=', '<>', '<', '<=', '>', '>=')

num = int | Fraction


## EXPRESSIONS
@dataclass(frozen=True)
class NumberLiteral:
    value: Fraction

@dataclass(frozen=True)
class StringLiteral:
    text: str

@dataclass(frozen=True)
class VariableRef:
    letter: str

@dataclass(frozen=True)
class UnaryOp:
    sign: str                     # '+' or '-'
    operand: "Expression"

@dataclass(frozen=True)
class BinaryOp:
    operator: str                 # '+', '-', '*' or '/'
    left: "Expression"
    right: "Expression"

@dataclass(frozen=True)
class Parenthesized:
    """Keeps source parentheses so that listings reproduce them."""
    inner: "Expression"


Expression = NumberLiteral | StringLiteral | VariableRef | UnaryOp | BinaryOp | Parenthesized


## STATEMENTS
@dataclass(frozen=True)
class Print:
    items: tuple                  # tuple[Expression, ...]

@dataclass(frozen=True)
class Let:
    letter: str
    expression: Expression

@dataclass(frozen=True)
class Input:
    letters: tuple                # tuple[str, ...]

@dataclass(frozen=True)
class If:
    left: Expression
    relation: str                 # one of RELATIONS
    right: Expression
    then: "Statement"

@dataclass(frozen=True)
class Goto:
    target: Expression

@dataclass(frozen=True)
class Gosub:
    target: Expression

@dataclass(frozen=True)
class Return: pass

@dataclass(frozen=True)
class End: pass

@dataclass(frozen=True)
class Rem:
    text: str                     # raw remark, verbatim

@dataclass(frozen=True)
class List: pass

@dataclass(frozen=True)
class Run: pass

@dataclass(frozen=True)
class Clear: pass

@dataclass(frozen=True)
class Save:
    filename: str

@dataclass(frozen=True)
class Load:
    filename: str

@dataclass(frozen=True)
class ClipSave: pass

@dataclass(frozen=True)
class ClipLoad: pass

@dataclass(frozen=True)
class Bye: pass


Statement = (Print | Let | Input | If | Goto | Gosub | Return | End | Rem | List | Run | Clear
             | Save | Load | ClipSave | ClipLoad | Bye)
