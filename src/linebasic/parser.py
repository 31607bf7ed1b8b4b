## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark
from lark import v_args

from . import types as T
from .lexer import LineLexer
from .errors import BasicParseError


GRAMMAR = r"""start: LINE_NUMBER statement?   -> numbered_line
     | statement                -> direct_line

?statement: print_stmt | let_stmt | input_stmt | if_stmt | goto_stmt | gosub_stmt
          | return_stmt | end_stmt | rem_stmt | list_stmt | run_stmt | clear_stmt
          | save_stmt | load_stmt | clipsave_stmt | clipload_stmt | bye_stmt

print_stmt: _PRINT (print_item (_COMMA print_item)*)?
?print_item: expr
           | STRING                      -> string
let_stmt: _LET LETTER EQUAL expr
input_stmt: _INPUT LETTER (_COMMA LETTER)*
if_stmt: _IF expr relation expr _THEN statement
relation: RELOP | EQUAL
goto_stmt: _GOTO expr
gosub_stmt: _GOSUB expr
return_stmt: _RETURN
end_stmt: _END
rem_stmt: _REM REMARK
list_stmt: _LIST
run_stmt: _RUN
clear_stmt: _CLEAR
save_stmt: _SAVE STRING
load_stmt: _LOAD STRING
clipsave_stmt: _CLIPSAVE
clipload_stmt: _CLIPLOAD
bye_stmt: _BYE

// EXPRESSIONS
?expr: term
     | expr ADD_OP term          -> binary
?term: factor
     | term MUL_OP factor        -> binary
?factor: NUMBER                  -> number
       | LETTER                  -> variable
       | _LPAR expr _RPAR        -> group
       | ADD_OP factor           -> unary

// TOKENS, all produced by lexer.Scanner
%declare LINE_NUMBER NUMBER STRING LETTER REMARK ADD_OP MUL_OP EQUAL RELOP _LPAR _RPAR _COMMA
%declare _PRINT _LET _INPUT _IF _THEN _GOTO _GOSUB _RETURN _END _REM _LIST _RUN _CLEAR
%declare _SAVE _LOAD _CLIPSAVE _CLIPLOAD _BYE
"""


@v_args(inline=True)
class ToStatement(lark.visitors.Transformer_NonRecursive):
    """Turns a lark parse tree of one line into `(line_number, Statement)`."""

    def numbered_line(self, number, statement=None): return int(number.value), statement
    def direct_line(self, statement): return None, statement

    def print_stmt(self, *items): return T.Print(tuple(items))
    def string(self, token): return T.StringLiteral(token.value)
    def let_stmt(self, letter, _equal, expression): return T.Let(letter.value, expression)
    def input_stmt(self, *letters): return T.Input(tuple(t.value for t in letters))
    def if_stmt(self, left, relation, right, then): return T.If(left, relation, right, then)
    def relation(self, token): return token.value
    def goto_stmt(self, target): return T.Goto(target)
    def gosub_stmt(self, target): return T.Gosub(target)
    def return_stmt(self): return T.Return()
    def end_stmt(self): return T.End()
    def rem_stmt(self, remark): return T.Rem(remark.value)
    def list_stmt(self): return T.List()
    def run_stmt(self): return T.Run()
    def clear_stmt(self): return T.Clear()
    def save_stmt(self, filename): return T.Save(filename.value)
    def load_stmt(self, filename): return T.Load(filename.value)
    def clipsave_stmt(self): return T.ClipSave()
    def clipload_stmt(self): return T.ClipLoad()
    def bye_stmt(self): return T.Bye()

    def binary(self, left, operator, right): return T.BinaryOp(operator.value, left, right)
    def unary(self, sign, operand): return T.UnaryOp(sign.value, operand)
    def group(self, inner): return T.Parenthesized(inner)
    def number(self, token): return T.NumberLiteral(token.value)
    def variable(self, token): return T.VariableRef(token.value)


_PARSER = lark.Lark(GRAMMAR, parser="lalr", lexer=LineLexer)

# Deepest accepted chain of operators, parentheses and nested IFs in one line.
MAX_NESTING = 200


def nesting_depth(node) -> int:
    deepest, pending = 0, [(node, 1)]
    while pending:
        node, depth = pending.pop()
        deepest = max(deepest, depth)
        match node:
            case T.UnaryOp(_, inner) | T.Parenthesized(inner):
                pending.append((inner, depth + 1))
            case T.BinaryOp(_, left, right):
                pending += [(left, depth + 1), (right, depth + 1)]
            case T.If(left, _, right, then):
                pending += [(left, depth), (right, depth), (then, depth + 1)]
            case T.Print(items):
                pending += [(item, depth) for item in items]
            case T.Let(_, inner) | T.Goto(inner) | T.Gosub(inner):
                pending.append((inner, depth))
    return deepest


def _describe_token(token) -> str:
    if token is None or token.type == '$END':
        return "end of line"
    return f"`{token.value}`" if str(token.value) else f"`{token.type.strip('_')}`"


def parse_line(text: str) -> tuple[int | None, T.Statement | None]:
    """Parse one input line; a bare line number yields `(n, None)`, meaning delete line n."""
    try:
        tree = _PARSER.parse(text)
    except lark.exceptions.UnexpectedInput as exc:
        token = getattr(exc, 'token', None)
        column = getattr(exc, 'column', None)
        if not isinstance(column, int) or (token is not None and token.type == '$END'):
            column = len(text.rstrip()) + 1
        message = f"Unexpected {_describe_token(token)}."
        if "_PRINT" in (getattr(exc, "expected", None) or ()):
            message = f"Unknown statement at {_describe_token(token)}."
        raise BasicParseError(message, source=text, column=column, token=getattr(token, 'value', ''),
                              line_number=None) from None

    number, statement = ToStatement().transform(tree)
    if number is not None and number <= 0:
        raise BasicParseError("Line number must be positive.", source=text, column=1, token=str(number),
                              line_number=number)
    if statement is not None and nesting_depth(statement) > MAX_NESTING:
        raise BasicParseError("Expression too deeply nested.", source=text, column=1, token='',
                              line_number=number)
    return number, statement


def format_parse_error_context(source: str, column: int | None) -> str:
    caret = ' ' * (max(column or 1, 1) - 1) + '^'
    return f"\033[97m    {source}\033[0m\n    \033[33m{caret}\033[0m\n"
