## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import sys
import enum
import operator
from fractions import Fraction

from . import types as T
from .types import LETTERS, num
from .errors import (BasicError, BasicRuntimeError, BasicStorageError, BasicSyntaxError, UndefinedLineError,
                     ReturnWithoutGosubError, MissingEndError, DivisionByZeroError, InputParseError,
                     NumberTooLargeError, GosubDepthError)
from .parser import parse_line
from .program import Program
from .storage import Storage
from .streams import InterpreterIO
from .formatting import format_value, format_statement, describe_error


RELATIONS = {
    '=': operator.eq, '<>': operator.ne,
    '<': operator.lt, '<=': operator.le,
    '>': operator.gt, '>=': operator.ge,
}

ARITHMETIC = {
    '+': operator.add, '-': operator.sub,
    '*': operator.mul, '/': operator.truediv,
}

INPUT_FIELD = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)')

MAX_GOSUB_DEPTH = 1000


class State(enum.Enum):
    IDLE = 'idle'            # direct mode, nothing run yet
    RUNNING = 'running'
    WAITING = 'waiting'      # INPUT needs a line from the host
    HALTED = 'halted'        # END, or the run was stopped by CLEAR / LOAD
    FAULTED = 'faulted'


def parse_input_fields(text: str, count: int, line_number: int | None = None) -> list[int]:
    fields = text.split(',')
    if len(fields) != count:
        raise InputParseError(f"INPUT expected {count} value(s), got {len(fields)}.", line_number=line_number)
    values = []
    for field in fields:
        if not INPUT_FIELD.fullmatch(field := field.strip()):
            raise InputParseError(f"INPUT value `{field}` is not a number.", line_number=line_number)
        try:
            values.append(int(Fraction(field)))
        except ValueError:
            raise InputParseError("INPUT value has too many digits.", line_number=line_number) from None
    return values


def render_value(value: num, line_number: int | None = None) -> str:
    try:
        return format_value(value)
    except ValueError:
        raise NumberTooLargeError("Number too large to print.", line_number=line_number) from None


class Interpreter:
    """Executor for one session: variables, stored program, cursor and GOSUB return stack.

    Runs one stored line per `step()`; the only suspension point is INPUT, which puts
    the interpreter in `State.WAITING` until `supply_input()` is called.
    """

    def __init__(self, io: InterpreterIO, storage: Storage | None = None, verbosity: int = 0):
        self.io = io
        self.storage = storage
        self.verbosity = verbosity

        self.program = Program()
        self.variables: dict[str, int] = dict.fromkeys(LETTERS, 0)
        self.cursor: int | None = None
        self.call_stack: list[int | None] = []   # GOSUB call sites; None returns to direct mode
        self.state = State.IDLE
        self.steps = 0
        self.exited = False

        self._pending_input: tuple[T.Input, int | None] | None = None
        self._jumped = False

    @property
    def is_running(self) -> bool:
        return self.state is State.RUNNING

    @property
    def is_waiting(self) -> bool:
        return self.state is State.WAITING

    # Output ──────────────────────────────────────────────────────────────────────────────────
    def write(self, text: str) -> None:
        for c in text:
            self.io.put_output_char(c)

    def report(self, exc: BasicError) -> None:
        self.io.show_error(describe_error(exc), exc)

    def _trace(self, number: int | None, stmt: T.Statement) -> None:
        if self.verbosity == 0: return
        gutter = f"{number:>5}" if number is not None else "    >"
        print(f"\033[90m{gutter} :\033[0m  {format_statement(stmt)}", file=sys.stderr)

    def _trace_variables(self, letters) -> None:
        if self.verbosity < 2: return
        shown = "  ".join(f"{k}={self._trace_value(self.variables[k])}" for k in letters)
        print(f"\033[90m        {shown}\033[0m", file=sys.stderr)

    @staticmethod
    def _trace_value(value: int) -> str:
        try:
            return format_value(value)
        except ValueError:
            return f"<{value.bit_length()}-bit number>"

    # Evaluation ──────────────────────────────────────────────────────────────────────────────
    def evaluate(self, expr: T.Expression, line_number: int | None = None) -> num:
        match expr:
            case T.NumberLiteral(value):
                return value
            case T.VariableRef(letter):
                return self.variables[letter]
            case T.Parenthesized(inner):
                return self.evaluate(inner, line_number)
            case T.UnaryOp(sign, operand):
                value = self.evaluate(operand, line_number)
                return -value if sign == '-' else value
            case T.BinaryOp(op, left, right):
                lhs, rhs = self.evaluate(left, line_number), self.evaluate(right, line_number)
                if op == '/':
                    if rhs == 0:
                        raise DivisionByZeroError("Division by zero.", line_number=line_number)
                    lhs = Fraction(lhs)
                return ARITHMETIC[op](lhs, rhs)
            case T.StringLiteral(text):
                raise BasicRuntimeError(f'String "{text}" used as a number.', line_number=line_number)
        raise NotImplementedError(f"Cannot evaluate {expr!r}.")

    def _line_target(self, expr: T.Expression, line_number: int | None) -> int:
        target = int(self.evaluate(expr, line_number))
        if target not in self.program:
            raise UndefinedLineError(f"Line {render_value(target, line_number)} is not defined.", target=target,
                                     line_number=line_number)
        return target

    # Control transfer ────────────────────────────────────────────────────────────────────────
    def _jump(self, target: int) -> None:
        if self.state is not State.RUNNING:
            self.call_stack.clear()
            self.state = State.RUNNING
        self.cursor, self._jumped = target, True

    def _advance(self, number: int) -> None:
        if (following := self.program.next_line(number)) is None:
            raise MissingEndError("Program ran past its last line without END.", line_number=number)
        self.cursor = following

    def _stop(self, state: State) -> None:
        self.state, self.cursor, self._jumped = state, None, True
        self.call_stack.clear()

    def _fault(self, exc: BasicRuntimeError) -> None:
        self.report(exc)
        self._pending_input = None
        self._stop(State.FAULTED)

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def execute(self, stmt: T.Statement, number: int | None = None) -> None:
        """Execute one statement; `number` is its stored line, or None in direct mode."""
        match stmt:
            case T.Print(items):
                texts = [it.text if isinstance(it, T.StringLiteral)
                         else render_value(self.evaluate(it, number), number) for it in items]
                self.write('\t'.join(texts) + '\n')
            case T.Let(letter, expression):
                self.variables[letter] = int(self.evaluate(expression, number))
                self._trace_variables(letter)
            case T.Input():
                self._pending_input = (stmt, number)
                self.state = State.WAITING
            case T.If(left, relation, right, then):
                if RELATIONS[relation](self.evaluate(left, number), self.evaluate(right, number)):
                    self.execute(then, number)
            case T.Goto(target):
                self._jump(self._line_target(target, number))
            case T.Gosub(target):
                if self.state is State.RUNNING and len(self.call_stack) >= MAX_GOSUB_DEPTH:
                    raise GosubDepthError(f"GOSUB nested more than {MAX_GOSUB_DEPTH} deep.", line_number=number)
                self._jump(self._line_target(target, number))
                self.call_stack.append(number)
            case T.Return():
                if not self.call_stack:
                    raise ReturnWithoutGosubError("RETURN without GOSUB.", line_number=number)
                if (site := self.call_stack.pop()) is None:
                    self._stop(State.HALTED)
                else:
                    self._advance(site)
                    self._jumped = True
            case T.End():
                if self.state is State.RUNNING:
                    self._stop(State.HALTED)
            case T.Rem():
                pass
            case T.List():
                self.write(self.program.listing())
            case T.Run():
                self.run()
            case T.Clear():
                self.clear()
            case T.Save(filename):
                self._require_storage(number).save(filename, self.program.listing())
            case T.Load(filename):
                self.load_listing(self._require_storage(number).load(filename))
            case T.ClipSave():
                self._require_storage(number).clip_save(self.program.listing())
            case T.ClipLoad():
                self.load_listing(self._require_storage(number).clip_load())
            case T.Bye():
                self.exited = True
                self._stop(State.HALTED)
            case _:
                raise NotImplementedError(f"Cannot execute {stmt!r}.")

    def _require_storage(self, number: int | None) -> Storage:
        if self.storage is None:
            raise BasicStorageError("No storage is attached to this interpreter.", line_number=number)
        return self.storage

    def execute_direct(self, stmt: T.Statement) -> None:
        self._trace(None, stmt)
        self._jumped = False
        try:
            self.execute(stmt, None)
        except BasicRuntimeError as exc:
            self._fault(exc)

    def step(self) -> None:
        """Execute the line under the cursor, then advance unless control was transferred."""
        number = self.cursor
        stmt = self.program[number]
        self._trace(number, stmt)
        self.steps += 1
        self._jumped = False
        try:
            self.execute(stmt, number)
            if self.state is State.RUNNING and not self._jumped:
                self._advance(number)
        except BasicRuntimeError as exc:
            self._fault(exc)

    def run(self) -> None:
        if (first := self.program.first_line()) is None:
            return self._stop(State.HALTED)
        self.call_stack.clear()
        self.state, self.cursor, self._jumped = State.RUNNING, first, True

    def clear(self) -> None:
        self.program.clear()
        self.variables = dict.fromkeys(LETTERS, 0)
        if self.state is State.RUNNING:
            self._stop(State.HALTED)

    def load_listing(self, text: str) -> None:
        """Replace the program with the numbered lines of `text`; a running program stops."""
        self.program.clear()
        if self.state is State.RUNNING:
            self._stop(State.HALTED)
        for line in text.splitlines():
            if not line.strip(): continue
            try:
                number, stmt = parse_line(line)
            except BasicSyntaxError as exc:
                self.report(exc)
                continue
            if number is None:
                self.report(BasicSyntaxError("Loaded line has no line number.", source=line, column=1))
                continue
            self.program.store(number, stmt)

    # Input ───────────────────────────────────────────────────────────────────────────────────
    def supply_input(self, text: str) -> None:
        """Complete a pending INPUT with one raw line from the host."""
        stmt, number = self._pending_input
        self._pending_input = None
        try:
            values = parse_input_fields(text, len(stmt.letters), number)
            self.variables.update(zip(stmt.letters, values))
            self._trace_variables(stmt.letters)
            if number is None:
                self.state = State.IDLE
            else:
                self.state = State.RUNNING
                self._advance(number)
        except BasicRuntimeError as exc:
            self._fault(exc)

    def input_exhausted(self) -> None:
        _, number = self._pending_input
        self._fault(InputParseError("Input ended while INPUT was waiting for values.", line_number=number))
