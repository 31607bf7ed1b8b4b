## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
import enum

from .errors import BasicSyntaxError
from .parser import format_parse_error_context


class Waiting(enum.Enum):
    """Returned by `get_input_char()` when the host has no character available yet."""
    WAITING = 'waiting'

WAITING = Waiting.WAITING


class InterpreterIO:
    """Character-stream boundary between the interpreter and its host.

    `get_input_char()` returns one character, `None` at end of stream, or `WAITING`
    when more input may arrive later.  The runtime returns control to the host on
    `WAITING` and resumes where it left off on the next `interpret_input()` call.
    """

    def get_input_char(self) -> str | None | Waiting:
        raise NotImplementedError

    def put_output_char(self, c: str) -> None:
        raise NotImplementedError

    def show_prompt(self, waiting_for_input: bool = False) -> None:
        pass

    def show_error(self, message: str, error=None) -> None:
        """Report one diagnostic; `error` is the BasicError behind it, when there is one."""
        raise NotImplementedError


class BufferIO(InterpreterIO):
    """Strings in, strings out; used for tests and embedding.

    With `end_of_input=False` the buffer reports `WAITING` once drained, so that
    more text can be supplied later with `feed()`.
    """

    def __init__(self, text: str = "", end_of_input: bool = True):
        self.input_chars: list[str] = list(text)
        self.input_index = 0
        self.output_chars: list[str] = []
        self.errors: list[str] = []
        self.prompts = 0
        self.end_of_input = end_of_input

    def feed(self, text: str, end_of_input: bool | None = None) -> None:
        self.input_chars.extend(text)
        if end_of_input is not None:
            self.end_of_input = end_of_input

    @property
    def output(self) -> str:
        return ''.join(self.output_chars)

    @property
    def first_error(self) -> str:
        return self.errors[0] if self.errors else ""

    def get_input_char(self):
        if self.input_index < len(self.input_chars):
            self.input_index += 1
            return self.input_chars[self.input_index - 1]
        return None if self.end_of_input else WAITING

    def put_output_char(self, c: str) -> None:
        self.output_chars.append(c)

    def show_prompt(self, waiting_for_input: bool = False) -> None:
        self.prompts += 1

    def show_error(self, message: str, error=None) -> None:
        self.errors.append(message)


class ConsoleIO(InterpreterIO):
    """Standard streams; on a terminal lines are read through `readline` with a prompt."""

    def __init__(self, interactive: bool | None = None, plain: bool = False):
        self.interactive = sys.stdin.isatty() if interactive is None else interactive
        self.plain = plain
        self.error_count = 0
        self._pending = ""
        self._prompt = ""

        if self.interactive and sys.platform != "win32": import readline

    def show_prompt(self, waiting_for_input: bool = False) -> None:
        prompt = "? " if waiting_for_input else "> "
        self._prompt = prompt if self.plain else f"\033[36m{prompt}\033[0m"

    def get_input_char(self):
        if not self._pending:
            try:
                if self.interactive:
                    sys.stdout.flush()
                    self._pending = input(self._prompt) + '\n'
                else:
                    self._pending = sys.stdin.readline()
            except (KeyboardInterrupt, EOFError):
                if self.interactive: print("")
                return None
            if not self._pending:
                return None
        c, self._pending = self._pending[0], self._pending[1:]
        return c

    def put_output_char(self, c: str) -> None:
        sys.stdout.write(c)

    def show_error(self, message: str, error=None) -> None:
        self.error_count += 1
        sys.stdout.flush()
        context = ""
        if isinstance(error, BasicSyntaxError) and error.source is not None:
            context = "\n" + format_parse_error_context(error.source, error.column)
        print(f"\033[30;43m ERROR. \033[0m {message}{context}", file=sys.stderr)
