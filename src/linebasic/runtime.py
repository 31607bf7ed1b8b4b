## linebasic — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .errors import BasicSyntaxError
from .parser import parse_line
from .storage import Storage
from .streams import InterpreterIO, WAITING
from .interpreter import Interpreter


class Runtime:
    """Assembles input lines from the I/O boundary and feeds them to one `Interpreter`.

    Numbered lines are stored (or deleted when their body is empty), other lines run
    immediately.  While a program is running the interpreter is stepped until it
    stops or needs an INPUT line.
    """

    def __init__(self, io: InterpreterIO, storage: Storage | None = None, verbosity: int = 0):
        self.io = io
        self.interpreter = Interpreter(io, storage=storage, verbosity=verbosity)
        self._line_chars: list[str] = []
        self._prompted = False

    # Entry point ─────────────────────────────────────────────────────────────────────────────
    def interpret_input(self, until_stopped: bool = False) -> bool:
        """Consume input until the host runs dry.

        Returns True when the host reported `WAITING` (call again once more input is
        available), False when input is exhausted or BYE was executed.  With
        `until_stopped`, only INPUT lines are read and control returns as soon as
        the current run is over.
        """
        interp = self.interpreter
        while not interp.exited:
            if interp.is_running:
                interp.step()
                continue
            if until_stopped and not interp.is_waiting:
                return False

            line = self._read_line()
            if line is WAITING:
                return True
            if line is None:
                if interp.is_waiting:
                    interp.input_exhausted()
                return False

            if interp.is_waiting:
                interp.supply_input(line)
            else:
                self.process_line(line)
        return False

    def _read_line(self):
        if not self._prompted:
            self.io.show_prompt(waiting_for_input=self.interpreter.is_waiting)
            self._prompted = True

        while True:
            c = self.io.get_input_char()
            if c is WAITING:
                return WAITING
            if c is None:
                if not self._line_chars:
                    return None
                break
            if c == '\n':
                break
            if c != '\r':
                self._line_chars.append(c)

        line = ''.join(self._line_chars)
        self._line_chars.clear()
        self._prompted = False
        return line

    # Lines ───────────────────────────────────────────────────────────────────────────────────
    def process_line(self, text: str) -> None:
        """Store a numbered line or execute a direct one; syntax errors reject the line only."""
        if not text.strip(): return
        try:
            number, statement = parse_line(text)
        except BasicSyntaxError as exc:
            self.interpreter.report(exc)
            return
        if number is not None:
            self.interpreter.program.store(number, statement)
        else:
            self.interpreter.execute_direct(statement)

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def listing(self) -> str:
        return self.interpreter.program.listing()

    def get_variable(self, letter: str) -> int:
        return self.interpreter.variables[letter.upper()]
