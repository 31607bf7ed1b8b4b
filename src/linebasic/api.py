## linebasic — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .errors import *
from .lexer import tokenize
from .parser import parse_line
from .program import Program
from .formatting import format_statement, format_line, format_listing
from .streams import InterpreterIO, BufferIO, ConsoleIO, WAITING
from .storage import Storage, FileStorage, MemoryStorage
from .interpreter import Interpreter, State
from .runtime import Runtime
from .runner import execute
