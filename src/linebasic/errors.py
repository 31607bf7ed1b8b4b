## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class BasicError(Exception):
    def __init__(self, message: str = "", *, line_number=None):
        """Base class for all BASIC-raised errors."""
        super().__init__(message)
        self.message: str = message
        self.line_number: int | None = line_number


class BasicSyntaxError(BasicError):
    def __init__(self, message, *, source=None, column=None, token=None, line_number=None):
        super().__init__(message, line_number=line_number)
        self.source = source
        self.column = column
        self.token = token

class BasicLexError(BasicSyntaxError):
    pass

class BasicParseError(BasicSyntaxError):
    pass


class BasicRuntimeError(BasicError, RuntimeError):
    """Faults raised while executing a statement; `line_number` is None in direct mode."""
    pass

class UndefinedLineError(BasicRuntimeError, LookupError):
    def __init__(self, message: str = "", *, target=None, line_number=None):
        super().__init__(message, line_number=line_number)
        self.target = target

class ReturnWithoutGosubError(BasicRuntimeError):
    pass

class MissingEndError(BasicRuntimeError):
    pass

class DivisionByZeroError(BasicRuntimeError, ZeroDivisionError):
    pass

class InputParseError(BasicRuntimeError, ValueError):
    pass

class BasicStorageError(BasicRuntimeError):
    pass

class NumberTooLargeError(BasicRuntimeError, OverflowError):
    pass

class GosubDepthError(BasicRuntimeError):
    pass
