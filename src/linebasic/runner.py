## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# linebasic — A line-numbered BASIC in the classic home-computer style.
#

from .storage import Storage
from .streams import BufferIO
from .runtime import Runtime


def execute(source: str, storage: Storage | None = None, verbosity=0) -> tuple[str, list[str]]:
    """Type `source` into a fresh interpreter and return `(output, errors)`."""
    io = BufferIO(source)
    runtime = Runtime(io, storage=storage, verbosity=verbosity)
    runtime.interpret_input()
    return io.output, io.errors
