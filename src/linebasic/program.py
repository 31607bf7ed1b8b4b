## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import bisect
from typing import Iterator

from .types import Statement
from .formatting import format_listing


class Program:
    """Stored program: statements keyed by line number, always iterated in ascending order."""

    def __init__(self):
        self._lines: dict[int, Statement] = {}
        self._numbers: list[int] = []

    def store(self, number: int, statement: Statement | None) -> None:
        """Insert or replace line `number`; an empty body (None) deletes it."""
        if statement is None:
            return self.delete(number)
        if number not in self._lines:
            bisect.insort(self._numbers, number)
        self._lines[number] = statement

    def delete(self, number: int) -> None:
        if self._lines.pop(number, None) is not None:
            self._numbers.pop(bisect.bisect_left(self._numbers, number))

    def clear(self) -> None:
        self._lines.clear()
        self._numbers.clear()

    def first_line(self) -> int | None:
        return self._numbers[0] if self._numbers else None

    def next_line(self, after: int) -> int | None:
        index = bisect.bisect_right(self._numbers, after)
        return self._numbers[index] if index < len(self._numbers) else None

    def __getitem__(self, number: int) -> Statement:
        return self._lines[number]

    def __contains__(self, number) -> bool:
        return number in self._lines

    def __len__(self) -> int:
        return len(self._numbers)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._numbers))

    def items(self) -> Iterator[tuple[int, Statement]]:
        for number in list(self._numbers):
            yield number, self._lines[number]

    def listing(self) -> str:
        return format_listing(self.items())
