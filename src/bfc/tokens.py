from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


INC = '+'
DEC = '-'
RIGHT = '>'
LEFT = '<'
OPEN = '['
CLOSE = ']'
OUTPUT = '.'
INPUT = ','

# Introduced by the optimizer in place of "[-]"
ZERO = '!'

BF_SYMBOLS = '+-><[].,'


@dataclass
class Token:
    """A run of one repeated instruction.

    ``position`` is the offset of the first symbol of the run in the
    filtered instruction stream and is only used for diagnostics.
    """

    instruction: str
    count: int = 1
    position: int = 0

    def add_count(self) -> int:
        self.count += 1
        return self.count

    def copy(self) -> Token:
        return Token(self.instruction, self.count, self.position)

    def repeated(self) -> Iterator[Token]:
        """Undo the run-length compression of this token."""
        for i in range(self.count):
            yield Token(self.instruction, 1, self.position + i)

    def __str__(self) -> str:
        return self.instruction * self.count
