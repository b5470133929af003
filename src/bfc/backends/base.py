from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence

from .._version import __version__
from ..errors import ConfigurationError, close_without_open, open_without_close
from ..lexer import CLEAR_LOOP, tokenize
from ..tokens import ZERO, Token


@dataclass(frozen=True)
class LoopMarker:
    label: str
    position: Optional[int] = None


@dataclass
class BracketStack:
    """LIFO of open loops for one ``generate`` call.

    Brackets arrive run-length encoded; every bracket of a run is pushed or
    popped individually so mismatches are reported at the exact bracket.
    """

    markers: List[LoopMarker] = field(default_factory=list)
    next_label: int = 0

    @property
    def depth(self) -> int:
        return len(self.markers)

    def new_label(self) -> str:
        self.next_label += 1
        return f"l{self.next_label}"

    def push(self, position: Optional[int] = None) -> LoopMarker:
        marker = LoopMarker(self.new_label(), position)
        self.markers.append(marker)
        return marker

    def pop(self, position: Optional[int] = None) -> LoopMarker:
        if not self.markers:
            raise close_without_open(position)
        return self.markers.pop()

    def check_empty(self) -> None:
        if self.markers:
            raise open_without_close(self.markers[-1].position)


class CodeGenerator(ABC):
    """Converts BF tokens into source code of another language.

    Subclasses set the four descriptive attributes and implement
    :meth:`help_text` and :meth:`generate`. Everything that changes while
    generating lives inside ``generate`` so one instance can be reused.
    """

    # Engine name for ``-e``, matched case-insensitively
    name: str = ''
    description: str = ''
    version: Optional[str] = __version__
    # Default output file extension
    extension: str = ''

    def configure(self, arguments: Sequence[str]) -> None:
        """Apply engine arguments. Only called when there is at least one."""
        raise ConfigurationError(
            f"{self.name} code generator does not support custom arguments (got '{arguments[0]}')",
            argument=arguments[0],
        )

    @abstractmethod
    def help_text(self) -> str:
        ...

    @abstractmethod
    def generate(self, tokens: Iterable[Token]) -> str:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} {self.version}>"


def expand_zero(tokens: Iterable[Token]) -> Iterator[Token]:
    """Rewrite zero pseudo-instructions back into ``[-]`` loops.

    For engines without a native "clear cell" statement. The result is
    re-tokenized, so positions refer to the expanded stream.
    """

    def symbols() -> Iterator[str]:
        for token in tokens:
            if token.instruction == ZERO:
                for _ in range(token.count):
                    yield from CLEAR_LOOP
            else:
                yield from str(token)

    return tokenize(symbols())


def indent(line: str, levels: int) -> str:
    return '\t' * levels + line
