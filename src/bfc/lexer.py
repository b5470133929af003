from __future__ import annotations

import logging

from typing import Iterable, Iterator, Optional

from .tokens import BF_SYMBOLS, ZERO, Token


logger = logging.getLogger(__name__)

CLEAR_LOOP = '[-]'


def filter_bf(source: Iterable[str]) -> Iterator[str]:
    """Strip everything that is not a BF instruction (including whitespace)."""
    for chunk in source:
        # accepts both a character stream and a stream of lines/blocks
        for c in chunk:
            if c in BF_SYMBOLS:
                yield c


def optimize(instructions: Iterable[str]) -> Iterator[str]:
    """Replace every ``[-]`` with the zero pseudo-instruction.

    Same result as ``str.replace("[-]", "!")`` but streaming: at most a
    partial match (two symbols) is held back at any time. Only the decrement
    form is folded, ``[+]`` is left alone.
    """
    pending = ''
    for c in instructions:
        pending += c
        if pending == CLEAR_LOOP:
            yield ZERO
            pending = ''
            continue
        while pending and not CLEAR_LOOP.startswith(pending):
            yield pending[0]
            pending = pending[1:]
    yield from pending


def tokenize(instructions: Iterable[str]) -> Iterator[Token]:
    """Run-length encode an instruction stream.

    Works in a single forward pass and never materializes the input, so an
    unbounded stream produces tokens as it goes.
    """
    current: Optional[Token] = None
    position = 0
    for c in instructions:
        if current is None:
            current = Token(c, position=position)
        elif current.instruction != c:
            yield current
            current = Token(c, position=position)
        else:
            current.add_count()
        position += 1
    if current is not None:
        yield current
    logger.debug("Tokenized %d instructions", position)


def prepare(source: Iterable[str], *, optimize_code: bool = False) -> Iterator[Token]:
    instructions: Iterable[str] = filter_bf(source)
    if optimize_code:
        instructions = optimize(instructions)
    return tokenize(instructions)


def expand(tokens: Iterable[Token]) -> str:
    """Turn tokens back into instruction text."""
    return ''.join(str(t) for t in tokens)
