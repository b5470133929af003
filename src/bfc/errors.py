from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional


class ErrorKind(Enum):
    CONFIGURATION = 'configuration'
    UNSUPPORTED_FEATURE = 'unsupported-feature'
    STRUCTURAL = 'structural'
    RANGE = 'range'
    GENERATION_FAILURE = 'generation-failure'


def _build_context(program: str, position: int, *, context: int = 20) -> str:
    start = max(0, position - context)
    end = min(len(program), position + context + 1)
    excerpt = program[start:end]
    lead = '...' if start > 0 else ''
    tail = '...' if end < len(program) else ''
    caret = ' ' * (len(lead) + position - start) + '^'
    return f"  {lead}{excerpt}{tail}\n  {caret}"


def _hint_for(message: str, *, kind: ErrorKind) -> Optional[str]:
    msg = message.lower()
    if kind is ErrorKind.STRUCTURAL:
        if 'too many closing' in msg:
            return 'A "]" appears before any matching "[". Check the loop above the marked position.'
        if 'too many opening' in msg:
            return 'The marked "[" is never closed. Add the missing "]".'
        return None
    if kind is ErrorKind.RANGE:
        if 'repeated too often' in msg:
            return 'Split the run, e.g. with an empty "[]" between the moves, or move the pointer in smaller steps.'
        return None
    if kind is ErrorKind.UNSUPPORTED_FEATURE:
        if "'!'" in msg:
            return 'Compile without the optimizer to keep the original "[-]" loops.'
        return None
    return None


@dataclass
class BFCError(Exception):
    message: str

    kind: ClassVar[ErrorKind] = ErrorKind.GENERATION_FAILURE

    def __str__(self) -> str:
        return self.message


@dataclass
class ConfigurationError(BFCError):
    argument: Optional[str] = None

    kind: ClassVar[ErrorKind] = ErrorKind.CONFIGURATION


@dataclass
class DuplicateEngineError(ConfigurationError):
    pass


@dataclass
class LocatedError(BFCError):
    """Error pointing at an offset in the filtered instruction stream."""

    position: Optional[int] = None
    context: str = ''


@dataclass
class UnsupportedFeatureError(LocatedError):
    instruction: str = ''

    kind: ClassVar[ErrorKind] = ErrorKind.UNSUPPORTED_FEATURE


@dataclass
class StructuralError(LocatedError):
    kind: ClassVar[ErrorKind] = ErrorKind.STRUCTURAL


@dataclass
class CloseWithoutOpen(StructuralError):
    pass


@dataclass
class OpenWithoutClose(StructuralError):
    pass


@dataclass
class RangeError(LocatedError):
    kind: ClassVar[ErrorKind] = ErrorKind.RANGE


@dataclass
class GenerationFailure(BFCError):
    engine: str = ''


def close_without_open(position: Optional[int]) -> CloseWithoutOpen:
    return CloseWithoutOpen(
        message=_located('Unbalanced brackets (too many closing brackets)', position),
        position=position,
    )


def open_without_close(position: Optional[int]) -> OpenWithoutClose:
    return OpenWithoutClose(
        message=_located('Unbalanced brackets (too many opening brackets)', position),
        position=position,
    )


def repeated_too_often(instruction: str, count: int, limit: int, position: Optional[int]) -> RangeError:
    return RangeError(
        message=_located(f"BF instruction '{instruction}' repeated too often ({count} > {limit})", position),
        position=position,
    )


def unsupported_instruction(instruction: str, position: Optional[int], *, engine: str = '') -> UnsupportedFeatureError:
    prefix = f"{engine}: " if engine else ''
    return UnsupportedFeatureError(
        message=_located(f"{prefix}Unknown BF instruction: '{instruction}'", position),
        position=position,
        instruction=instruction,
    )


def _located(message: str, position: Optional[int]) -> str:
    if position is None:
        return message
    return f"{message} at position {position}"


def attach_context(error: LocatedError, program: str) -> LocatedError:
    """Add a source excerpt and hint to ``error`` in place.

    ``program`` must be the filtered instruction stream that positions
    refer to (after optimization, if the optimizer ran).
    """
    if error.position is None or error.context or not program:
        return error
    position = min(error.position, len(program) - 1)
    ctx = _build_context(program, position)
    hint = _hint_for(error.message, kind=error.kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    error.context = ctx
    error.message = f"{error.message}\n{ctx}{hint_block}"
    return error
