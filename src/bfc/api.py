from __future__ import annotations

import logging

from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, ContextManager, Iterable, Iterator, Optional, Tuple, Union

from .backends import CodeGenerator
from .errors import BFCError, ConfigurationError, ErrorKind, GenerationFailure, LocatedError, attach_context
from .lexer import filter_bf, optimize, prepare
from .registry import EngineRegistry, default_registry
from .tokens import Token


logger = logging.getLogger(__name__)

EngineRef = Union[str, CodeGenerator]


@dataclass(frozen=True)
class CompileOptions:
    optimize: bool = False
    engine_arguments: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CompileResult:
    """Generated code, or the error that stopped generation.

    Exactly one of ``code`` and ``error`` is set.
    """

    code: Optional[str] = None
    error: Optional[BFCError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return None if self.error is None else self.error.kind


def prepare_tokens(source: Iterable[str], *, optimize_code: bool = False) -> Iterator[Token]:
    return prepare(source, optimize_code=optimize_code)


def compile_tokens(engine: CodeGenerator, tokens: Iterable[Token]) -> CompileResult:
    """Run ``engine`` over ``tokens`` and wrap the outcome.

    An engine returning nothing without raising is reported as
    ``GenerationFailure`` so it cannot be mistaken for an empty program.
    Anything else a (plugin) engine raises becomes a ``GenerationFailure``
    with the original exception as its cause.
    """
    try:
        code = engine.generate(tokens)
    except BFCError as e:
        logger.debug("%s failed: %s", engine.name, e.kind.value)
        return CompileResult(error=e)
    except Exception as e:
        logger.debug("%s raised %s", engine.name, type(e).__name__, exc_info=True)
        failure = GenerationFailure(f"{engine.name} failed: {type(e).__name__}: {e}", engine=engine.name)
        failure.__cause__ = e
        return CompileResult(error=failure)
    if code is None or code == '':
        return CompileResult(error=GenerationFailure(
            f"{engine.name} did not output any code (returned data is {'null' if code is None else 'empty'})",
            engine=engine.name,
        ))
    return CompileResult(code=code)


def resolve_engine(engine: EngineRef, *, registry: Optional[EngineRegistry] = None) -> CodeGenerator:
    if isinstance(engine, CodeGenerator):
        return engine
    registry = default_registry() if registry is None else registry
    desc = registry.get(engine)
    if desc is None:
        raise ConfigurationError(f"No engine named '{engine}' found", argument=engine)
    return desc.create()


def configure_engine(engine: CodeGenerator, arguments: Tuple[str, ...]) -> None:
    # engines are only configured when the user gave arguments
    if arguments:
        engine.configure(list(arguments))


def _compile_source(
    open_source: Callable[[], ContextManager[Iterable[str]]],
    engine: EngineRef,
    options: Optional[CompileOptions],
    registry: Optional[EngineRegistry],
) -> CompileResult:
    # open_source is called again only to render an error excerpt
    options = CompileOptions() if options is None else options
    try:
        backend = resolve_engine(engine, registry=registry)
        configure_engine(backend, options.engine_arguments)
    except ConfigurationError as e:
        return CompileResult(error=e)

    with open_source() as source:
        result = compile_tokens(backend, prepare_tokens(source, optimize_code=options.optimize))
    if isinstance(result.error, LocatedError):
        with open_source() as source:
            program: Iterable[str] = filter_bf(source)
            if options.optimize:
                program = optimize(program)
            attach_context(result.error, ''.join(program))
    return result


def compile_string(
    source: str,
    engine: EngineRef,
    *,
    options: Optional[CompileOptions] = None,
    registry: Optional[EngineRegistry] = None,
) -> CompileResult:
    return _compile_source(lambda: nullcontext(source), engine, options, registry)


def compile_file(
    path: str | Path,
    engine: EngineRef,
    *,
    options: Optional[CompileOptions] = None,
    registry: Optional[EngineRegistry] = None,
    encoding: str = "utf-8",
) -> CompileResult:
    """Compile a file without reading it into memory as a whole.

    The file is iterated line by line; ``OSError`` from opening it
    propagates to the caller.
    """
    p = Path(path)
    return _compile_source(lambda: p.open('r', encoding=encoding), engine, options, registry)
