from __future__ import annotations

import importlib
import logging
import re

from dataclasses import dataclass, field
from importlib.metadata import entry_points
from typing import Callable, Dict, Iterator, List, Optional

from .backends import BUILTIN_ENGINES, CodeGenerator
from .errors import ConfigurationError, DuplicateEngineError


logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = 'bfc.engines'

EngineFactory = Callable[[], CodeGenerator]

_INVALID_EXTENSION_CHARS = re.compile(r'[\x00-\x1f<>:"/\\|?*]')


def _normalize_extension(extension: Optional[str]) -> str:
    ext = extension or ''
    # strip leading/trailing dots and whitespace until stable (". c ." -> "c")
    while ext != ext.strip().strip('.').strip():
        ext = ext.strip().strip('.').strip()
    return ext


@dataclass(frozen=True)
class EngineDescription:
    """Validated metadata of an engine plus the factory that builds it."""

    name: str
    description: str
    version: str
    extension: str
    factory: EngineFactory
    builtin: bool = False

    @property
    def key(self) -> str:
        return self.name.lower()

    @classmethod
    def from_factory(cls, factory: EngineFactory, *, builtin: bool = False) -> EngineDescription:
        engine = factory()
        label = getattr(factory, '__qualname__', repr(factory))

        name = (engine.name or '').strip()
        if not name:
            raise ConfigurationError(f"Engine {label} has no or invalid name")
        description = (engine.description or '').strip()
        if not description:
            raise ConfigurationError(f"Engine {label} has no or invalid description")
        if engine.version is None or not str(engine.version).strip():
            raise ConfigurationError(f"Engine {label} has no or invalid version specification")
        extension = _normalize_extension(engine.extension)
        if not extension or _INVALID_EXTENSION_CHARS.search(extension):
            raise ConfigurationError(f"Engine {label} has invalid default file extension specified")

        return cls(
            name=name,
            description=description,
            version=str(engine.version),
            extension=extension,
            factory=factory,
            builtin=builtin,
        )

    def create(self) -> CodeGenerator:
        return self.factory()


@dataclass
class EngineRegistry:
    """Engines by case-insensitive name.

    Plugins register through a ``register(registry)`` hook, either from a
    module named on the command line or from the ``bfc.engines`` entry point
    group. A plugin that fails to load is skipped and the failure is kept in
    ``diagnostics``.
    """

    engines: Dict[str, EngineDescription] = field(default_factory=dict)
    diagnostics: List[str] = field(default_factory=list)

    def register(self, factory: EngineFactory, *, builtin: bool = False) -> EngineDescription:
        desc = EngineDescription.from_factory(factory, builtin=builtin)
        if desc.key in self.engines:
            raise DuplicateEngineError(f"Duplicate engine name: {desc.name}", argument=desc.name)
        self.engines[desc.key] = desc
        logger.debug("Registered engine %s (%s)", desc.name, desc.version)
        return desc

    def get(self, name: str) -> Optional[EngineDescription]:
        return self.engines.get(name.strip().lower())

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __iter__(self) -> Iterator[EngineDescription]:
        return iter(self.engines.values())

    def __len__(self) -> int:
        return len(self.engines)

    def builtin(self) -> List[EngineDescription]:
        return [e for e in self if e.builtin]

    def external(self) -> List[EngineDescription]:
        return [e for e in self if not e.builtin]

    # ===== Plugins =====

    def _record(self, source: str, exc: Exception) -> None:
        message = f"Failed to load engines from {source}: {type(exc).__name__}: {exc}"
        logger.warning(message)
        self.diagnostics.append(message)

    def _run_hook(self, source: str, hook: Callable[[EngineRegistry], None]) -> bool:
        # keep the registry untouched if the plugin fails halfway through
        staged = EngineRegistry(engines=dict(self.engines))
        try:
            hook(staged)
        except Exception as e:
            self._record(source, e)
            return False
        self.engines = staged.engines
        self.diagnostics.extend(staged.diagnostics)
        return True

    def load_module(self, module_name: str) -> bool:
        try:
            module = importlib.import_module(module_name)
        except Exception as e:
            self._record(module_name, e)
            return False
        hook = getattr(module, 'register', None)
        if not callable(hook):
            self._record(module_name, AttributeError("module has no register(registry) function"))
            return False
        return self._run_hook(module_name, hook)

    def load_entry_points(self, group: str = ENTRY_POINT_GROUP) -> int:
        loaded = 0
        for ep in entry_points(group=group):
            source = f"entry point {ep.name} ({ep.value})"
            try:
                hook = ep.load()
            except Exception as e:
                self._record(source, e)
                continue
            if self._run_hook(source, hook):
                loaded += 1
        return loaded


def default_registry(*, plugins: bool = False) -> EngineRegistry:
    registry = EngineRegistry()
    for factory in BUILTIN_ENGINES:
        registry.register(factory, builtin=True)
    if plugins:
        registry.load_entry_points()
    return registry
