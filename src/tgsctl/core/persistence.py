"""
Typed persistence registry

Each persisted value type is bound to exactly one file name under the
application base path. Types declare the file name with @data_location or
are registered explicitly with PersistenceManager.register().

    @data_location("prefs.json")
    class Preferences(BaseModel):
        server_url: Optional[str] = None

    manager = PersistenceManager(ApplicationInfo())
    prefs = manager.read(Preferences)
    manager.write(prefs)
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from .app_info import ApplicationInfo
from .errors import ConfigurationError, DuplicateBindingError, SerializationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DATA_LOCATION_ATTR = "__data_location__"


def data_location(name: str) -> Callable[[Type[T]], Type[T]]:
    """Bind a class to the file it is persisted in"""

    def decorator(cls: Type[T]) -> Type[T]:
        setattr(cls, DATA_LOCATION_ATTR, name)
        return cls

    return decorator


class PersistenceManager:
    """
    Reads and writes bound types as JSON files under the base path

    File paths are resolved once per type and cached for the lifetime of
    the manager. The cache is never invalidated. Nothing here is locked:
    concurrent writers of the same type race and the last one wins.
    """

    def __init__(
        self,
        info: ApplicationInfo,
        bindings: Optional[Dict[type, str]] = None,
    ):
        self.info = info
        self._registered: Dict[type, str] = {}
        self._factories: Dict[type, Callable[[], Any]] = {}
        self._type_to_path: Dict[type, Path] = {}
        self._adapters: Dict[type, TypeAdapter] = {}

        for value_type, file_name in (bindings or {}).items():
            self.register(value_type, file_name)

    # ===== Registration =====

    def register(
        self,
        value_type: type,
        file_name: str,
        factory: Optional[Callable[[], Any]] = None,
    ) -> None:
        """
        Explicitly bind a type to a file name

        Duplicates are checked here against every other explicit binding,
        so a bad table fails at startup instead of at first use.

        Args:
            value_type: Type to persist
            file_name: File name relative to the base path
            factory: Builds the value returned when no file exists yet
        """
        if not file_name:
            raise ConfigurationError(f"Empty file name for {value_type.__qualname__}")

        current = self._registered.get(value_type)
        if current is not None and current != file_name:
            raise ConfigurationError(
                f"{value_type.__qualname__} is already bound to '{current}'"
            )

        for other_type, other_name in self._registered.items():
            if other_name == file_name and other_type is not value_type:
                raise DuplicateBindingError(file_name, value_type, other_type)

        # Resolved paths are never replaced
        resolved = self._type_to_path.get(value_type)
        if resolved is not None and resolved != self.info.base_path / file_name:
            raise ConfigurationError(
                f"{value_type.__qualname__} is already resolved to '{resolved}'"
            )

        self._registered[value_type] = file_name
        if factory is not None:
            self._factories[value_type] = factory

    # ===== Path resolution =====

    def resolve_path(self, value_type: type) -> Path:
        """Get the file path for a type, resolving it on first use"""
        path = self._type_to_path.get(value_type)
        if path is not None:
            return path

        file_name = self._declared_file_name(value_type)
        if not file_name:
            raise ConfigurationError(
                f"{value_type.__qualname__} does not have a file descriptor"
            )

        path = self.info.base_path / file_name
        for other_type, other_path in self._type_to_path.items():
            if other_path == path:
                raise DuplicateBindingError(file_name, value_type, other_type)

        self._type_to_path[value_type] = path
        logger.debug(f"Resolved {value_type.__qualname__} -> {path}")
        return path

    def _declared_file_name(self, value_type: type) -> Optional[str]:
        if value_type in self._registered:
            return self._registered[value_type]
        # Only the class's own declaration counts, not a parent's
        return vars(value_type).get(DATA_LOCATION_ATTR)

    # ===== Read / write =====

    def read(self, value_type: Type[T]) -> T:
        """
        Read the stored value of a type

        Returns a default value when nothing has been written yet. Content
        that fails to parse raises SerializationError; it is never replaced
        by a default.
        """
        path = self.resolve_path(value_type)

        if not path.exists():
            logger.debug(f"No file for {value_type.__qualname__}, using defaults")
            return self._default(value_type)

        try:
            content = path.read_text(encoding="utf-8")
            return self._adapter(value_type).validate_json(content)
        except (UnicodeDecodeError, ValidationError) as e:
            raise SerializationError(f"Could not read {path}: {e}", path=path) from e

    def write(self, value: Any, value_type: Optional[type] = None) -> None:
        """Replace the stored value of a type"""
        value_type = value_type or type(value)
        path = self.resolve_path(value_type)

        serialized = self._adapter(value_type).dump_json(value, indent=2)
        path.write_text(serialized.decode("utf-8"), encoding="utf-8")
        logger.debug(f"Wrote {value_type.__qualname__} to {path}")

    async def read_async(self, value_type: Type[T]) -> T:
        """read() without blocking the event loop"""
        return await asyncio.to_thread(self.read, value_type)

    async def write_async(self, value: Any, value_type: Optional[type] = None) -> None:
        """write() without blocking the event loop"""
        await asyncio.to_thread(self.write, value, value_type)

    # ===== Helpers =====

    def _default(self, value_type: Type[T]) -> T:
        factory = self._factories.get(value_type)
        if factory is not None:
            return factory()
        try:
            return value_type()
        except (TypeError, ValidationError) as e:
            raise ConfigurationError(
                f"Cannot build a default {value_type.__qualname__}: {e}"
            ) from e

    def _adapter(self, value_type: type) -> TypeAdapter:
        adapter = self._adapters.get(value_type)
        if adapter is None:
            adapter = TypeAdapter(value_type)
            self._adapters[value_type] = adapter
        return adapter
