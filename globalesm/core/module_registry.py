"""Module registry emulating ES module exports, imports and live bindings."""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, List, Optional

from .exceptions import (
    InvalidExportsError,
    ModuleNotFoundError,
    ModuleNotInitializedError,
)

logger = logging.getLogger(__name__)

# Split export/export_all call shape. The combined
# export(id, exports, re_exports) form is contract version 1.
CONTRACT_VERSION = 2

DEFAULT_EXPORT = "default"

Accessor = Callable[[], Any]


# Slot holding a record's name-to-accessor table
_BINDINGS = "_ModuleRecord__bindings"


class ModuleRecord:
    """
    Live export table of a single module.

    Only exported names are reachable, through either ``record["name"]`` or
    ``record.name``. Exports take precedence over every class attribute,
    dunder names included. Every read calls the binding's accessor, so
    importers always observe the exporting scope's current value. Records are
    read-only from the outside: only the registry installs bindings.
    """

    __slots__ = ("__bindings",)

    def __init__(self, bindings: Optional[Dict[str, Accessor]] = None):
        object.__setattr__(self, _BINDINGS, dict(bindings or {}))

    def __getattribute__(self, name: str) -> Any:
        if name != _BINDINGS:
            bindings = object.__getattribute__(self, _BINDINGS)
            if name in bindings:
                return bindings[name]()
        return object.__getattribute__(self, name)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are neither exported nor class attributes
        raise AttributeError(f"module has no export named {name!r}")

    def __getitem__(self, name: str) -> Any:
        return _table(self)[name]()

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"cannot assign to import {name!r}: bindings are read-only")

    def __delattr__(self, name: str):
        raise AttributeError(f"cannot delete import {name!r}: bindings are read-only")

    def __contains__(self, name: object) -> bool:
        return name in _table(self)

    def __iter__(self) -> Iterator[str]:
        return iter(list(_table(self)))

    def __len__(self) -> int:
        return len(_table(self))

    def __dir__(self) -> List[str]:
        return list(_table(self))

    def __repr__(self):
        return f"<ModuleRecord exports={list(_table(self))}>"


def _table(record: ModuleRecord) -> Dict[str, Accessor]:
    """Return the record's underlying name-to-accessor table."""
    return object.__getattribute__(record, _BINDINGS)


def _forward(table: Dict[str, Accessor], name: str) -> Accessor:
    """Accessor that reads whatever binding `table` currently holds for `name`."""
    return lambda: table[name]()


def materialize(record: ModuleRecord) -> Dict[str, Any]:
    """Read every binding once and return a plain dict snapshot."""
    return {name: record[name] for name in record}


class ModuleRegistry:
    """Registry of module export tables for one execution context."""

    contract_version = CONTRACT_VERSION

    def __init__(self):
        self._modules: Dict[str, ModuleRecord] = {}

    def reset(self, module_id: Optional[str] = None):
        """
        Return modules to the absent state.

        Args:
            module_id: Module to reset. When omitted, every module is cleared.
        """
        if module_id is None:
            count = len(self._modules)
            self._modules = {}
            logger.info(f"Reset all modules ({count} cleared)")
            return

        if self._modules.pop(module_id, None) is not None:
            logger.debug(f"Reset module: {module_id}")

    def init(self, module_id: str):
        """
        Create an empty record for a module, discarding any previous one.

        Args:
            module_id: Module identifier chosen by the compiler
        """
        if module_id in self._modules:
            logger.info(f"Module {module_id} re-initialized, discarding previous exports")
        else:
            logger.debug(f"Initialized module: {module_id}")

        self._modules[module_id] = ModuleRecord()

    def import_(self, module_id: str) -> ModuleRecord:
        """
        Get the live record of an initialized module.

        The record itself is returned, so names exported later are visible too.

        Raises:
            ModuleNotFoundError: If the module is absent
        """
        record = self._modules.get(module_id)
        if record is None:
            raise ModuleNotFoundError(module_id)
        return record

    def import_wildcard(self, module_id: str) -> ModuleRecord:
        """
        Get a namespace record of a module's non-default exports.

        The name set is fixed at call time. Each binding still reads from the
        exporting module's scope.

        Raises:
            ModuleNotFoundError: If the module is absent
        """
        table = _table(self.import_(module_id))
        return ModuleRecord(
            {name: accessor for name, accessor in table.items() if name != DEFAULT_EXPORT}
        )

    def export(self, module_id: str, bindings: Mapping):
        """
        Install live bindings on a module's record.

        Args:
            module_id: Initialized module to export into
            bindings: Mapping of export name to zero-argument accessor, or
                another module's record

        Raises:
            ModuleNotInitializedError: If `init` has not been called for the module
            InvalidExportsError: If `bindings` is not a valid mapping
        """
        self._install(module_id, bindings, skip_default=False)

    def export_all(self, module_id: str, bindings: Mapping):
        """
        Re-export bindings on a module's record, skipping ``default``.

        Used for ``export * from ...``: the call shape is
        ``export_all(current_id, import_(source_id))``.

        Raises:
            ModuleNotInitializedError: If `init` has not been called for the module
            InvalidExportsError: If `bindings` is not a valid mapping
        """
        self._install(module_id, bindings, skip_default=True)

    def _install(self, module_id: str, bindings: Any, skip_default: bool):
        record = self._modules.get(module_id)
        if record is None:
            raise ModuleNotInitializedError(module_id)

        accessors = self._collect_accessors(module_id, bindings)
        table = _table(record)
        installed = 0
        for name, accessor in accessors.items():
            if skip_default and name == DEFAULT_EXPORT:
                continue
            table[name] = accessor
            installed += 1

        logger.debug(f"Module {module_id}: installed {installed} binding(s)")

    @staticmethod
    def _collect_accessors(module_id: str, bindings: Any) -> Dict[str, Accessor]:
        """Validate `bindings` fully before anything is installed."""
        if isinstance(bindings, ModuleRecord):
            source = _table(bindings)
            return {name: _forward(source, name) for name in source}

        if not isinstance(bindings, Mapping):
            raise InvalidExportsError(module_id)

        accessors = {}
        for name, accessor in bindings.items():
            if not isinstance(name, str) or not callable(accessor):
                raise InvalidExportsError(module_id)
            accessors[name] = accessor
        return accessors

    def is_initialized(self, module_id: str) -> bool:
        """Whether a record exists for the module."""
        return module_id in self._modules

    def get_all(self) -> List[str]:
        """Get all initialized module ids."""
        return list(self._modules)

    def get_module_info(self) -> List[Dict[str, Any]]:
        """Get information about all initialized modules."""
        return [
            {
                "id": module_id,
                "exports": list(record),
                "has_default": DEFAULT_EXPORT in record,
            }
            for module_id, record in self._modules.items()
        ]

    def __repr__(self):
        return f"<ModuleRegistry: {len(self._modules)} module(s)>"


# Global module registry instance
registry = ModuleRegistry()
