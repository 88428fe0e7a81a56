"""Installation of a registry at a well-known handle in a shared namespace."""

import builtins
import logging
from collections.abc import MutableMapping
from typing import Any, Optional

from globalesm import config
from .module_registry import ModuleRegistry, registry as default_registry

logger = logging.getLogger(__name__)

DEFAULT_HANDLE_NAME = "__modules__"
DEFAULT_ALIAS_NAME = "global_"


def _has(namespace: Any, name: str) -> bool:
    if isinstance(namespace, MutableMapping):
        return name in namespace
    return hasattr(namespace, name)


def _get(namespace: Any, name: str) -> Any:
    if isinstance(namespace, MutableMapping):
        return namespace[name]
    return getattr(namespace, name)


def _set(namespace: Any, name: str, value: Any):
    if isinstance(namespace, MutableMapping):
        namespace[name] = value
    else:
        setattr(namespace, name, value)


def install(
    namespace: Any = None,
    registry: Optional[ModuleRegistry] = None,
    handle_name: Optional[str] = None,
    alias_name: Optional[str] = None,
) -> ModuleRegistry:
    """
    Install a registry so that generated call sites can reach it.

    Installation happens at most once per namespace: an existing handle is
    kept and returned, and an existing alias is never overwritten.

    Args:
        namespace: Globals dict, module or object to install into
            (defaults to the ``builtins`` module)
        registry: Registry to install (defaults to the global instance)
        handle_name: Attribute holding the registry (``registry.handle_name``)
        alias_name: Alias pointing at the namespace itself (``registry.global_alias``)

    Returns:
        The registry reachable through the handle
    """
    if namespace is None:
        namespace = builtins
    if registry is None:
        registry = default_registry
    handle_name = handle_name or config.get("registry.handle_name", DEFAULT_HANDLE_NAME)
    alias_name = alias_name or config.get("registry.global_alias", DEFAULT_ALIAS_NAME)

    if _has(namespace, handle_name):
        logger.warning(f"Registry handle {handle_name} already installed, keeping existing one")
        installed = _get(namespace, handle_name)
    else:
        _set(namespace, handle_name, registry)
        installed = registry
        logger.info(f"Installed module registry as {handle_name}")

    if not _has(namespace, alias_name):
        _set(namespace, alias_name, namespace)

    return installed


def uninstall(namespace: Any = None, handle_name: Optional[str] = None):
    """Remove an installed registry handle. The alias is left in place."""
    if namespace is None:
        namespace = builtins
    handle_name = handle_name or config.get("registry.handle_name", DEFAULT_HANDLE_NAME)

    if not _has(namespace, handle_name):
        return

    if isinstance(namespace, MutableMapping):
        del namespace[handle_name]
    else:
        delattr(namespace, handle_name)
    logger.info(f"Uninstalled module registry {handle_name}")
