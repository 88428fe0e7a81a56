"""Core registry functionality."""

from .module_registry import ModuleRecord, ModuleRegistry, materialize, registry
from .install import install, uninstall
from .bundle_loader import BundleLoader
from .exceptions import (
    RegistryError,
    ModuleNotFoundError,
    ModuleNotInitializedError,
    InvalidExportsError,
    BundleManifestError,
)

__all__ = [
    "ModuleRecord",
    "ModuleRegistry",
    "materialize",
    "registry",
    "install",
    "uninstall",
    "BundleLoader",
    "RegistryError",
    "ModuleNotFoundError",
    "ModuleNotInitializedError",
    "InvalidExportsError",
    "BundleManifestError",
]
