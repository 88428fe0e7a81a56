"""Exceptions raised by the module registry and bundle loader."""


class RegistryError(Exception):
    """Base exception for a broken registry call sequence."""

    def __init__(self, module_id: str, message: str):
        self.module_id = module_id
        self.message = message
        super().__init__(message)


class ModuleNotFoundError(RegistryError):
    """
    Raised when importing a module that has no record (never initialized, or reset).

    Unrelated to the builtin ``ModuleNotFoundError``: this is not an ``ImportError``.
    """

    def __init__(self, module_id: str):
        super().__init__(module_id, f'[Global ESM] "{module_id}" module not found')


class ModuleNotInitializedError(RegistryError):
    """Raised when exporting into a module before `init` (or after `reset`)."""

    def __init__(self, module_id: str):
        super().__init__(module_id, f'[Global ESM] "{module_id}" module not initialized')


class InvalidExportsError(RegistryError):
    """Raised when the bindings argument is not a name-to-accessor mapping."""

    def __init__(self, module_id: str):
        super().__init__(
            module_id,
            f'[Global ESM] invalid exports argument on "{module_id}" module registration',
        )


class BundleManifestError(Exception):
    """Raised when a bundle manifest is malformed or names an unknown module."""
    pass
