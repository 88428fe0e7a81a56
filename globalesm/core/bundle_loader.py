"""Bundle loader for running compiled modules in one shared context."""

import importlib.util
import logging
import yaml
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, List, Optional

from .exceptions import BundleManifestError
from .install import install
from .module_registry import ModuleRegistry, registry as default_registry

logger = logging.getLogger(__name__)


class BundleLoader:
    """Loads compiler-emitted modules listed in a bundle manifest."""

    def __init__(self, manifest_path: str = "bundle.yaml", registry: Optional[ModuleRegistry] = None):
        """
        Initialize the bundle loader.

        Args:
            manifest_path: Path to the bundle manifest file
            registry: Registry the modules export into (defaults to the global instance)
        """
        self.manifest_path = Path(manifest_path)
        self.registry = registry or default_registry
        self.manifest: Dict[str, Any] = {"modules": []}
        self._paths: Dict[str, Path] = {}

        # Shared scope every module's globals are seeded from
        self.context: Dict[str, Any] = {}
        install(self.context, registry=self.registry)

    def load_manifest(self) -> Dict[str, Any]:
        """
        Load the bundle manifest from YAML file.

        The manifest lists modules in evaluation order::

            modules:
              - id: "@app/core"
                path: app/core.py

        Raises:
            BundleManifestError: If an entry is missing its id or path
        """
        if not self.manifest_path.exists():
            logger.warning(f"Bundle manifest not found: {self.manifest_path}, nothing to load")
            self.manifest = {"modules": []}
            self._paths = {}
            return self.manifest

        with open(self.manifest_path, 'r') as f:
            manifest = yaml.safe_load(f) or {}

        entries = manifest.get("modules") or []
        if not isinstance(entries, list):
            raise BundleManifestError(f"{self.manifest_path}: 'modules' must be a list")

        base_dir = self.manifest_path.parent
        paths = {}
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict) or not entry.get("id") or not entry.get("path"):
                raise BundleManifestError(
                    f"{self.manifest_path}: module entry {index} needs both 'id' and 'path'"
                )
            path = Path(entry["path"])
            if not path.is_absolute():
                path = base_dir / path
            paths[str(entry["id"])] = path

        self.manifest = manifest
        self._paths = paths
        logger.info(f"Loaded bundle manifest from {self.manifest_path} ({len(paths)} modules)")
        return self.manifest

    def get_module_ids(self) -> List[str]:
        """Get manifest module ids in evaluation order."""
        return list(self._paths)

    def load_module(self, module_id: str, path: Path) -> ModuleType:
        """
        Execute a single compiled module.

        Args:
            module_id: Module identifier, exposed to the code as ``__name__``
            path: Compiled module source file (``.py``)

        Returns:
            The evaluated module object, which is not added to ``sys.modules``

        Raises:
            BundleManifestError: If the path is not a loadable Python source file
        """
        path = Path(path)
        spec = importlib.util.spec_from_file_location(module_id, str(path))
        if spec is None or spec.loader is None:
            raise BundleManifestError(f"Module {module_id}: cannot load {path} as Python source")

        module = importlib.util.module_from_spec(spec)
        module.__dict__.update(self.context)

        try:
            spec.loader.exec_module(module)
        except Exception as e:
            logger.error(f"Failed to load module {module_id} from {path}: {e}")
            raise

        logger.debug(f"Loaded module: {module_id}")
        return module

    def load_all_modules(self) -> int:
        """
        Load all manifest modules in manifest order.

        Returns:
            Number of modules loaded
        """
        self.load_manifest()

        loaded = 0
        for module_id, path in self._paths.items():
            self.load_module(module_id, path)
            loaded += 1

        logger.info(f"Bundle loading complete: {loaded} loaded")
        return loaded

    def reload_module(self, module_id: str):
        """
        Reset a module and evaluate it again (useful for development).

        Importers holding the previous record keep seeing the previous exports.

        Raises:
            BundleManifestError: If the manifest does not list the module
        """
        if not self._paths:
            self.load_manifest()

        path = self._paths.get(module_id)
        if path is None:
            raise BundleManifestError(f"Module {module_id} is not listed in {self.manifest_path}")

        self.registry.reset(module_id)
        self.load_module(module_id, path)
        logger.info(f"Reloaded module: {module_id}")

    def get_bundle_status(self) -> Dict[str, Any]:
        """
        Get status of the bundle.

        Returns:
            Dict with bundle status information
        """
        return {
            "total_modules": len(self._paths),
            "loaded_modules": sum(1 for m in self._paths if self.registry.is_initialized(m)),
            "modules": self.registry.get_module_info(),
        }
