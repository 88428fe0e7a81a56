"""Configuration management."""

import logging
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

_config: Dict[str, Any] = {}
_base_path: Optional[Path] = None
_loaded = False


def load_config(config_path: str = None) -> Dict[str, Any]:
    """Load configuration from YAML file, falling back to built-in defaults."""
    global _config, _base_path, _loaded

    if config_path is None:
        # Try to find config in common locations
        possible_paths = [
            Path("config/globalesm.yaml"),
            Path("globalesm.yaml"),
            Path.home() / ".config" / "globalesm" / "config.yaml",
        ]
        for path in possible_paths:
            if path.exists():
                config_path = str(path)
                break
        else:
            logger.debug("No globalesm config file found, using defaults")
            _config = {}
            _base_path = Path.cwd()
            _loaded = True
            return _config

    config_path = Path(config_path)
    if config_path.parent.name == "config":
        _base_path = config_path.parent.parent  # Project root
    else:
        _base_path = config_path.parent

    with open(config_path) as f:
        _config = yaml.safe_load(f) or {}

    # Resolve relative paths
    _resolve_paths()

    _loaded = True
    logger.info(f"Loaded configuration from {config_path}")
    return _config


def _resolve_paths():
    """Resolve relative paths in config to absolute paths."""
    global _config

    bundle = _config.get("bundle")
    if isinstance(bundle, dict) and bundle.get("manifest"):
        path = Path(bundle["manifest"])
        if not path.is_absolute():
            bundle["manifest"] = str(_base_path / path)

    log_config = _config.get("logging")
    if isinstance(log_config, dict) and log_config.get("file"):
        path = Path(log_config["file"])
        if not path.is_absolute():
            log_config["file"] = str(_base_path / path)


def reset_config():
    """Forget the loaded configuration so the next access reloads it."""
    global _config, _base_path, _loaded
    _config = {}
    _base_path = None
    _loaded = False


def get_config() -> Dict[str, Any]:
    """Get the loaded configuration."""
    if not _loaded:
        load_config()
    return _config


def get(key: str, default: Any = None) -> Any:
    """Get a config value by dot-notation key (e.g., 'registry.handle_name')."""
    if not _loaded:
        load_config()

    keys = key.split(".")
    value = _config
    for k in keys:
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value
