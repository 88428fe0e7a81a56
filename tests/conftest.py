"""Shared test fixtures for the globalesm test suite."""

import pytest
import textwrap
import types

# Add parent directory to path so we can import globalesm
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from globalesm import config
from globalesm.core.module_registry import ModuleRegistry


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Run every test against built-in config defaults, ignoring local config files."""
    config.reset_config()
    monkeypatch.setattr(config, "_loaded", True)
    yield
    config.reset_config()


@pytest.fixture
def registry():
    """Fresh registry, isolated from the global instance."""
    return ModuleRegistry()


@pytest.fixture
def namespace():
    """Scratch namespace object standing in for a shared global scope."""
    return types.SimpleNamespace()


@pytest.fixture
def write_bundle(tmp_path):
    """Write compiled module sources plus a manifest listing them in order."""

    def _write(modules, manifest_name="bundle.yaml"):
        lines = ["modules:"]
        for module_id, filename, source in modules:
            (tmp_path / filename).write_text(textwrap.dedent(source))
            lines.append(f'  - id: "{module_id}"')
            lines.append(f"    path: {filename}")
        manifest = tmp_path / manifest_name
        manifest.write_text("\n".join(lines) + "\n")
        return manifest

    return _write
