"""Global ESM: ES module semantics in one shared Python execution context."""

__version__ = "0.2.0"
