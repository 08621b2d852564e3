"""Mock provider package exposing deterministic fixtures for tests and demos."""

from .client import MockProvider, load_fixture_catalog

__all__ = ["MockProvider", "load_fixture_catalog"]
