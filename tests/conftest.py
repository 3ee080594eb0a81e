"""Pytest configuration for configcanon tests."""

import pytest

from configcanon.core.loader import ConfigRegistry
from configcanon.engine.canonicalizer import ConfigCanonicalizer
from configcanon.service.pipeline import CanonicalizerService


@pytest.fixture(scope="session")
def registry():
    """Registry built from the packaged file-identity table."""
    return ConfigRegistry()


@pytest.fixture(scope="session")
def canonicalizer(registry):
    """Canonicalizer sharing the packaged table."""
    return ConfigCanonicalizer(registry)


@pytest.fixture
def fresh_service():
    """Rebuild the service singleton around a test that changes settings."""
    CanonicalizerService.reset()
    yield
    CanonicalizerService.reset()


@pytest.fixture
def write_table(tmp_path):
    """Write an alternate file-identity table and return its path."""

    def _write(content: str):
        path = tmp_path / "configs.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
