"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from ignite.core.services.secret_gen import SecretGenerator


class FixedSecrets(SecretGenerator):
    """Deterministic secrets: ``token_bytes(n)`` is always bytes 0..n-1."""

    def token_bytes(self, byte_len: int) -> bytes:
        if byte_len <= 0:
            raise ValueError(f"byte_len must be positive, got {byte_len}")
        return bytes(range(byte_len))


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory: pytest.TempPathFactory, monkeypatch) -> Path:
    """Point HOME and IGNITE_HOME at temp dirs so no test touches the real ones."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("IGNITE_HOME", str(home / ".ignite"))
    monkeypatch.delenv("IGNITE_LOG_FILE", raising=False)
    monkeypatch.delenv("IGNITE_LOG_LEVEL", raising=False)
    return home


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging() replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def secrets() -> FixedSecrets:
    return FixedSecrets()


@pytest.fixture
def marker_root(tmp_path: Path) -> Path:
    """Return a temporary directory for step markers."""
    root = tmp_path / "markers"
    root.mkdir()
    return root
