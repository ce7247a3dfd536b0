"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import os
import sys
from pathlib import Path
import pytest

# Ensure src/ is on the import path (for local imports without installing as package)
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the root directory of the project."""
    return Path(__file__).resolve().parent.parent


@pytest.fixture(scope="session")
def config_path(project_root: Path) -> Path:
    """Shipped defaults at config/default.yaml."""
    return project_root / "config" / "default.yaml"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Ensure tests run with a clean environment (no leftover vars or cached config)."""
    from message_bag.config import reload_config

    for var in list(os.environ):
        if var == "MESSAGE_BAG_CONFIG" or var.startswith("MESSAGE_BAG__"):
            monkeypatch.delenv(var, raising=False)
    reload_config()
    yield
    reload_config()


@pytest.fixture
def form_errors():
    """A bag shaped like the output of a typical form validation pass."""
    from message_bag import MessageBag

    return MessageBag(
        {
            "email": ["required", "invalid"],
            "items.0.name": ["name required"],
            "items.1.name": ["name too long"],
        }
    )
