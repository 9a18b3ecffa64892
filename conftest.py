"""
Repository-level pytest configuration.

Why this exists:
  - Provide safe defaults for local runs (no secrets embedded)
  - Route framework logging through the configured Loguru sinks
  - Keep behavior explicit and discoverable

Important:
  Values below are placeholders. Environment variables already set by the
  user or CI always win.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from pageweave.config import init_logger


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _local_env_defaults() -> Generator[None, None, None]:
    """
    Set local defaults if not already provided by the user/CI, then
    initialize the logger once for the session.
    """
    defaults = {
        "UI_BASE_URL": "http://localhost:3000",
        "PAGEWEAVE_E2E": "0",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    init_logger()
    yield
