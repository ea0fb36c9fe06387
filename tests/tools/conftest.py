"""Fixtures for tool session manager tests."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from sessioncache.tools.context import SessionContext

if TYPE_CHECKING:
    from conftest import FakeClock


@pytest.fixture
def session_context(tmp_path: Path, clock: FakeClock) -> SessionContext:
    """Managers for all three tools with built-in namespace settings."""
    return SessionContext.create(base_dir=tmp_path / "sessions", clock=clock)
