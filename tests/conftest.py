"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides a controllable clock plus a store factory for storage tests.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local sessioncache package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from sessioncache.config.models import EvictionPolicy  # noqa: E402
from sessioncache.store.models import NamespaceConfig  # noqa: E402
from sessioncache.store.namespace import NamespaceStore  # noqa: E402

START_MS = 1_700_000_000_000


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, start: int = START_MS) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


StoreFactory = Callable[..., NamespaceStore[Any]]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_store(tmp_path: Path, clock: FakeClock) -> StoreFactory:
    """Build a store under tmp_path with explicit settings."""

    def factory(
        namespace: str = "test-tool",
        *,
        ttl_ms: int = 60_000,
        max_entries: int = 5,
        policy: EvictionPolicy = EvictionPolicy.LRU,
        payload_type: Any = Any,
        sweep_threshold: float = 0.8,
    ) -> NamespaceStore[Any]:
        config = NamespaceConfig(
            namespace=namespace,
            ttl_ms=ttl_ms,
            max_entries=max_entries,
            eviction_policy=policy,
        )
        return NamespaceStore(
            config,
            tmp_path / "sessions",
            payload_type=payload_type,
            clock=clock,
            sweep_threshold=sweep_threshold,
        )

    return factory
