"""Tests for config/models.py module.

Covers:
- EvictionPolicy values
- LogOutputConfig destination validation
- StorageConfig threshold bounds and path expansion
- NamespaceDefaults / NamespaceOverrides field constraints
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from sessioncache.config.models import (
    EvictionPolicy,
    LoggingConfig,
    LogOutputConfig,
    NamespaceDefaults,
    NamespaceOverrides,
    SessionCacheConfig,
    StorageConfig,
)


class TestEvictionPolicy:
    def test_values_are_lowercase_strings(self) -> None:
        assert EvictionPolicy("fifo") is EvictionPolicy.FIFO
        assert EvictionPolicy.LRU == "lru"

    def test_unknown_policy_rejected(self) -> None:
        with pytest.raises(ValidationError):
            NamespaceDefaults(eviction_policy="random")  # type: ignore[arg-type]


class TestLogOutputConfig:
    """Tests for LogOutputConfig destination handling."""

    @pytest.mark.parametrize("destination", ["stderr", "stdout"])
    def test_stream_destinations(self, destination: str) -> None:
        assert LogOutputConfig(destination=destination).destination == destination

    def test_absolute_file_destination(self, tmp_path: Path) -> None:
        target = tmp_path / "cache.log"
        assert LogOutputConfig(destination=str(target)).destination == str(target)

    def test_relative_file_rejected(self) -> None:
        """Relative paths are ambiguous for a process with no fixed cwd."""
        with pytest.raises(ValidationError, match="absolute"):
            LogOutputConfig(destination="logs/cache.log")

    def test_logging_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert len(config.outputs) == 1
        assert config.outputs[0].format == "console"


class TestStorageConfig:
    @pytest.mark.parametrize("threshold", [0.0, -0.1, 1.01])
    def test_threshold_out_of_range(self, threshold: float) -> None:
        with pytest.raises(ValidationError):
            StorageConfig(sweep_threshold=threshold)

    @pytest.mark.parametrize("threshold", [0.01, 0.8, 1.0])
    def test_threshold_in_range(self, threshold: float) -> None:
        assert StorageConfig(sweep_threshold=threshold).sweep_threshold == threshold

    def test_base_path_expands_user(self) -> None:
        path = StorageConfig(base_dir="~/sessions").base_path
        assert path.is_absolute()
        assert path.name == "sessions"


class TestNamespaceSettings:
    @pytest.mark.parametrize("field", ["ttl_ms", "max_entries"])
    def test_defaults_reject_non_positive(self, field: str) -> None:
        with pytest.raises(ValidationError):
            NamespaceDefaults(**{field: 0})

    def test_overrides_default_to_unset(self) -> None:
        overrides = NamespaceOverrides()
        assert overrides.ttl_ms is None
        assert overrides.max_entries is None
        assert overrides.eviction_policy is None

    def test_overrides_validate_when_set(self) -> None:
        with pytest.raises(ValidationError):
            NamespaceOverrides(max_entries=0)

    def test_root_config_parses_nested_mapping(self) -> None:
        config = SessionCacheConfig.model_validate(
            {"namespaces": {"brainstorm": {"ttl_ms": 10, "eviction_policy": "fifo"}}}
        )
        assert config.namespaces["brainstorm"].ttl_ms == 10
        assert config.namespaces["brainstorm"].eviction_policy is EvictionPolicy.FIFO
