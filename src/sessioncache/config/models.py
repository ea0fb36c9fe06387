"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SESSIONCACHE__SECTION__KEY)
3. Explicit YAML file passed to load_config()
4. Global YAML (~/.config/sessioncache/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    SESSIONCACHE__<SECTION>__<KEY>=<VALUE>

Examples:
    SESSIONCACHE__LOGGING__LEVEL=DEBUG
    SESSIONCACHE__STORAGE__BASE_DIR=/var/lib/sessions
    SESSIONCACHE__DEFAULTS__MAX_ENTRIES=40

Per-namespace overrides are nested mappings and are best set in YAML:

    namespaces:
      review-code:
        eviction_policy: lru
        max_entries: 40
"""

from enum import StrEnum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from sessioncache.config.constants import (
    DEFAULT_BASE_DIR,
    DEFAULT_MAX_ENTRIES,
    DEFAULT_SWEEP_THRESHOLD,
    DEFAULT_TTL_MS,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EvictionPolicy(StrEnum):
    """Which records go first when a namespace is over capacity."""

    FIFO = "fifo"  # oldest created
    LRU = "lru"  # least recently accessed


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SESSIONCACHE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every store operation.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class StorageConfig(BaseModel):
    """Where namespaces live on disk and when saves sweep.

    Env vars:
        SESSIONCACHE__STORAGE__BASE_DIR: Root directory for all namespaces
        SESSIONCACHE__STORAGE__SWEEP_THRESHOLD: Occupancy ratio that triggers a pre-save sweep
    """

    base_dir: str = Field(
        default=DEFAULT_BASE_DIR,
        description="Root directory. Each namespace is a subdirectory named after it.",
    )
    sweep_threshold: float = Field(
        default=DEFAULT_SWEEP_THRESHOLD,
        description="Fraction of max_entries at which a save sweeps expired records first. "
        "TRADEOFF: Lower values scan the directory more often; 1.0 sweeps only when full.",
    )

    @field_validator("sweep_threshold")
    @classmethod
    def validate_sweep_threshold(cls, v: float) -> float:
        if not (0.0 < v <= 1.0):
            raise ValueError(f"sweep_threshold must be in (0, 1], got {v}")
        return v

    @property
    def base_path(self) -> Path:
        return Path(self.base_dir).expanduser()


class NamespaceDefaults(BaseModel):
    """Global fallbacks for namespaces without built-in or configured values.

    Env vars:
        SESSIONCACHE__DEFAULTS__TTL_MS: Time to live in milliseconds
        SESSIONCACHE__DEFAULTS__MAX_ENTRIES: Capacity before eviction
        SESSIONCACHE__DEFAULTS__EVICTION_POLICY: fifo or lru
    """

    ttl_ms: int = Field(default=DEFAULT_TTL_MS, gt=0, description="Time to live (ms).")
    max_entries: int = Field(
        default=DEFAULT_MAX_ENTRIES,
        ge=1,
        description="Records kept per namespace before eviction kicks in.",
    )
    eviction_policy: EvictionPolicy = Field(
        default=EvictionPolicy.LRU,
        description="fifo evicts oldest-created first; lru evicts least-recently-loaded first.",
    )


class NamespaceOverrides(BaseModel):
    """Partial per-namespace settings. Unset fields fall through to lower layers."""

    ttl_ms: int | None = Field(default=None, gt=0)
    max_entries: int | None = Field(default=None, ge=1)
    eviction_policy: EvictionPolicy | None = None


class SessionCacheConfig(BaseModel):
    """Root configuration for the session cache.

    All settings can be configured via:
    1. Environment variables: SESSIONCACHE__SECTION__KEY
    2. YAML config files (explicit or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    defaults: NamespaceDefaults = Field(default_factory=NamespaceDefaults)
    namespaces: dict[str, NamespaceOverrides] = Field(default_factory=dict)
