"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are on-disk format details and the fallbacks used when neither the
built-in namespace table nor user settings provide a value.

For configurable values, see models.py (StorageConfig, NamespaceOverrides, etc.).
"""

# =============================================================================
# Durations
# =============================================================================

HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS

DEFAULT_TTL_MS = DAY_MS
"""TTL applied when no namespace-specific value exists."""

DEFAULT_MAX_ENTRIES = 20
"""Capacity applied when no namespace-specific value exists."""

DEFAULT_SWEEP_THRESHOLD = 0.8
"""Occupancy ratio (of max_entries) at which a save sweeps expired records first."""

# =============================================================================
# Built-in namespaces
# =============================================================================

REVIEW_NAMESPACE = "review-code"
CONVERSATION_NAMESPACE = "ask-gemini"
BRAINSTORM_NAMESPACE = "brainstorm"

# =============================================================================
# On-disk layout
# =============================================================================

DEFAULT_BASE_DIR = "~/.gemini-mcp/sessions"
"""Root directory; each namespace gets its own subdirectory."""

RECORD_SUFFIX = ".json"
"""File suffix of a stored record. Scans only consider files with this suffix."""

TEMP_PREFIX = "."
TEMP_SUFFIX = ".tmp"
"""In-flight writes use dot-prefixed temp files that scans never match."""

FALLBACK_KEY = "session"
"""Storage key used when a session id sanitizes to nothing."""

ENVELOPE_VERSION = 1
"""Version stamped into every encoded cache entry."""
