"""Persistent per-namespace session cache for tool adapters."""

__version__ = "0.1.0"
