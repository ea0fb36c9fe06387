"""CLI module - sessioncache command group."""
