"""Custom exception hierarchy."""

from __future__ import annotations


class GhostfetchError(Exception):
    """Base exception for the ghostfetch package."""


class ConfigError(GhostfetchError):
    """Raised when the user configuration file is invalid."""


class AsciiArtError(GhostfetchError):
    """Raised when a custom ASCII art file cannot be used."""


class ProbeError(GhostfetchError):
    """Raised when a probe primitive cannot produce a reading."""
