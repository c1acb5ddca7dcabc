"""
Exception types raised by the signal engine.

Degenerate input never raises; these cover caller contract violations only.
"""
from __future__ import annotations


class SignalEngineError(Exception):
    """Base class for all engine errors."""


class IncompleteMetadataError(SignalEngineError):
    """A media item was submitted for classification without its full details."""

    def __init__(self, video_id: str, missing: str = "duration") -> None:
        self.video_id = video_id
        self.missing = missing
        super().__init__(
            f"Media item {video_id or '<unknown>'} is missing {missing}; "
            "fetch full item details before classifying"
        )


class ConfigurationError(SignalEngineError):
    """Invalid configuration value (usually an environment override)."""


__all__ = ["SignalEngineError", "IncompleteMetadataError", "ConfigurationError"]
