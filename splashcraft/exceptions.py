"""Exceptions raised by splashcraft."""

from __future__ import annotations


class SplashcraftError(Exception):
    """Base class for splashcraft errors."""


class RenderingUnavailableError(SplashcraftError, RuntimeError):
    """The imaging backend cannot produce PNG output in this environment."""


class AssetEncodeError(SplashcraftError, RuntimeError):
    """A rendered bitmap could not be serialized."""

    def __init__(self, path: str, reason: str) -> None:
        """Record the asset path that failed to encode."""
        super().__init__(f"Could not encode {path}: {reason}")
        self.path = path


class GenerationCancelledError(SplashcraftError):
    """A run was cancelled before all assets were produced."""


class DuplicateAssetPathError(SplashcraftError, ValueError):
    """Two planned assets would be written to the same archive path."""

    def __init__(self, path: str) -> None:
        """Record the colliding path."""
        super().__init__(f"Duplicate asset path: {path}")
        self.path = path


class InvalidProjectError(SplashcraftError, ValueError):
    """A project document failed validation."""
