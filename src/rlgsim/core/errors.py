from __future__ import annotations


class RlgError(Exception):
    """Base class for all engine errors."""


class ConfigError(RlgError):
    """Raised when settings or required environment configuration are invalid."""


class InvalidActorError(RlgError, ValueError):
    """Raised when a character is created with invalid stats (e.g. speed <= 0)."""


class SaveError(RlgError):
    """Base exception for save/load errors."""


class SaveFormatError(SaveError):
    """Raised when a save file cannot be decoded. Loading must abort."""


class InvalidMarkerError(SaveFormatError):
    """Raised when the file marker does not match the expected signature."""


class UnsupportedVersionError(SaveFormatError):
    """Raised when the file version is not the single supported version."""


class TruncatedSaveError(SaveFormatError):
    """Raised when a mandatory section of the file ends early."""
