from .errors import (
    RlgError,
    ConfigError,
    InvalidActorError,
    SaveError,
    SaveFormatError,
    InvalidMarkerError,
    UnsupportedVersionError,
    TruncatedSaveError,
)
from .heap import MinHeap

__all__ = [
    "RlgError",
    "ConfigError",
    "InvalidActorError",
    "SaveError",
    "SaveFormatError",
    "InvalidMarkerError",
    "UnsupportedVersionError",
    "TruncatedSaveError",
    "MinHeap",
]
