from .codec import MARKER, VERSION, MonsterRecord, SavedState, decode, encode, encode_state
from .paths import ensure_save_dir, load_from_path, resolve_save_path, save_to_path

__all__ = [
    "MARKER",
    "VERSION",
    "MonsterRecord",
    "SavedState",
    "decode",
    "encode",
    "encode_state",
    "ensure_save_dir",
    "load_from_path",
    "resolve_save_path",
    "save_to_path",
]
