from .mapping import ESC, KeyMap
from .providers import KeyboardInput, ScriptedInput

__all__ = ["ESC", "KeyMap", "KeyboardInput", "ScriptedInput"]
