# 🎛️ musicrecs/infrastructure/services/__init__.py
from .music_session_controller import MusicSessionController

__all__ = ["MusicSessionController"]
