# ❤️ musicrecs/infrastructure/likes/__init__.py
from .like_tracker import LikeTracker

__all__ = ["LikeTracker"]
