# 🔍 musicrecs/infrastructure/search/__init__.py
from .search_controller import SearchController

__all__ = ["SearchController"]
