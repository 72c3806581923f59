# 🌐 musicrecs/infrastructure/api/__init__.py
"""🌐 HTTP-транспорт (httpx) і типізований фасад бекенду."""

from .api_client import ApiClient, TokenProvider
from .music_api import MusicApi

__all__ = ["ApiClient", "TokenProvider", "MusicApi"]
