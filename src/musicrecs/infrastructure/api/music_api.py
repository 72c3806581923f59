# 🎵 musicrecs/infrastructure/api/music_api.py
"""
🎵 MusicApi — типізований фасад над REST-бекендом рекомендацій.

🔹 Реалізує `IMusicApi` поверх `ApiClient`.
🔹 Розбирає відповіді у `Song` / `UserProfile`; некоректні записи пісень пропускаються з попередженням.
🔹 Відповідь неочікуваної форми → `TransportError(UNEXPECTED_RESPONSE)`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from types import MappingProxyType
from typing import Any, List, Mapping, Tuple
from urllib.parse import quote

# 🧩 Внутрішні модулі проєкту
from musicrecs.config.setup.constants import CONST
from musicrecs.domain.music import FeedName, IMusicApi, Song, UserProfile
from musicrecs.errors import TransportError
from musicrecs.shared.utils.logger import LOG_NAME
from .api_client import ApiClient

logger = logging.getLogger(f"{LOG_NAME}.api.music")

_FEED_PATHS: Mapping[FeedName, str] = MappingProxyType(
    {
        FeedName.ALL: CONST.ENDPOINTS.SONGS,
        FeedName.CONTENT_BASED: CONST.ENDPOINTS.CONTENT_BASED,
        FeedName.USER_BASED: CONST.ENDPOINTS.USER_BASED,
        FeedName.POPULAR: CONST.ENDPOINTS.POPULAR,
    }
)


def _unexpected(source: str, details: str) -> TransportError:
    return TransportError(CONST.MSG.UNEXPECTED_RESPONSE, url=source, details=details)


class MusicApi(IMusicApi):
    """🎵 Операції бекенду для контролера."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    # ================================
    # 🔑 АВТЕНТИФІКАЦІЯ
    # ================================
    async def login(self, username: str, password: str) -> Tuple[str, UserProfile]:
        payload = await self._client.post(
            CONST.ENDPOINTS.LOGIN, json={"username": username, "password": password}
        )
        return self._parse_auth(CONST.ENDPOINTS.LOGIN, payload)

    async def register(self, username: str, password: str, name: str) -> Tuple[str, UserProfile]:
        payload = await self._client.post(
            CONST.ENDPOINTS.REGISTER,
            json={"username": username, "password": password, "name": name},
        )
        return self._parse_auth(CONST.ENDPOINTS.REGISTER, payload)

    # ================================
    # 📰 СТРІЧКИ ТА ВПОДОБАЙКИ
    # ================================
    async def fetch_feed(self, feed: FeedName) -> List[Song]:
        path = _FEED_PATHS.get(feed)
        if path is None:
            raise ValueError(f"Feed {feed.value!r} is not an aggregated feed")
        return self._parse_songs(path, await self._client.get(path))

    async def my_likes(self) -> List[Song]:
        path = CONST.ENDPOINTS.MY_LIKES
        return self._parse_songs(path, await self._client.get(path))

    async def like(self, song_id: str) -> None:
        await self._client.post(
            CONST.ENDPOINTS.INTERACT.format(song_id=quote(song_id, safe="")), json={"action": "like"}
        )

    async def search(self, term: str) -> List[Song]:
        path = CONST.ENDPOINTS.SEARCH
        return self._parse_songs(path, await self._client.get(path, params={"q": term}))

    # ================================
    # 🧩 РОЗБІР ВІДПОВІДЕЙ
    # ================================
    @staticmethod
    def _parse_auth(source: str, payload: Any) -> Tuple[str, UserProfile]:
        if not isinstance(payload, Mapping):
            raise _unexpected(source, f"auth payload is {type(payload).__name__}")
        token = payload.get("token")
        if not isinstance(token, str) or not token.strip():
            raise _unexpected(source, "auth payload has no token")
        try:
            user = UserProfile.from_payload(payload.get("user"))
        except ValueError as exc:
            raise _unexpected(source, str(exc)) from exc
        logger.info("🔑 Authenticated as %s", user.username)
        return token, user

    @staticmethod
    def _parse_songs(source: str, payload: Any) -> List[Song]:
        if not isinstance(payload, list):
            raise _unexpected(source, f"expected a list of songs, got {type(payload).__name__}")
        songs: List[Song] = []
        for item in payload:
            try:
                songs.append(Song.from_payload(item))
            except ValueError as exc:
                logger.warning("⚠️ Skipping malformed song from %s: %s", source, exc)
        return songs


__all__ = ["MusicApi"]
