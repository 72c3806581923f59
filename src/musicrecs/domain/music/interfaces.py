# 🎵 musicrecs/domain/music/interfaces.py
"""
🎵 Контракти (порти) контролера синхронізації.

🔹 `IMusicApi` — типізований фасад над REST-бекендом (транспорт непрозорий).
🔹 `ISessionStorage` — стале key-value сховище сесії (read/write/remove).
🔹 Реалізації: `MusicApi` + `ApiClient` (httpx), `FileSessionStorage` (aiofiles), `InMemorySessionStorage`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Optional, Protocol, Sequence, Tuple, runtime_checkable

# 🧩 Внутрішні модулі проєкту
from .entities import FeedName, Song, UserProfile


@runtime_checkable
class IMusicApi(Protocol):
    """
    🔌 Операції бекенду, які споживає контролер.
    Будь-яка помилка піднімається як `AppError` (AuthRejectedError / TransportError).
    """

    async def login(self, username: str, password: str) -> Tuple[str, UserProfile]:
        ...

    async def register(self, username: str, password: str, name: str) -> Tuple[str, UserProfile]:
        ...

    async def fetch_feed(self, feed: FeedName) -> Sequence[Song]:
        """Одна з агрегованих стрічок (all/content-based/user-based/popular)."""
        ...

    async def my_likes(self) -> Sequence[Song]:
        """Повні записи пісень, які вподобав поточний користувач."""
        ...

    async def like(self, song_id: str) -> None:
        ...

    async def search(self, term: str) -> Sequence[Song]:
        ...


@runtime_checkable
class ISessionStorage(Protocol):
    """💾 Стале сховище з фіксованими ключами (переживає перезапуск процесу)."""

    async def read(self, key: str) -> Optional[str]:
        ...

    async def write(self, key: str, value: str) -> None:
        ...

    async def remove(self, key: str) -> None:
        ...


__all__ = ["IMusicApi", "ISessionStorage"]
