# 🎵 musicrecs/domain/music/entities.py
"""
🎵 Доменні DTO клієнта рекомендацій.

🔹 `Song`, `UserProfile`, `Session` — імутабельні структури з толерантним розбором payload бекенду.
🔹 `FeedName` — імена стрічок; `AGGREGATED_FEEDS` — чотири агреговані стрічки у порядку показу.
🔹 `Notification`, `SearchState`, `PresentedView` — стан, який бачить оболонка застосунку.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass, field                                             # 🧱 Структуруємо DTO
from enum import Enum                                                                # 🏷️ Імена стрічок/типи сповіщень
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple                     # 🧰 Типи


def _as_str_tuple(raw: Any) -> Tuple[str, ...]:
    """Нормалізує список/рядок у кортеж непорожніх рядків («A, B» → ("A", "B"))."""
    if raw is None:
        return ()
    if isinstance(raw, str):
        items: Iterable[Any] = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        items = raw
    else:
        items = (raw,)
    return tuple(str(item).strip() for item in items if str(item).strip())


def _payload_id(payload: Mapping[str, Any]) -> str:
    raw = payload.get("_id", payload.get("id"))
    return "" if raw is None else str(raw).strip()


# ================================
# 🏛️ DTO
# ================================
@dataclass(frozen=True, slots=True)
class Song:
    """🎧 Пісня з каталогу або рекомендацій. Ідентичність між стрічками — лише за `id`."""

    id: str
    title: str
    artists: Tuple[str, ...] = ()
    genres: Tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Song":
        """
        Розбирає запис бекенду. Приймає `_id`/`id`, `artist`/`artists` (список або рядок через кому),
        відсутні жанри.

        Raises:
            ValueError: payload не словник або без ідентифікатора.
        """
        if not isinstance(payload, Mapping):
            raise ValueError(f"Song payload must be an object, got {type(payload).__name__}")
        song_id = _payload_id(payload)
        if not song_id:
            raise ValueError("Song payload has no id")
        artists = payload.get("artists", payload.get("artist"))
        return cls(
            id=song_id,
            title=str(payload.get("title") or "").strip(),
            artists=_as_str_tuple(artists),
            genres=_as_str_tuple(payload.get("genres")),
        )

    @property
    def display_artists(self) -> str:
        return ", ".join(self.artists)

    @property
    def primary_genre(self) -> str:
        return self.genres[0] if self.genres else "N/A"


@dataclass(frozen=True, slots=True)
class UserProfile:
    """👤 Автентифікований користувач: id, username, імʼя для показу."""

    id: str
    username: str
    display_name: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "UserProfile":
        if not isinstance(payload, Mapping):
            raise ValueError(f"User payload must be an object, got {type(payload).__name__}")
        username = str(payload.get("username") or "").strip()
        user_id = _payload_id(payload)
        if not user_id or not username:
            raise ValueError("User payload requires id and username")
        display_name = payload.get("displayName", payload.get("name"))
        return cls(id=user_id, username=username, display_name=str(display_name or username))

    def to_payload(self) -> Dict[str, str]:
        """Серіалізація для сталого сховища (ключі як у бекенду)."""
        return {"id": self.id, "username": self.username, "name": self.display_name}


@dataclass(frozen=True, slots=True)
class Session:
    """
    🔐 Пара токен + користувач. Обидва присутні або обидва відсутні.
    """

    token: Optional[str] = None
    user: Optional[UserProfile] = None

    def __post_init__(self) -> None:
        if (self.token is None) != (self.user is None):
            raise ValueError("Session token and user must be both present or both absent")
        if self.token is not None and not self.token.strip():
            raise ValueError("Session token must be a non-empty string")

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None


class FeedName(str, Enum):
    """🗂️ Імена стрічок (значення збігаються з частинами REST-шляхів)."""

    ALL = "all"
    CONTENT_BASED = "content-based"
    USER_BASED = "user-based"
    POPULAR = "popular"
    SEARCH = "search"


AGGREGATED_FEEDS: Tuple[FeedName, ...] = (
    FeedName.CONTENT_BASED,
    FeedName.USER_BASED,
    FeedName.POPULAR,
    FeedName.ALL,
)


class NotificationKind(str, Enum):
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notification:
    """💬 Ефемерне сповіщення; `expires_at` — час event loop, коли воно зникне."""

    text: str
    kind: NotificationKind
    expires_at: float


@dataclass(frozen=True, slots=True)
class SearchState:
    """🔍 Знімок пошуку: термін, застосовані результати та покоління, з якого вони прийшли."""

    term: str = ""
    results: Tuple[Song, ...] = ()
    generation: int = 0


@dataclass(frozen=True, slots=True)
class PresentedSong:
    song: Song
    is_liked: bool


@dataclass(frozen=True, slots=True)
class PresentedView:
    """🖼️ Те, що показує оболонка: одна стрічка (агрегована або пошукова) з прапорцями вподобань."""

    feed: FeedName
    title: str
    songs: Tuple[PresentedSong, ...] = field(default_factory=tuple)

    @property
    def is_search(self) -> bool:
        return self.feed is FeedName.SEARCH


__all__ = [
    "Song",
    "UserProfile",
    "Session",
    "FeedName",
    "AGGREGATED_FEEDS",
    "NotificationKind",
    "Notification",
    "SearchState",
    "PresentedSong",
    "PresentedView",
]
