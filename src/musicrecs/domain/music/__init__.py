# 🎵 musicrecs/domain/music/__init__.py
"""
🎵 Пакет `domain.music` публікує DTO, автомат вподобань і порти контролера.

🔹 `Song`, `UserProfile`, `Session`, `Notification`, `SearchState`, `PresentedView` — імутабельні DTO.
🔹 `LikeSet` / `LikeState` — стан вподобань по кожному id.
🔹 `IMusicApi`, `ISessionStorage` — протоколи для слабкого звʼязування з інфраструктурою.
"""

# 🧩 Внутрішні модулі проєкту
from .entities import (
    AGGREGATED_FEEDS,
    FeedName,
    Notification,
    NotificationKind,
    PresentedSong,
    PresentedView,
    SearchState,
    Session,
    Song,
    UserProfile,
)
from .interfaces import IMusicApi, ISessionStorage
from .like_set import LikeSet, LikeState


# ================================
# 📤 ПУБЛІЧНИЙ API ПАКЕТА
# ================================
__all__ = [
    # DTO
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
    # Стан вподобань
    "LikeSet",
    "LikeState",
    # Контракти
    "IMusicApi",
    "ISessionStorage",
]
