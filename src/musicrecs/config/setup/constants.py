# 📖 musicrecs/config/setup/constants.py
"""
📖 Типобезпечні константи клієнта musicrecs.

🔹 Централізує REST-шляхи бекенду, ключі сталого сховища сесії та тексти повідомлень.
🔹 Гарантує імутабельність через `dataclass(slots=True, frozen=True)`.
🔹 Заголовки секцій для представлення стрічок (порядок як у головному екрані).
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass, field                               # 🧱 Опис імутабельних структур
from types import MappingProxyType                                     # 🧊 Імутабельні словники
from typing import Final, Mapping                                      # 🧮 Типізація


# ================================
# 🌐 REST-ШЛЯХИ БЕКЕНДУ
# ================================
@dataclass(frozen=True, slots=True)
class _Endpoints:
    """Шляхи відносно `api.base_url`."""

    LOGIN: Final[str] = "/auth/login"                                   # 🔑 {username,password} → {token,user}
    REGISTER: Final[str] = "/auth/register"                             # 🆕 {username,password,name} → {token,user}
    SONGS: Final[str] = "/songs"                                        # 🎵 Увесь каталог
    CONTENT_BASED: Final[str] = "/recs/content-based"                   # 🎯 Контентні рекомендації
    USER_BASED: Final[str] = "/recs/user-based"                         # 👥 Колаборативні рекомендації
    POPULAR: Final[str] = "/recs/popular"                               # 🔥 Популярне
    MY_LIKES: Final[str] = "/me/likes"                                  # ❤️ Вподобані пісні користувача
    INTERACT: Final[str] = "/songs/{song_id}/interact"                  # 👆 Взаємодія з піснею
    SEARCH: Final[str] = "/songs/search"                                # 🔍 Пошук (?q=)


# ================================
# 💾 КЛЮЧІ СТАЛОГО СХОВИЩА
# ================================
@dataclass(frozen=True, slots=True)
class _StorageKeys:
    """Фіксовані імена ключів, під якими живе сесія між перезапусками."""

    TOKEN: Final[str] = "token"
    USER: Final[str] = "user"


# ================================
# 💬 ПОВІДОМЛЕННЯ КОРИСТУВАЧУ
# ================================
@dataclass(frozen=True, slots=True)
class _Messages:
    """Тексти сповіщень (NotificationQueue)."""

    WELCOME: Final[str] = "👋 Ласкаво просимо!"
    ACCOUNT_CREATED: Final[str] = "🎉 Акаунт створено!"
    LOGGED_OUT: Final[str] = "👋 Ви вийшли з акаунта."
    SESSION_EXPIRED: Final[str] = "🔒 Сесія завершилась. Увійдіть знову."
    FEEDS_LOAD_FAILED: Final[str] = "❌ Не вдалося завантажити рекомендації."
    LIKE_FAILED: Final[str] = "❌ Не вдалося поставити вподобайку."
    SEARCH_FAILED: Final[str] = "❌ Помилка під час пошуку."
    CONNECTION_ERROR: Final[str] = "🌐 Помилка зʼєднання із сервером."
    HTTP_TIMEOUT: Final[str] = "⏱️ Сервер не відповів вчасно."
    UNEXPECTED_RESPONSE: Final[str] = "⚠️ Сервер повернув неочікувану відповідь."
    CREDENTIALS_REQUIRED: Final[str] = "⚠️ Вкажіть імʼя користувача та пароль."
    NAME_REQUIRED: Final[str] = "⚠️ Вкажіть імʼя для реєстрації."
    SEARCH_TITLE: Final[str] = "Результати для \"{term}\""


def _feed_titles() -> Mapping[str, str]:
    return MappingProxyType(
        {
            "content-based": "Тому що вам подобається...",
            "user-based": "Користувачі як ви також слухали...",
            "popular": "Найпопулярніше",
            "all": "Усі пісні",
        }
    )


# ================================
# 🏛️ АГРЕГАТ КОНСТАНТ
# ================================
@dataclass(frozen=True, slots=True)
class AppConstants:
    """Єдина точка доступу до констант застосунку."""

    ENDPOINTS: _Endpoints = field(default_factory=_Endpoints)
    STORAGE: _StorageKeys = field(default_factory=_StorageKeys)
    MSG: _Messages = field(default_factory=_Messages)
    FEED_TITLES: Mapping[str, str] = field(default_factory=_feed_titles)


CONST = AppConstants()                                                  # 🧱 Глобальний екземпляр

__all__ = ["AppConstants", "CONST"]
