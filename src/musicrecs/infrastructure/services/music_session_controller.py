# 🎛️ musicrecs/infrastructure/services/music_session_controller.py
"""
🎛️ MusicSessionController — фасад сесії та синхронізації даних для оболонки застосунку.

🔹 Без сесії доступні лише вхід і реєстрація; решта дій тихо ігнорується.
🔹 Вхід/реєстрація: валідація → бекенд → `SessionStore.login` → вітання → перше оновлення стрічок.
🔹 Вихід (добровільний чи примусовий) скидає стрічки, вподобайки, пошук і сповіщення.
🔹 `present()` збирає те, що зараз бачить користувач.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import TYPE_CHECKING, Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from musicrecs.config.setup.constants import CONST
from musicrecs.domain.music import (
    FeedName,
    IMusicApi,
    NotificationKind,
    PresentedSong,
    PresentedView,
    Song,
    UserProfile,
)
from musicrecs.errors import CredentialsValidationError
from musicrecs.shared.utils.logger import LOG_NAME

if TYPE_CHECKING:	# pragma: no cover
    from musicrecs.errors import ExceptionHandlerService
    from musicrecs.infrastructure.feeds import FeedAggregator
    from musicrecs.infrastructure.likes import LikeTracker
    from musicrecs.infrastructure.notifications import NotificationQueue
    from musicrecs.infrastructure.search import SearchController
    from musicrecs.infrastructure.session import SessionStore

logger = logging.getLogger(f"{LOG_NAME}.controller")


class MusicSessionController:
    """🎛️ Координує компоненти; кожен із них сам володіє своїм станом."""

    def __init__(
        self,
        api: IMusicApi,
        session: "SessionStore",
        notifications: "NotificationQueue",
        errors: "ExceptionHandlerService",
        feeds: "FeedAggregator",
        likes: "LikeTracker",
        search: "SearchController",
    ) -> None:
        self._api = api
        self.session = session
        self.notifications = notifications
        self.errors = errors
        self.feeds = feeds
        self.likes = likes
        self.search = search

        # 🧹 Скидання при виході або зміні користувача
        session.add_reset_listener(search.reset)
        session.add_reset_listener(likes.reset)
        session.add_reset_listener(feeds.reset)
        session.add_reset_listener(notifications.clear)

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    @property
    def user(self) -> Optional[UserProfile]:
        return self.session.user

    # ================================
    # 🚀 ЖИТТЄВИЙ ЦИКЛ
    # ================================
    async def start(self) -> bool:
        """Відновлює збережену сесію і, якщо вона є, завантажує стрічки."""
        await self.session.restore()
        if not self.session.is_authenticated:
            return False
        await self.feeds.refresh()
        return True

    async def close(self) -> None:
        await self.search.aclose()
        self.notifications.clear()

    # ================================
    # 🔑 АВТЕНТИФІКАЦІЯ
    # ================================
    async def login(self, username: str, password: str) -> bool:
        username, password = (username or "").strip(), password or ""
        if not username or not password:
            await self.errors.handle(
                CredentialsValidationError(CONST.MSG.CREDENTIALS_REQUIRED), session_bound=False
            )
            return False
        try:
            token, user = await self._api.login(username, password)
        except Exception as exc:
            await self.errors.handle(exc, session_bound=False)	# 💬 Текст від сервера
            return False
        return await self._enter(token, user, CONST.MSG.WELCOME)

    async def register(self, username: str, password: str, name: str) -> bool:
        username, password, name = (username or "").strip(), password or "", (name or "").strip()
        if not username or not password:
            error = CredentialsValidationError(CONST.MSG.CREDENTIALS_REQUIRED)
        elif not name:
            error = CredentialsValidationError(CONST.MSG.NAME_REQUIRED)
        else:
            error = None
        if error is not None:
            await self.errors.handle(error, session_bound=False)
            return False
        try:
            token, user = await self._api.register(username, password, name)
        except Exception as exc:
            await self.errors.handle(exc, session_bound=False)
            return False
        return await self._enter(token, user, CONST.MSG.ACCOUNT_CREATED)

    async def logout(self) -> None:
        """Добровільний вихід: повне скидання стану + інформаційне сповіщення."""
        if not self.session.is_authenticated:
            return
        await self.session.logout()
        self.notifications.push(CONST.MSG.LOGGED_OUT, NotificationKind.INFO)

    async def _enter(self, token: str, user: UserProfile, greeting: str) -> bool:
        await self.session.login(token, user)
        self.notifications.push(greeting, NotificationKind.INFO)
        await self.feeds.refresh()
        return True

    # ================================
    # 🎧 ДІЇ АВТЕНТИФІКОВАНОГО КОРИСТУВАЧА
    # ================================
    async def refresh(self) -> bool:
        if not self._require_session("refresh"):
            return False
        return await self.feeds.refresh()

    async def like(self, song_id: str) -> bool:
        if not self._require_session("like"):
            return False
        return await self.likes.like(song_id)

    def set_search_term(self, term: str) -> None:
        if not self._require_session("search"):
            return
        self.search.set_term(term)

    def select_feed(self, feed: FeedName) -> None:
        self.feeds.select(feed)

    # ================================
    # 🖼️ ПРЕДСТАВЛЕННЯ
    # ================================
    def present(self) -> PresentedView:
        """Пошук, якщо є результати; інакше вибрана агрегована стрічка."""
        if self.search.is_active:
            return PresentedView(
                feed=FeedName.SEARCH,
                title=CONST.MSG.SEARCH_TITLE.format(term=self.search.term),
                songs=self._flag(self.search.results),
            )
        selected = self.feeds.selected
        return PresentedView(
            feed=selected,
            title=CONST.FEED_TITLES.get(selected.value, selected.value),
            songs=self._flag(self.feeds.feed(selected)),
        )

    def _flag(self, songs: Tuple[Song, ...]) -> Tuple[PresentedSong, ...]:
        liked = self.likes.like_set
        return tuple(PresentedSong(song=song, is_liked=song.id in liked) for song in songs)

    def _require_session(self, action: str) -> bool:
        if self.session.is_authenticated:
            return True
        logger.debug("🔒 %s ignored: not authenticated", action)
        return False


__all__ = ["MusicSessionController"]
