# ❤️ musicrecs/infrastructure/likes/like_tracker.py
"""
❤️ LikeTracker — оптимістичні вподобайки з підтвердженням або відкатом.

🔹 `like(id)`: NOT_LIKED → PENDING одразу, до відповіді сервера; повторний виклик нічого не робить.
🔹 Успіх → LIKED і повне оновлення стрічок (вподобайка впливає на рекомендації).
🔹 Збій → відкат рівно цього id і одне error-сповіщення.
🔹 Вподобайки різних id не блокують одна одну.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio
import logging
from typing import TYPE_CHECKING

# 🧩 Внутрішні модулі проєкту
from musicrecs.config.setup.constants import CONST
from musicrecs.domain.music import IMusicApi, LikeSet, LikeState
from musicrecs.shared.metrics import LIKE_ROLLBACKS_TOTAL
from musicrecs.shared.utils.logger import LOG_NAME

if TYPE_CHECKING:	# pragma: no cover
    from musicrecs.errors import ExceptionHandlerService
    from musicrecs.infrastructure.feeds import FeedAggregator

logger = logging.getLogger(f"{LOG_NAME}.likes")


class LikeTracker:
    """❤️ Керує переходами `LikeSet` навколо запиту взаємодії."""

    def __init__(
        self,
        api: IMusicApi,
        like_set: LikeSet,
        feeds: "FeedAggregator",
        errors: "ExceptionHandlerService",
    ) -> None:
        self._api = api
        self._likes = like_set
        self._feeds = feeds
        self._errors = errors
        self._epoch = 0

    @property
    def like_set(self) -> LikeSet:
        return self._likes

    def state_of(self, song_id: str) -> LikeState:
        return self._likes.state_of(song_id)

    async def like(self, song_id: str) -> bool:
        """
        Ставить вподобайку. Повертає True, якщо сервер її підтвердив у межах поточної сесії.
        """
        if not self._likes.begin(song_id):	# 🔁 Уже PENDING або LIKED
            return False

        epoch = self._epoch
        logger.info("❤️ Like %s (pending)", song_id)
        try:
            await self._api.like(song_id)
        except asyncio.CancelledError:
            self._likes.rollback(song_id)
            raise
        except Exception as exc:
            if epoch != self._epoch:	# 🗑️ Сесію вже скинуто
                logger.debug("🗑️ Like %s failed after reset, ignoring", song_id)
                return False
            self._likes.rollback(song_id)
            LIKE_ROLLBACKS_TOTAL.inc()
            await self._errors.handle(exc, CONST.MSG.LIKE_FAILED)
            return False

        if epoch != self._epoch:
            logger.debug("🗑️ Like %s confirmed after reset, ignoring", song_id)
            return False
        self._likes.confirm(song_id)
        logger.info("✅ Like %s confirmed", song_id)
        await self._feeds.refresh()
        return True

    def reset(self) -> None:
        """🧹 Забуває всі вподобайки; відповіді, що ще в дорозі, будуть проігноровані."""
        self._epoch += 1
        self._likes.clear()


__all__ = ["LikeTracker"]
