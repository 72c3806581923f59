# 📰 musicrecs/infrastructure/feeds/feed_aggregator.py
"""
📰 FeedAggregator — fan-out/fan-in завантаження агрегованих стрічок і вподобайок.

🔹 `refresh()` паралельно запитує каталог, три стрічки рекомендацій і `/me/likes`.
🔹 Все або нічого: якщо впав хоча б один запит, попередні стрічки лишаються на екрані,
   а користувач бачить рівно одне error-сповіщення.
🔹 Перемагає останнє завершене оновлення; результат, що прийшов після `reset()`, відкидається.
🔹 На екрані одна агрегована стрічка за раз (`select()`).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio	# 🔀 gather для fan-out
import logging
from typing import TYPE_CHECKING, Dict, Mapping, Optional, Sequence, Tuple

# 🧩 Внутрішні модулі проєкту
from musicrecs.config.setup.constants import CONST
from musicrecs.domain.music import AGGREGATED_FEEDS, FeedName, IMusicApi, LikeSet, Song
from musicrecs.shared.metrics import FEED_REFRESH_TOTAL
from musicrecs.shared.utils.logger import LOG_NAME

if TYPE_CHECKING:	# pragma: no cover
    from musicrecs.errors import ExceptionHandlerService

logger = logging.getLogger(f"{LOG_NAME}.feeds")


class FeedAggregator:
    """📰 Власник стану агрегованих стрічок."""

    def __init__(
        self,
        api: IMusicApi,
        like_set: LikeSet,
        errors: "ExceptionHandlerService",
        default_feed: FeedName = FeedName.CONTENT_BASED,
    ) -> None:
        if default_feed not in AGGREGATED_FEEDS:
            raise ValueError(f"Default feed must be one of the aggregated feeds, got {default_feed!r}")
        self._api = api
        self._likes = like_set
        self._errors = errors
        self._default_feed = default_feed
        self._selected = default_feed
        self._feeds: Dict[FeedName, Tuple[Song, ...]] = {}
        self._loaded = False
        self._epoch = 0	# 🔢 Збільшується при reset(); відсікає запізнілі відповіді

    # ================================
    # 🔎 СТАН
    # ================================
    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def selected(self) -> FeedName:
        return self._selected

    def feeds(self) -> Mapping[FeedName, Tuple[Song, ...]]:
        """Знімок чотирьох агрегованих стрічок (порожньо до першого успішного оновлення)."""
        return {name: self._feeds.get(name, ()) for name in AGGREGATED_FEEDS}

    def feed(self, name: FeedName) -> Tuple[Song, ...]:
        return self._feeds.get(name, ())

    def select(self, name: FeedName) -> None:
        """Перемикає видиму агреговану стрічку без повторного завантаження."""
        if name not in AGGREGATED_FEEDS:
            raise ValueError(f"{name!r} is not an aggregated feed")
        self._selected = name
        logger.debug("🗂️ Selected feed %s", name.value)

    # ================================
    # 🔁 ОНОВЛЕННЯ
    # ================================
    async def refresh(self) -> bool:
        """
        Завантажує всі п'ять джерел разом. Повертає True, якщо результат застосовано.
        Помилки не піднімаються: вони перетворюються на сповіщення (і logout для 401).
        """
        epoch = self._epoch
        logger.info("🔄 Refreshing feeds")
        results = await asyncio.gather(
            *(self._api.fetch_feed(name) for name in AGGREGATED_FEEDS),
            self._api.my_likes(),
            return_exceptions=True,
        )

        if epoch != self._epoch:
            logger.info("🗑️ Feed refresh finished after reset, discarding")
            FEED_REFRESH_TOTAL.labels(outcome="discarded").inc()
            return False

        failure = self._first_failure(results)
        if failure is not None:
            FEED_REFRESH_TOTAL.labels(outcome="failure").inc()
            await self._errors.handle(failure, CONST.MSG.FEEDS_LOAD_FAILED)
            return False

        *feed_results, liked = results
        self._feeds = {name: tuple(songs) for name, songs in zip(AGGREGATED_FEEDS, feed_results)}
        added = self._likes.replace_confirmed(song.id for song in liked)
        self._loaded = True
        FEED_REFRESH_TOTAL.labels(outcome="success").inc()
        logger.info(
            "✅ Feeds refreshed",
            extra={"sizes": {n.value: len(s) for n, s in self._feeds.items()}, "likes_added": added},
        )
        return True

    def reset(self) -> None:
        """🧹 Забуває стрічки та вибір; оновлення, що ще в дорозі, буде відкинуте."""
        self._epoch += 1
        self._feeds = {}
        self._loaded = False
        self._selected = self._default_feed

    @staticmethod
    def _first_failure(results: Sequence[object]) -> Optional[BaseException]:
        for result in results:
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                return result
        return None


__all__ = ["FeedAggregator"]
