# 🔍 musicrecs/infrastructure/search/search_controller.py
"""
🔍 SearchController — пошук під час набору з debounce і відкиданням застарілих відповідей.

🔹 `set_term()` одразу оновлює термін, а запит відкладає до «тихого» інтервалу без нових викликів.
🔹 Терміни коротші за мінімальну довжину очищають результати синхронно, без таймера й мережі.
🔹 Кожен виконаний запит отримує покоління; застосовується лише відповідь найновішого покоління.
   Запити в дорозі не скасовуються, їхні відповіді просто відкидаються.
🔹 Очищення терміна піднімає «поріг», тож відповіді, видані до очищення, теж відкидаються.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio	# ⏱️ TimerHandle + задачі запитів
import logging
from typing import TYPE_CHECKING, Optional, Set, Tuple

# 🧩 Внутрішні модулі проєкту
from musicrecs.config.setup.constants import CONST
from musicrecs.domain.music import IMusicApi, SearchState, Song
from musicrecs.shared.metrics import SEARCH_DISCARDED_TOTAL, SEARCH_REQUESTS_TOTAL
from musicrecs.shared.utils.logger import LOG_NAME

if TYPE_CHECKING:	# pragma: no cover
    from musicrecs.errors import ExceptionHandlerService

logger = logging.getLogger(f"{LOG_NAME}.search")


class SearchController:
    """🔍 Власник `SearchState`."""

    def __init__(
        self,
        api: IMusicApi,
        errors: "ExceptionHandlerService",
        *,
        debounce_sec: float = 0.3,
        min_length: int = 2,
    ) -> None:
        self._api = api
        self._errors = errors
        self._debounce_sec = float(debounce_sec)
        self._min_length = int(min_length)

        self._term = ""
        self._results: Tuple[Song, ...] = ()
        self._applied = 0	# 🔢 Покоління застосованих результатів
        self._issued = 0	# 🔢 Найвище видане покоління
        self._floor = 0	# 🧱 Покоління ≤ порогу вже не застосовуються
        self._timer: Optional[asyncio.TimerHandle] = None
        self._tasks: Set["asyncio.Task[None]"] = set()

    # ================================
    # 🔎 СТАН
    # ================================
    @property
    def term(self) -> str:
        return self._term

    @property
    def results(self) -> Tuple[Song, ...]:
        return self._results

    @property
    def state(self) -> SearchState:
        return SearchState(term=self._term, results=self._results, generation=self._applied)

    @property
    def is_active(self) -> bool:
        """Непорожні результати повністю замінюють агреговані стрічки."""
        return bool(self._results)

    @property
    def debounce_sec(self) -> float:
        return self._debounce_sec

    @property
    def issued_generation(self) -> int:
        return self._issued

    @property
    def has_pending(self) -> bool:
        return self._timer is not None or bool(self._tasks)

    # ================================
    # ⌨️ ВВЕДЕННЯ
    # ================================
    def set_term(self, term: str) -> None:
        """Оновлює термін і перезапускає debounce. Потрібен запущений event loop."""
        self._term = term
        self._cancel_timer()
        if len(term) < self._min_length:
            self._clear_results()
            return
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._debounce_sec, self._fire, term)

    def clear(self) -> None:
        """Очищає термін і результати; агреговані стрічки знову на екрані без перезавантаження."""
        self.set_term("")

    async def drain(self) -> None:
        """⏳ Чекає, доки спрацює таймер і завершаться всі запити в дорозі."""
        while self.has_pending:
            if self._tasks:
                await asyncio.gather(*tuple(self._tasks), return_exceptions=True)
            else:
                await asyncio.sleep(self._debounce_sec / 2 or 0.001)

    def reset(self) -> None:
        """🧹 Скидання разом із сесією: термін, результати, таймер; запити в дорозі буде відкинуто."""
        self._term = ""
        self._cancel_timer()
        self._clear_results()

    async def aclose(self) -> None:
        self.reset()
        for task in tuple(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*tuple(self._tasks), return_exceptions=True)

    # ================================
    # 📡 ВИКОНАННЯ
    # ================================
    def _fire(self, query: str) -> None:
        self._timer = None
        self._issued += 1
        generation = self._issued
        SEARCH_REQUESTS_TOTAL.inc()
        logger.debug("🔍 Search %r issued (gen=%d)", query, generation)
        task = asyncio.get_running_loop().create_task(self._execute(query, generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _execute(self, query: str, generation: int) -> None:
        try:
            songs = await self._api.search(query)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            if not self._is_current(generation):
                logger.debug("🗑️ Stale search failure discarded (gen=%d)", generation)
                return
            await self._errors.handle(exc, CONST.MSG.SEARCH_FAILED)
            return

        if not self._is_current(generation):
            SEARCH_DISCARDED_TOTAL.inc()
            logger.debug("🗑️ Stale search response discarded (gen=%d, latest=%d)", generation, self._issued)
            return
        self._results = tuple(songs)
        self._applied = generation
        logger.info("🔍 Search %r → %d results", query, len(self._results))

    def _is_current(self, generation: int) -> bool:
        return generation == self._issued and generation > self._floor

    def _clear_results(self) -> None:
        self._results = ()
        self._applied = 0
        self._floor = self._issued

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


__all__ = ["SearchController"]
