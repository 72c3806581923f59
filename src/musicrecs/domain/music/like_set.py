# ❤️ musicrecs/domain/music/like_set.py
"""
❤️ LikeSet — множина вподобаних пісень зі станом кожного id.

🔹 Стани: NOT_LIKED → PENDING → LIKED, компенсуюче ребро PENDING → NOT_LIKED (відкат).
🔹 `replace_confirmed()` синхронізує LIKED із сервером; очікувані (PENDING) id переживають оновлення.
🔹 Відкат торкається рівно одного id, решта множини лишається як була.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                       # 🧾 Логи переходів
from enum import Enum                                                # 🏷️ Стани автомата
from typing import Dict, FrozenSet, Iterable, Iterator              # 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from musicrecs.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.domain.likes")


class LikeState(str, Enum):
    NOT_LIKED = "not_liked"
    PENDING = "pending"
    LIKED = "liked"


class LikeSet:
    """❤️ Множина id зі станом (PENDING або LIKED); відсутній id означає NOT_LIKED."""

    def __init__(self, liked: Iterable[str] = ()) -> None:
        self._states: Dict[str, LikeState] = {song_id: LikeState.LIKED for song_id in liked}

    # ================================
    # 🔎 ЧИТАННЯ
    # ================================
    def state_of(self, song_id: str) -> LikeState:
        return self._states.get(song_id, LikeState.NOT_LIKED)

    def __contains__(self, song_id: object) -> bool:
        return song_id in self._states

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._states))

    def __len__(self) -> int:
        return len(self._states)

    def ids(self) -> FrozenSet[str]:
        """Знімок усіх підтверджених і очікуваних id."""
        return frozenset(self._states)

    def pending(self) -> FrozenSet[str]:
        return frozenset(k for k, v in self._states.items() if v is LikeState.PENDING)

    # ================================
    # 🔁 ПЕРЕХОДИ
    # ================================
    def begin(self, song_id: str) -> bool:
        """NOT_LIKED → PENDING. False, якщо id уже PENDING або LIKED."""
        if song_id in self._states:
            logger.debug("❤️ like %s ignored, state=%s", song_id, self._states[song_id].value)
            return False
        self._states[song_id] = LikeState.PENDING
        return True

    def confirm(self, song_id: str) -> bool:
        """PENDING → LIKED. False, якщо id не очікує підтвердження (наприклад, після скидання)."""
        if self._states.get(song_id) is not LikeState.PENDING:
            return False
        self._states[song_id] = LikeState.LIKED
        return True

    def rollback(self, song_id: str) -> bool:
        """PENDING → NOT_LIKED. Інші id не змінюються."""
        if self._states.get(song_id) is not LikeState.PENDING:
            return False
        del self._states[song_id]
        logger.debug("↩️ like %s rolled back", song_id)
        return True

    def replace_confirmed(self, song_ids: Iterable[str]) -> int:
        """
        Замінює підтверджені id записами сервера; PENDING не чіпає.
        Повертає кількість id, яких раніше не було в множині.
        """
        server = set(song_ids)
        pending = {k: v for k, v in self._states.items() if v is LikeState.PENDING}
        added = len(server - set(self._states))
        self._states = {song_id: LikeState.LIKED for song_id in server if song_id not in pending}
        self._states.update(pending)
        return added

    def clear(self) -> None:
        self._states.clear()


__all__ = ["LikeSet", "LikeState"]
