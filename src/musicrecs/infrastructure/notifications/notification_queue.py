# 💬 musicrecs/infrastructure/notifications/notification_queue.py
"""
💬 NotificationQueue — слот на одне ефемерне сповіщення з таймером автозникнення.

🔹 `push()` замінює поточне сповіщення одразу (без черги) і перезапускає таймер.
🔹 `clear()` скасовує таймер і очищає слот.
🔹 Таймер належить черзі; спрацювання для вже заміненого сповіщення нічого не робить.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio	# ⏱️ call_later / TimerHandle
import logging
from typing import Callable, List, Optional

# 🧩 Внутрішні модулі проєкту
from musicrecs.domain.music import Notification, NotificationKind
from musicrecs.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.notifications")

NotificationListener = Callable[[Optional[Notification]], None]


class NotificationQueue:
    """💬 Не більше одного живого сповіщення за раз."""

    def __init__(self, ttl_sec: float = 3.0) -> None:
        self._ttl_sec = float(ttl_sec)
        self._current: Optional[Notification] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._listeners: List[NotificationListener] = []

    @property
    def current(self) -> Optional[Notification]:
        return self._current

    @property
    def ttl_sec(self) -> float:
        return self._ttl_sec

    def add_listener(self, listener: NotificationListener) -> None:
        """Колбек отримує нове сповіщення або None, коли слот очищено."""
        self._listeners.append(listener)

    def push(self, text: str, kind: NotificationKind = NotificationKind.INFO) -> Notification:
        """Показує `text`, замінюючи попереднє сповіщення. Потрібен запущений event loop."""
        loop = asyncio.get_running_loop()
        self._cancel_timer()
        notification = Notification(text=text, kind=kind, expires_at=loop.time() + self._ttl_sec)
        self._current = notification
        self._timer = loop.call_later(self._ttl_sec, self._expire, notification)
        log = logger.warning if kind is NotificationKind.ERROR else logger.info
        log("💬 [%s] %s", kind.value, text)
        self._notify(notification)
        return notification

    def clear(self) -> None:
        self._cancel_timer()
        if self._current is None:
            return
        self._current = None
        self._notify(None)

    # ================================
    # 🛠️ ДОПОМІЖНІ МЕТОДИ
    # ================================
    def _expire(self, notification: Notification) -> None:
        if self._current is not notification:	# ⏳ Застарілий таймер
            return
        self._timer = None
        self._current = None
        logger.debug("⌛ Notification expired")
        self._notify(None)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _notify(self, notification: Optional[Notification]) -> None:
        for listener in list(self._listeners):
            listener(notification)


__all__ = ["NotificationQueue", "NotificationListener"]
