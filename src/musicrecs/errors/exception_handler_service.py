# 🛡️ musicrecs/errors/exception_handler_service.py
"""
🛡️ Центральний сервіс обробки помилок контролера синхронізації.

🔹 Конвертує будь-які винятки в доменні `AppError`, використовуючи передані стратегії.
🔹 `AuthRejectedError` у межах сесії → примусовий `logout()` + сповіщення про завершену сесію.
🔹 Кожна оброблена помилка дає рівно одне error-сповіщення; сервіс ніколи не валить виклик.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio														# ⏱️ CancelledError
import logging														# 🧾 Логування кроків
from typing import TYPE_CHECKING, Any, Dict, List, Optional			# 📐 Типи

# 🧩 Внутрішні модулі проєкту
from musicrecs.config.setup.constants import CONST					# 💬 Стандартні повідомлення
from musicrecs.domain.music import NotificationKind					# 🏷️ Тип сповіщення
from musicrecs.shared.utils.logger import LOG_NAME					# 🏷️ Спільний неймспейс логів
from .custom_errors import AppError, AuthRejectedError, UserVisibleError	# ⚠️ Доменні винятки
from .strategies import IErrorHandlingStrategy						# 🧠 Конвертери винятків

if TYPE_CHECKING:													# pragma: no cover
    from musicrecs.infrastructure.notifications import NotificationQueue
    from musicrecs.infrastructure.session import SessionStore


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.errors")


# ================================
# 🧠 СЕРВІС ОБРОБКИ ПОМИЛОК
# ================================
class ExceptionHandlerService:
    """🧠 Єдиний шлях від збою мережевого виклику до (можливого logout) + сповіщення."""

    # ================================
    # 🧱 ІНІЦІАЛІЗАЦІЯ
    # ================================
    def __init__(
        self,
        strategies: List[IErrorHandlingStrategy],
        session_store: "SessionStore",
        notifications: "NotificationQueue",
    ) -> None:
        self._strategies = list(strategies)							# 📦 Копія списку, щоб уникнути мутацій
        self._session = session_store
        self._notifications = notifications
        logger.info("🛡️ ExceptionHandlerService init", extra={"strategies": len(self._strategies)})

    # ================================
    # 🔑 ПУБЛІЧНИЙ API
    # ================================
    async def handle(
        self,
        error: BaseException,
        fallback_message: Optional[str] = None,
        *,
        session_bound: bool = True,
    ) -> AppError:
        """
        Головна точка входу. Нічого не піднімає, окрім CancelledError.

        Args:
            error: Виняток із мережевого виклику.
            fallback_message: Текст сповіщення замість повідомлення самої помилки.
            session_bound: False для входу/реєстрації, коли сесії ще немає й 401 означає
                лише відхилені облікові дані.

        Returns:
            Доменну помилку, в яку перетворено виняток.
        """
        if isinstance(error, asyncio.CancelledError):					# ⏹️ CancelledError передається вище
            logger.info("⏹️ CancelledError passthrough")
            raise error

        domain_error = self._convert_error(error)					# 🔄 Прагнемо отримати AppError
        if domain_error is None:
            logger.error("🔥 Unhandled error: %s", error, exc_info=error)
            domain_error = AppError(CONST.MSG.CONNECTION_ERROR, details=repr(error))

        extra = self._extract_extra(domain_error)
        if isinstance(domain_error, AuthRejectedError) and session_bound:
            logger.warning("🔒 Auth rejected, forcing logout", extra=extra)
            if self._session.is_authenticated:
                await self._session.logout()							# 🚪 Повне скидання стану
            self._notifications.push(CONST.MSG.SESSION_EXPIRED, NotificationKind.ERROR)
            return domain_error

        if isinstance(domain_error, UserVisibleError):
            logger.warning("⚠️ UserVisibleError: %s", domain_error, extra=extra)
        text = fallback_message or domain_error.message
        self._notifications.push(text, NotificationKind.ERROR)		# 💬 Рівно одне сповіщення
        return domain_error

    # ================================
    # 🛠️ ДОПОМІЖНІ МЕТОДИ
    # ================================
    def _convert_error(self, error: BaseException) -> Optional[AppError]:
        """🔄 Пропускає виняток через стратегії й повертає `AppError`, якщо можливо."""
        if isinstance(error, AppError):								# 🧾 Уже доменний виняток
            return error
        if not isinstance(error, Exception):
            return None
        for strategy in self._strategies:							# 🔁 Перебираємо всі стратегії
            try:
                converted = strategy.handle(error)
            except Exception as exc:									# noqa: BLE001
                logger.exception("🔥 Strategy failed: %r", strategy, exc_info=exc)
                continue
            if converted:
                logger.debug("🔁 Strategy converted error via %r", strategy)
                return converted
        return None

    @staticmethod
    def _extract_extra(error: AppError) -> Dict[str, Any]:
        """📦 Безпечно дістає `to_log_extra()` для логів."""
        try:
            return dict(error.to_log_extra())
        except Exception:											# noqa: BLE001
            logger.debug("⚠️ to_log_extra failed", exc_info=True)
            return {}


__all__ = ["ExceptionHandlerService"]
