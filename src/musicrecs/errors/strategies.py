# 📜 musicrecs/errors/strategies.py
"""
📜 Стратегії конвертації сторонніх винятків у доменні `AppError`.

🔹 Виносять логіку із `ApiClient` / `ExceptionHandlerService`, щоб ті залишались простими.
🔹 `HttpxErrorStrategy`: таймаути та збої зʼєднання → `TransportError`, 401 → `AuthRejectedError`,
   інші статуси → `TransportError` з текстом `message` із тіла відповіді (якщо він є).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 HTTP-клієнт (винятки)

# 🔠 Системні імпорти
import logging															# 🧾 Логування стратегій
from typing import Optional, Protocol									# 📐 Типи

# 🧩 Внутрішні модулі проєкту
from musicrecs.config.setup.constants import CONST						# 💬 Повідомлення
from musicrecs.shared.utils.logger import LOG_NAME
from .custom_errors import AppError, AuthRejectedError, TransportError	# ⚠️ Доменні помилки

logger = logging.getLogger(f"{LOG_NAME}.errors.strategies")


# ================================
# 🧠 КОНТРАКТ СТРАТЕГІЙ
# ================================
class IErrorHandlingStrategy(Protocol):
    """🧠 Контракт, що визначає єдиний метод `handle`."""

    def handle(self, error: Exception) -> Optional[AppError]:
        """Вертає `AppError`, якщо виняток розпізнано, або None."""


def _request_url(error: httpx.HTTPError) -> str:
    try:
        return str(error.request.url)
    except RuntimeError:												# ⚠️ Виняток створено без request
        return "N/A"


def _server_message(response: httpx.Response) -> Optional[str]:
    """Дістає поле `message` із JSON-тіла помилки, якщо воно є."""
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None


# ================================
# 🌐 HTTPX-СТРАТЕГІЯ
# ================================
class HttpxErrorStrategy(IErrorHandlingStrategy):
    """🌐 Перетворює httpx-помилки на `TransportError` / `AuthRejectedError`."""

    def handle(self, error: Exception) -> Optional[AppError]:
        if isinstance(error, httpx.TimeoutException):					# ⏱️ Таймаути запиту
            url = _request_url(error)
            logger.debug("⏱️ httpx timeout", extra={"url": url})
            return TransportError(CONST.MSG.HTTP_TIMEOUT, url=url, details=str(error))

        if isinstance(error, httpx.HTTPStatusError):					# 🔢 Неочікуваний статус
            url = _request_url(error)
            status = error.response.status_code
            message = _server_message(error.response) or CONST.MSG.CONNECTION_ERROR
            logger.debug("🔢 httpx status error", extra={"url": url, "status": status})
            if status == 401:
                return AuthRejectedError(message, url=url, details=str(error))
            return TransportError(message, url=url, status_code=status, details=str(error))

        if isinstance(error, httpx.HTTPError):							# 🌐 Зʼєднання, протокол тощо
            url = _request_url(error)
            logger.debug("🌐 httpx transport error", extra={"url": url})
            return TransportError(CONST.MSG.CONNECTION_ERROR, url=url, details=str(error))

        return None


__all__ = [
    "IErrorHandlingStrategy",
    "HttpxErrorStrategy",
]
