# 🚨 musicrecs/errors/custom_errors.py
"""
🚨 Ієрархія доменних винятків клієнта.

🔹 `AppError` — база; `UserVisibleError` — текст можна показати користувачу як є.
🔹 `AuthRejectedError` (401) — примусовий вихід із сесії + сповіщення про помилку.
🔹 `TransportError` — мережа, таймаут, не-2xx без auth або неочікуваний payload.
🔹 `CredentialsValidationError` — некоректні облікові дані до будь-якого запиту.
🔹 `to_log_extra()` — словник для `logger.extra`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Dict, Optional                                   # 📐 Типізація


# ================================
# ⚠️ КОДИ ПОМИЛОК
# ================================
class ErrorCode:
    AUTH_REJECTED = "auth_rejected"
    TRANSPORT = "transport_error"
    VALIDATION = "validation_error"
    UNKNOWN = "unknown_error"


# ================================
# 🧠 БАЗОВІ ВИНЯТКИ
# ================================
class AppError(Exception):
    """🧠 Базовий доменний виняток."""

    code: str = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message                                      # 💬 Текст для користувача
        self.details = details                                      # 🔎 Технічні деталі (лише для логів)

    def to_log_extra(self) -> Dict[str, object]:
        extra: Dict[str, object] = {"error_code": self.code}
        if self.details:
            extra["details"] = self.details
        return extra


class UserVisibleError(AppError):
    """👀 Помилка, текст якої безпечно показати у сповіщенні."""


# ================================
# 🧾 ТАКСОНОМІЯ КОНТРОЛЕРА
# ================================
class TransportError(UserVisibleError):
    """🌐 Мережевий збій, таймаут або не-2xx статус (крім 401)."""

    code = ErrorCode.TRANSPORT

    def __init__(
        self,
        message: str,
        *,
        details: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.url = url                                              # 🔗 URL запиту
        self.status_code = status_code                              # 🔢 HTTP-код (None для мережевих збоїв)

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.url:
            extra["url"] = self.url
        if self.status_code is not None:
            extra["status_code"] = self.status_code
        return extra


class AuthRejectedError(TransportError):
    """🔒 Бекенд відхилив автентифікацію (HTTP 401)."""

    code = ErrorCode.AUTH_REJECTED

    def __init__(self, message: str, *, details: Optional[str] = None, url: Optional[str] = None) -> None:
        super().__init__(message, details=details, url=url, status_code=401)


class CredentialsValidationError(UserVisibleError):
    """⚠️ Порожні/некоректні облікові дані при вході чи реєстрації."""

    code = ErrorCode.VALIDATION


__all__ = [
    "ErrorCode",
    "AppError",
    "UserVisibleError",
    "TransportError",
    "AuthRejectedError",
    "CredentialsValidationError",
]
