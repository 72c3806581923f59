# 🚨 musicrecs/errors/__init__.py
"""
🚨 Пакет обробки помилок: таксономія, стратегії конвертації та центральний обробник.
"""

# 🧩 Внутрішні модулі проєкту
from .custom_errors import (
    AppError,
    AuthRejectedError,
    CredentialsValidationError,
    ErrorCode,
    TransportError,
    UserVisibleError,
)
from .exception_handler_service import ExceptionHandlerService
from .strategies import HttpxErrorStrategy, IErrorHandlingStrategy

__all__ = [
    "ErrorCode",
    "AppError",
    "UserVisibleError",
    "TransportError",
    "AuthRejectedError",
    "CredentialsValidationError",
    "IErrorHandlingStrategy",
    "HttpxErrorStrategy",
    "ExceptionHandlerService",
]
