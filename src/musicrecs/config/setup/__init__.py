# ⚙️ musicrecs/config/setup/__init__.py
"""
⚙️ Пакет для налаштування та 'збірки' всіх компонентів клієнта перед запуском.

Надає доступ до констант і контейнера залежностей.
"""

from .constants import CONST, AppConstants

__all__ = [
    "AppConstants",
    "CONST",
    "Container",
    "build_session_controller",
]


def __getattr__(name: str):
    if name in ("Container", "build_session_controller"):
        from . import container  # локальний імпорт → немає циклу

        return getattr(container, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
