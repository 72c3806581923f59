# ⚙️ musicrecs/config/__init__.py
"""
⚙️ Пакет Config — централізована конфігурація та ініціалізація застосунку.

Цей пакет відповідає за:
- Завантаження та управління налаштуваннями (.env, config.yaml).
- Створення та зв'язування всіх сервісів через DI‑контейнер.
"""

# ================================
# 🧩 ПУБЛІЧНИЙ API ПАКЕТУ
# ================================
from typing import TYPE_CHECKING

from .config_service import ConfigService
from .setup.constants import CONST, AppConstants

if TYPE_CHECKING:  # лише для підказок типів, без виконання імпорту під час рантайму
    from .setup.container import Container

# ================================
# 📤 EXPORT
# ================================

__all__ = [
    "AppConstants",
    "ConfigService",
    "CONST",
    "Container",
]


def __getattr__(name: str):
    if name == "Container":
        from .setup.container import Container  # локальний імпорт → немає циклу

        return Container
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
