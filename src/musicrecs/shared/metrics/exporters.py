# 🚀 musicrecs/shared/metrics/exporters.py
"""
🚀 Легкий bootstrap HTTP-експортера `/metrics` для Prometheus.

🔹 Повторний виклик на тому ж порту нічого не робить.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import start_http_server                       # 🌐 HTTP-експортер

# 🔠 Системні імпорти
import logging                                                        # 🧾 Логи запуску
import threading                                                      # 🔒 Захист від подвійного старту
from typing import Set                                                # 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from musicrecs.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.metrics")

_started_ports: Set[int] = set()                                      # 🧾 Порти, на яких експортер уже працює
_lock = threading.Lock()


def maybe_start_prometheus(port: int) -> bool:
    """Стартує експортер, якщо він ще не запущений на цьому порту. Повертає True при першому старті."""
    with _lock:
        if port in _started_ports:
            logger.debug("📈 Prometheus exporter already running on %s", port)
            return False
        start_http_server(port)                                       # 🌐 Піднімаємо daemon-потік
        _started_ports.add(port)
        logger.info("📈 Prometheus exporter started on port %s", port)
        return True


__all__ = ["maybe_start_prometheus"]
