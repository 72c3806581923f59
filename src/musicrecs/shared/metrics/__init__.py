# 📊 musicrecs/shared/metrics/__init__.py
"""
📊 Пакет метрик Prometheus для клієнта.

🔹 Лічильники синхронізації стрічок, вподобайок і пошуку.
🔹 Легкий bootstrap експортер `/metrics`.
"""

from __future__ import annotations

# 🔁 Синхронізація
from .sync import (
    FEED_REFRESH_TOTAL,
    LIKE_ROLLBACKS_TOTAL,
    SEARCH_DISCARDED_TOTAL,
    SEARCH_REQUESTS_TOTAL,
)

# 🚀 Експортер Prometheus
from .exporters import maybe_start_prometheus

# ================================
# 📦 ЕКСПОРТ ПАКЕТУ
# ================================
__all__ = [
    "FEED_REFRESH_TOTAL",
    "LIKE_ROLLBACKS_TOTAL",
    "SEARCH_REQUESTS_TOTAL",
    "SEARCH_DISCARDED_TOTAL",
    "maybe_start_prometheus",
]
