# 📈 musicrecs/shared/metrics/sync.py
"""
📈 Prometheus-метрики контролера синхронізації.

🔹 `FEED_REFRESH_TOTAL` — оновлення стрічок за результатом (success/failure/discarded).
🔹 `LIKE_ROLLBACKS_TOTAL` — відкочені оптимістичні вподобайки.
🔹 `SEARCH_REQUESTS_TOTAL` / `SEARCH_DISCARDED_TOTAL` — виконані та відкинуті (застарілі) пошуки.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import Counter                                 # 📊 Prometheus-метрики

# ================================
# 📰 СТРІЧКИ
# ================================
FEED_REFRESH_TOTAL = Counter(
    "musicrecs_feed_refresh_total",                                  # 🏷️ Імʼя метрики
    "Aggregated feed refreshes by outcome",                          # 📝 Опис у Prometheus
    ["outcome"],
)

# ================================
# ❤️ ВПОДОБАЙКИ
# ================================
LIKE_ROLLBACKS_TOTAL = Counter(
    "musicrecs_like_rollbacks_total",
    "Optimistic likes rolled back after a failed interaction request",
)

# ================================
# 🔍 ПОШУК
# ================================
SEARCH_REQUESTS_TOTAL = Counter(
    "musicrecs_search_requests_total",
    "Search requests issued after the debounce interval",
)

SEARCH_DISCARDED_TOTAL = Counter(
    "musicrecs_search_discarded_total",
    "Search responses discarded because a newer generation was issued",
)


__all__ = [
    "FEED_REFRESH_TOTAL",
    "LIKE_ROLLBACKS_TOTAL",
    "SEARCH_REQUESTS_TOTAL",
    "SEARCH_DISCARDED_TOTAL",
]
