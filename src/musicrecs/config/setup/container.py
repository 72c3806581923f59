# 📦 musicrecs/config/setup/container.py
"""
📦 Контейнер залежностей клієнта musicrecs.

🔹 Створює сервіси в правильному порядку DI: сховище → сесія → сповіщення → помилки →
   HTTP-клієнт → стрічки/вподобайки/пошук → контролер.
🔹 `build_session_controller()` — та сама збірка без конфігу (для тестів і вбудовування).
🔹 Запускає Prometheus-експортер, якщо це дозволено конфігурацією.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                           # 🧾 Базові засоби логування
from typing import TYPE_CHECKING, Any, List, Optional                    # 🧮 Допоміжні типи

# 🧩 Внутрішні модулі проєкту

# ⚙️ Конфігурація
from musicrecs.config.setup.constants import CONST, AppConstants         # ⚙️ Глобальні константи

# 🏭 Доменна логіка
from musicrecs.domain.music import FeedName, IMusicApi, LikeSet          # 🎵 DTO та контракти

# 🚨 Обробка помилок
from musicrecs.errors import ExceptionHandlerService, HttpxErrorStrategy, IErrorHandlingStrategy

# 🏗️ Інфраструктура
from musicrecs.infrastructure.api import ApiClient, MusicApi             # 🌐 HTTP-клієнт і фасад бекенду
from musicrecs.infrastructure.feeds import FeedAggregator                # 📰 Агреговані стрічки
from musicrecs.infrastructure.likes import LikeTracker                   # ❤️ Оптимістичні вподобайки
from musicrecs.infrastructure.notifications import NotificationQueue     # 💬 Слот сповіщень
from musicrecs.infrastructure.search import SearchController             # 🔍 Пошук із debounce
from musicrecs.infrastructure.services import MusicSessionController     # 🎛️ Фасад для оболонки
from musicrecs.infrastructure.session import FileSessionStorage, SessionStore  # 🔐 Сесія та її сховище
from musicrecs.shared.metrics import maybe_start_prometheus              # 📈 Bootstrap метрик
from musicrecs.shared.utils.logger import LOG_NAME, init_logging_from_config  # 🧾 Конфіг логування

if TYPE_CHECKING:
    from musicrecs.config.config_service import ConfigService            # 🗂️ Тип під час перевірки

logger = logging.getLogger(f"{LOG_NAME}.container")                      # 🧾 Модульний логер контейнера


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _float_or_default(value: Any, default: float) -> float:
    """Повертає float або запасне значення, якщо каст неможливий."""
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _int_or_default(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _feed_or_default(value: Any, default: FeedName) -> FeedName:
    try:
        return FeedName(str(value))
    except ValueError:
        logger.warning("⚠️ Невідома стрічка за замовчуванням %r, беремо %s", value, default.value)
        return default


def bootstrap_logging() -> logging.Logger:
    """
    Зчитує конфіг логування і запускає кореневий логер.
    """
    from musicrecs.config.config_service import ConfigService            # 🧭 Локальний імпорт для уникнення циклів

    cfg = ConfigService()                                                # ⚙️ Singleton-конфіг
    node = cfg.get("logging", {}) or {}                                  # 📄 Вузол логування
    return init_logging_from_config(node)                                # 🧾 Стартуємо логер за конфігом


def build_session_controller(
    api: IMusicApi,
    session: SessionStore,
    *,
    notification_ttl_sec: float = 3.0,
    debounce_sec: float = 0.3,
    min_length: int = 2,
    default_feed: FeedName = FeedName.CONTENT_BASED,
    strategies: Optional[List[IErrorHandlingStrategy]] = None,
) -> MusicSessionController:
    """
    Звʼязує компоненти синхронізації навколо вже створених API та сесії.
    Один `LikeSet` спільний для FeedAggregator (поглинання серверних id) і LikeTracker (переходи).
    """
    notifications = NotificationQueue(ttl_sec=notification_ttl_sec)
    errors = ExceptionHandlerService(
        strategies if strategies is not None else [HttpxErrorStrategy()],
        session_store=session,
        notifications=notifications,
    )
    like_set = LikeSet()
    feeds = FeedAggregator(api, like_set, errors, default_feed=default_feed)
    likes = LikeTracker(api, like_set, feeds, errors)
    search = SearchController(api, errors, debounce_sec=debounce_sec, min_length=min_length)
    return MusicSessionController(api, session, notifications, errors, feeds, likes, search)


# ================================
# 🏛️ КОНТЕЙНЕР ЗАЛЕЖНОСТЕЙ
# ================================
class Container:
    """
    Координує ініціалізацію інфраструктурних сервісів і контролера сесії.
    """

    def __init__(self, config: "ConfigService"):
        self.config = config                                              # ⚙️ Джерело конфігурацій DI
        self.constants: AppConstants = CONST                              # 🧱 Глобальні константи застосунку
        logger.info("🚀 Стартуємо побудову контейнера залежностей")
        self._bootstrap_metrics_if_enabled()                              # 📈 Можливий запуск експорту метрик
        self._setup_session()                                             # 🔐 Сховище і сесія
        self._setup_api()                                                 # 🌐 HTTP-клієнт
        self._setup_controller()                                          # 🎛️ Компоненти синхронізації
        logger.info("✅ Контейнер ініціалізовано успішно")

    # ================================
    # 📈 МЕТРИКИ
    # ================================
    def _bootstrap_metrics_if_enabled(self) -> None:
        """
        Стартує Prometheus-експортер, якщо це дозволено конфігурацією.
        """
        try:                                                             # 🧪 Ізолюємо збої метрик
            if not bool(self.config.get("metrics.enabled", False)):
                logger.debug("📉 Prometheus вимкнено конфігом")
                return
            exporter_name = (self.config.get("metrics.exporter", "prometheus") or "prometheus").lower()
            if exporter_name != "prometheus":                            # 🚫 Підтримуємо лише Prometheus
                logger.debug("📉 Експортер %s не підтримується", exporter_name)
                return
            port = _int_or_default(self.config.get("metrics.prometheus.port", 9108, cast=int), 9108)
            maybe_start_prometheus(port)
        except OSError:                                                  # ⚠️ Порт зайнятий тощо
            logger.exception("⚠️ Не вдалося стартувати експортер метрик")

    # ================================
    # 🔐 СЕСІЯ
    # ================================
    def _setup_session(self) -> None:
        session_file = str(self.config.get("session.file", "data/session.json"))
        self.session_storage = FileSessionStorage(session_file)
        self.session_store = SessionStore(self.session_storage)

    # ================================
    # 🌐 HTTP
    # ================================
    def _setup_api(self) -> None:
        base_url = str(self.config.get("api.base_url", "http://localhost:5000/api"))
        timeout = _float_or_default(self.config.get("api.timeout_sec"), 10.0)
        session = self.session_store
        self.api_client = ApiClient(base_url, token_provider=lambda: session.token, timeout_sec=timeout)
        self.music_api = MusicApi(self.api_client)

    # ================================
    # 🎛️ КОНТРОЛЕР
    # ================================
    def _setup_controller(self) -> None:
        self.controller = build_session_controller(
            self.music_api,
            self.session_store,
            notification_ttl_sec=_float_or_default(self.config.get("notifications.ttl_sec"), 3.0),
            debounce_sec=_float_or_default(self.config.get("search.debounce_sec"), 0.3),
            min_length=_int_or_default(self.config.get("search.min_length"), 2),
            default_feed=_feed_or_default(self.config.get("feeds.default", "content-based"), FeedName.CONTENT_BASED),
        )

    async def aclose(self) -> None:
        """🔌 Закриває контролер і HTTP-клієнт."""
        await self.controller.close()
        await self.api_client.aclose()


__all__ = ["Container", "bootstrap_logging", "build_session_controller"]
