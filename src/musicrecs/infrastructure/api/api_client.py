# 🌐 musicrecs/infrastructure/api/api_client.py
"""
🌐 ApiClient — тонкий асинхронний транспорт над `httpx.AsyncClient`.

🔹 Кожен вихідний запит отримує `Authorization: Bearer <token>`, якщо сесія існує
   (event hook читає токен у момент відправки, а не при створенні клієнта).
🔹 Не-2xx статуси, таймаути та мережеві збої конвертуються у `TransportError` / `AuthRejectedError`
   через `HttpxErrorStrategy`.
🔹 Тіло відповіді, що не є JSON, → `TransportError(UNEXPECTED_RESPONSE)`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx																# 🌐 Асинхронний HTTP-клієнт

# 🔠 Системні імпорти
import logging																# 🧾 Логування запитів
from typing import Any, Callable, List, Mapping, Optional					# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from musicrecs.config.setup.constants import CONST
from musicrecs.errors import (
    AppError,
    HttpxErrorStrategy,
    IErrorHandlingStrategy,
    TransportError,
)
from musicrecs.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.api")

TokenProvider = Callable[[], Optional[str]]


class ApiClient:
    """🌐 Обгортка над httpx з автопідстановкою bearer-токена та доменними помилками."""

    def __init__(
        self,
        base_url: str,
        *,
        token_provider: TokenProvider,
        timeout_sec: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        strategies: Optional[List[IErrorHandlingStrategy]] = None,
    ) -> None:
        self._token_provider = token_provider
        self._strategies = list(strategies) if strategies is not None else [HttpxErrorStrategy()]
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_sec,
            transport=transport,
            headers={"Accept": "application/json"},
            event_hooks={"request": [self._inject_auth]},
        )
        logger.info("🌐 ApiClient ready", extra={"base_url": base_url, "timeout": timeout_sec})

    # ================================
    # 🔐 BEARER-ТОКЕН
    # ================================
    async def _inject_auth(self, request: httpx.Request) -> None:
        token = self._token_provider()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        else:
            request.headers.pop("Authorization", None)

    # ================================
    # 📡 ЗАПИТИ
    # ================================
    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Виконує запит і повертає розібраний JSON (або None для порожнього тіла).

        Raises:
            AuthRejectedError: бекенд відповів 401.
            TransportError: мережа, таймаут, інший не-2xx статус або не-JSON тіло.
        """
        logger.debug("📡 %s %s", method, path)
        try:
            response = await self._client.request(method, path, json=json, params=params)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise self._convert(exc) from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("⚠️ Non-JSON response from %s", response.request.url)
            raise TransportError(
                CONST.MSG.UNEXPECTED_RESPONSE,
                url=str(response.request.url),
                status_code=response.status_code,
                details=str(exc),
            ) from exc

    async def get(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, *, json: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.request("POST", path, json=json)

    async def aclose(self) -> None:
        await self._client.aclose()
        logger.debug("🔌 ApiClient closed")

    def _convert(self, exc: httpx.HTTPError) -> AppError:
        for strategy in self._strategies:
            converted = strategy.handle(exc)
            if converted is not None:
                return converted
        return TransportError(CONST.MSG.CONNECTION_ERROR, details=str(exc))


__all__ = ["ApiClient", "TokenProvider"]
