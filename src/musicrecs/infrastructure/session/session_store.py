# 🔐 musicrecs/infrastructure/session/session_store.py
"""
🔐 SessionStore — власник автентифікованої сесії (токен + користувач).

🔹 Пара токен/користувач існує або повністю, або ніяк (інваріант `Session`).
🔹 `login()` записує обидва ключі у стале сховище; `logout()` стирає обидва.
🔹 `logout()` запускає слухачів скидання: стрічки, вподобайки, пошук і сповіщення
   інших компонентів очищаються синхронно, ще до першої точки `await`.
🔹 `restore()` піднімає сесію після перезапуску процесу; половинчасті або пошкоджені записи стираються.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import json	# 📄 Серіалізація користувача
import logging	# 🧾 Логування переходів
from typing import Callable, List, Optional	# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from musicrecs.config.setup.constants import CONST	# 🔑 Ключі сховища
from musicrecs.domain.music import ISessionStorage, Session, UserProfile
from musicrecs.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.session")

ResetListener = Callable[[], None]


class SessionStore:
    """🔐 Тримає поточну `Session` і синхронізує її зі сталим сховищем."""

    def __init__(self, storage: ISessionStorage) -> None:
        self._storage = storage
        self._session = Session()
        self._reset_listeners: List[ResetListener] = []

    # ================================
    # 🔎 СТАН
    # ================================
    @property
    def session(self) -> Session:
        return self._session

    @property
    def token(self) -> Optional[str]:
        return self._session.token

    @property
    def user(self) -> Optional[UserProfile]:
        return self._session.user

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    def add_reset_listener(self, listener: ResetListener) -> None:
        """Реєструє колбек, що очищає стан компонента при зміні/завершенні сесії."""
        self._reset_listeners.append(listener)

    # ================================
    # 🔁 ПЕРЕХОДИ
    # ================================
    async def restore(self) -> Session:
        """📥 Відновлює сесію зі сталого сховища (або лишає неавтентифікований стан)."""
        token = await self._storage.read(CONST.STORAGE.TOKEN)
        raw_user = await self._storage.read(CONST.STORAGE.USER)
        if token is None and raw_user is None:
            logger.info("🔓 No stored session")
            return self._session

        try:
            if not token or not raw_user:
                raise ValueError("token and user must be stored together")
            session = Session(token=token, user=UserProfile.from_payload(json.loads(raw_user)))
        except ValueError as exc:
            logger.warning("⚠️ Stored session is corrupt, clearing it: %s", exc)
            await self._erase_durable()
            return self._session

        self._session = session
        logger.info("🔐 Session restored for %s", session.user.username)
        return session

    async def login(self, token: str, user: UserProfile) -> None:
        """🔑 Встановлює пару токен/користувач і робить її сталою (повторний виклик перезаписує)."""
        session = Session(token=token, user=user)	# ⚠️ ValueError для порожнього токена
        previous = self._session.user
        if previous is not None and previous.id != user.id:
            logger.info("🔄 Switching user %s → %s", previous.username, user.username)
            self._run_reset_listeners()	# 🧹 Дані попереднього користувача не мають просочитись
        self._session = session
        try:
            await self._storage.write(CONST.STORAGE.USER, json.dumps(user.to_payload(), ensure_ascii=False))
            await self._storage.write(CONST.STORAGE.TOKEN, token)
        except OSError:
            logger.exception("❌ Failed to persist session for %s", user.username)
        logger.info("🔐 Logged in as %s", user.username)

    async def logout(self) -> None:
        """🚪 Стирає сесію в памʼяті, скидає стан інших компонентів і видаляє сталі копії."""
        username = self._session.user.username if self._session.user else None
        self._session = Session()
        self._run_reset_listeners()
        await self._erase_durable()
        logger.info("🚪 Logged out%s", f" ({username})" if username else "")

    # ================================
    # 🛠️ ДОПОМІЖНІ МЕТОДИ
    # ================================
    def _run_reset_listeners(self) -> None:
        for listener in list(self._reset_listeners):
            listener()

    async def _erase_durable(self) -> None:
        try:
            await self._storage.remove(CONST.STORAGE.TOKEN)
            await self._storage.remove(CONST.STORAGE.USER)
        except OSError:
            logger.exception("❌ Failed to erase stored session")


__all__ = ["SessionStore", "ResetListener"]
