# 💾 musicrecs/infrastructure/session/session_storage.py
"""
💾 Реалізації `ISessionStorage` — сталого key-value сховища сесії.

🔹 `FileSessionStorage` — JSON-обʼєкт у файлі (aiofiles), атомарний запис через tmp + `os.replace`.
🔹 `InMemorySessionStorage` — словник у памʼяті для тестів і одноразових запусків.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import aiofiles	# 📄 Асинхронне читання/запис JSON-файлу

# 🔠 Системні імпорти
import asyncio	# 🔐 Lock на файл
import json	# 📄 Робота з JSON-файлом
import logging	# 🧾 Логування операцій
import os	# 🗂️ Атомарний rename
from pathlib import Path	# 📁 Створення директорії
from typing import Dict, Optional	# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from musicrecs.domain.music import ISessionStorage	# 📦 Доменний контракт
from musicrecs.shared.utils.logger import LOG_NAME	# 🏷️ Імʼя базового логера

logger = logging.getLogger(f"{LOG_NAME}.session.storage")


# ================================
# 🧪 У ПАМʼЯТІ
# ================================
class InMemorySessionStorage(ISessionStorage):
    """🧪 Сховище в памʼяті; `data` відкритий для перевірок у тестах."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    async def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def write(self, key: str, value: str) -> None:
        self.data[key] = value

    async def remove(self, key: str) -> None:
        self.data.pop(key, None)


# ================================
# 📄 ФАЙЛОВЕ СХОВИЩЕ
# ================================
class FileSessionStorage(ISessionStorage):
    """📄 JSON-файл як стале сховище; кожна зміна одразу записується на диск."""

    def __init__(self, file_path: str, *, ensure_dir: bool = True) -> None:
        self._file_path = str(file_path)	# 🗂️ Шлях до файлу сесії
        self._lock = asyncio.Lock()	# 🔐 Серіалізує read-modify-write
        if ensure_dir:
            Path(self._file_path).parent.mkdir(parents=True, exist_ok=True)	# 🏗️ Створюємо директорію
        logger.info("💾 FileSessionStorage init (file=%s)", self._file_path)

    @property
    def file_path(self) -> str:
        return self._file_path

    # ================================
    # 📣 ПУБЛІЧНИЙ КОНТРАКТ
    # ================================
    async def read(self, key: str) -> Optional[str]:
        async with self._lock:
            data = await self._load()
        return data.get(key)

    async def write(self, key: str, value: str) -> None:
        async with self._lock:
            data = await self._load()
            data[key] = value
            await self._dump(data)

    async def remove(self, key: str) -> None:
        async with self._lock:
            data = await self._load()
            if data.pop(key, None) is None:
                return	# 🪣 Нічого видаляти
            await self._dump(data)

    # ================================
    # 🧠 ВНУТРІШНЯ ЛОГІКА
    # ================================
    async def _load(self) -> Dict[str, str]:
        """📥 Читає файл; відсутній або пошкоджений файл трактуємо як порожнє сховище."""
        try:
            async with aiofiles.open(self._file_path, "r", encoding="utf-8") as file_handle:
                content = await file_handle.read()
            raw = json.loads(content) if content else {}
            if not isinstance(raw, dict):
                raise ValueError("Очікувався JSON-обʼєкт сесії.")
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, ValueError) as exc:
            logger.warning("⚠️ Некоректний файл сесії (%s). Вважаємо його порожнім.", exc)
            return {}
        return {str(k): str(v) for k, v in raw.items() if isinstance(v, str)}

    async def _dump(self, data: Dict[str, str]) -> None:
        payload = json.dumps(dict(sorted(data.items())), indent=2, ensure_ascii=False)
        tmp_path = f"{self._file_path}.tmp"
        try:
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as file_handle:
                await file_handle.write(payload)
            os.replace(tmp_path, self._file_path)	# 🔀 Атомарно підміняємо
        except OSError:
            if os.path.exists(tmp_path):	# 🧹 Прибираємо tmp
                os.remove(tmp_path)
            raise
        logger.debug("💾 Session file saved (%d keys)", len(data))


__all__ = ["InMemorySessionStorage", "FileSessionStorage"]
