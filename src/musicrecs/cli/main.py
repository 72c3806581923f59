# 🚀 musicrecs/cli/main.py
"""
🚀 Entry-point рядкового клієнта musicrecs.

🔹 Готує середовище (CLI-флаги → ENV), піднімає логування та DI-контейнер.
🔹 Відновлює збережену сесію і запускає `CommandShell` поверх stdin.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from dotenv import load_dotenv											# 🌱 Завантаження змінних оточення з .env

# 🔠 Системні імпорти
import asyncio															# 🔁 Event loop клієнта
import logging															# 🧾 Логування подій запуску
import os																# 🌍 Робота з оточенням/ENV
import sys																# 🧵 CLI-аргументи
from typing import Dict, List, Optional

# 🧩 Внутрішні модулі проєкту
from musicrecs.config.config_service import ConfigService				# ⚙️ Завантаження конфігів
from musicrecs.config.setup.container import Container, bootstrap_logging	# 🚀 Логування + DI-контейнер
from musicrecs.shared.utils.logger import LOG_NAME						# 🏷️ Ім'я кореневого логера
from .shell import CommandShell, HELP_TEXT

logger = logging.getLogger(f"{LOG_NAME}.cli")

PROMPT = "musicrecs> "

# 🏳️ CLI-прапорець → ENV-змінна ConfigService
FLAG_TO_ENV: Dict[str, str] = {
    "--api-url": "MUSICRECS_API_URL",
    "--session-file": "MUSICRECS_SESSION_FILE",
    "--log-level": "MUSICRECS_LOG_LEVEL",
    "--config": "MUSICRECS_CONFIG",
}


# ================================
# ⚙️ CLI-ФЛАГИ → ENV
# ================================
def _apply_cli_flags_to_env(args: List[str]) -> None:
    """
    Мапить прапорці виду `--api-url=http://...` на ENV змінні, які читає ConfigService.
    """
    for arg in args:
        flag, sep, value = arg.partition("=")
        env_name = FLAG_TO_ENV.get(flag)
        if env_name is None or not sep:
            logger.warning("⚠️ Невідомий або неповний прапорець: %s", arg)
            continue
        os.environ[env_name] = value
        logger.debug("🏳️ %s=%s", env_name, value)


async def _read_line(prompt: str) -> Optional[str]:
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, input, prompt)	# ⌨️ input() блокує, тому в потоці
    except EOFError:
        return None


async def run_shell(container: Container) -> None:
    """Основний цикл: відновлення сесії → команди до `quit` або EOF."""
    controller = container.controller
    shell = CommandShell(controller)
    try:
        if await controller.start():
            user = controller.user
            print(f"🔐 Сесію відновлено: {user.display_name if user else ''}")
            await shell.execute("show")
        else:
            print(HELP_TEXT)
        while True:
            line = await _read_line(PROMPT)
            if line is None or not await shell.execute(line):
                break
    finally:
        await container.aclose()


# ================================
# 🚀 ENTRYPOINT
# ================================
def run(argv: Optional[List[str]] = None) -> None:
    """
    Основна точка входу: парсить CLI-флаги, читає конфіг і запускає оболонку.
    """
    _apply_cli_flags_to_env(list(sys.argv[1:] if argv is None else argv))
    load_dotenv()														# 🌱 Завантажуємо змінні з .env
    bootstrap_logging()													# 🪵 Піднімаємо YAML-конфіг логування

    container = Container(ConfigService())
    logger.info("🎵 musicrecs is starting…")
    try:
        asyncio.run(run_shell(container))
    except KeyboardInterrupt:
        logger.info("⏹️ Interrupted")
    logger.info("👋 musicrecs stopped")


if __name__ == "__main__":													# ▶️ Дозволяє запуск як скрипт
    run()
