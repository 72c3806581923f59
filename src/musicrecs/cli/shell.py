# 🐚 musicrecs/cli/shell.py
"""
🐚 CommandShell — рядкова оболонка над `MusicSessionController`.

🔹 Команди: login, register, like, search, feed, show, refresh, logout, help, quit.
🔹 Кожна команда повертає керування одразу після того, як контролер застосував результат
   (для пошуку: після debounce і відповіді бекенду).
🔹 Вивід іде через інʼєктований `output`, тож оболонку легко тестувати.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
import shlex
from typing import Awaitable, Callable, Dict, List, Optional

# 🧩 Внутрішні модулі проєкту
from musicrecs.domain.music import AGGREGATED_FEEDS, FeedName, Notification, PresentedView
from musicrecs.infrastructure.services import MusicSessionController
from musicrecs.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.cli")

Output = Callable[[str], None]
Command = Callable[[List[str]], Awaitable[None]]

HELP_TEXT = """\
Команди:
  login <username> <password>
  register <username> <password> <name...>
  like <song_id>
  search <term...>        (порожній термін очищає пошук)
  feed <all|content-based|user-based|popular>
  show | refresh | logout | help | quit"""


def render_view(view: PresentedView) -> str:
    """🖼️ Текстове представлення однієї стрічки."""
    lines = [f"== {view.title} =="]
    if not view.songs:
        lines.append("  (порожньо)")
    for item in view.songs:
        heart = "♥" if item.is_liked else "♡"
        artists = item.song.display_artists or "?"
        lines.append(f"  {heart} [{item.song.id}] {item.song.title} · {artists} · {item.song.primary_genre}")
    return "\n".join(lines)


def render_notification(notification: Optional[Notification]) -> Optional[str]:
    if notification is None:
        return None
    return f"[{notification.kind.value}] {notification.text}"


class CommandShell:
    """🐚 Диспетчер команд; не знає нічого про stdin."""

    def __init__(self, controller: MusicSessionController, output: Output = print) -> None:
        self._controller = controller
        self._output = output
        self._commands: Dict[str, Command] = {
            "login": self._login,
            "register": self._register,
            "like": self._like,
            "search": self._search,
            "feed": self._feed,
            "show": self._show,
            "refresh": self._refresh,
            "logout": self._logout,
            "help": self._help,
        }

    async def execute(self, line: str) -> bool:
        """Виконує один рядок. False означає завершення оболонки."""
        try:
            parts = shlex.split(line)
        except ValueError as exc:
            self._output(f"⚠️ {exc}")
            return True
        if not parts:
            return True
        name, args = parts[0].lower(), parts[1:]
        if name in ("quit", "exit"):
            return False
        command = self._commands.get(name)
        if command is None:
            self._output(f"❓ Невідома команда: {name}. Спробуйте help.")
            return True
        logger.debug("🐚 %s", name)
        before = self._controller.notifications.current
        await command(args)
        self._echo_notification(before)
        return True

    # ================================
    # 🧾 КОМАНДИ
    # ================================
    async def _login(self, args: List[str]) -> None:
        if len(args) != 2:
            self._output("Використання: login <username> <password>")
            return
        if await self._controller.login(args[0], args[1]):
            self._output(render_view(self._controller.present()))

    async def _register(self, args: List[str]) -> None:
        if len(args) < 3:
            self._output("Використання: register <username> <password> <name...>")
            return
        if await self._controller.register(args[0], args[1], " ".join(args[2:])):
            self._output(render_view(self._controller.present()))

    async def _like(self, args: List[str]) -> None:
        if len(args) != 1 or not self._require_session():
            return
        await self._controller.like(args[0])

    async def _search(self, args: List[str]) -> None:
        if not self._require_session():
            return
        self._controller.set_search_term(" ".join(args))
        await self._controller.search.drain()
        self._output(render_view(self._controller.present()))

    async def _feed(self, args: List[str]) -> None:
        try:
            if len(args) != 1:
                raise ValueError("feed takes exactly one argument")
            self._controller.select_feed(FeedName(args[0]))
        except ValueError:
            names = "|".join(f.value for f in AGGREGATED_FEEDS)
            self._output(f"Використання: feed <{names}>")
            return
        self._output(render_view(self._controller.present()))

    async def _show(self, args: List[str]) -> None:
        if self._require_session():
            self._output(render_view(self._controller.present()))

    async def _refresh(self, args: List[str]) -> None:
        if await self._controller.refresh():
            self._output(render_view(self._controller.present()))

    async def _logout(self, args: List[str]) -> None:
        await self._controller.logout()

    async def _help(self, args: List[str]) -> None:
        self._output(HELP_TEXT)

    # ================================
    # 🛠️ ДОПОМІЖНІ МЕТОДИ
    # ================================
    def _require_session(self) -> bool:
        if self._controller.is_authenticated:
            return True
        self._output("🔒 Спочатку увійдіть: login <username> <password>")
        return False

    def _echo_notification(self, before: Optional[Notification]) -> None:
        """Друкує сповіщення, лише якщо команда показала нове."""
        current = self._controller.notifications.current
        if current is not None and current is not before:
            self._output(render_notification(current) or "")


__all__ = ["CommandShell", "render_view", "render_notification", "HELP_TEXT"]
