# 🐚 musicrecs/cli/__init__.py
"""🐚 Рядковий інтерфейс клієнта (`python -m musicrecs`)."""

from .shell import CommandShell, render_notification, render_view

__all__ = ["CommandShell", "render_view", "render_notification"]
