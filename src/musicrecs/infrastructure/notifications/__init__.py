# 💬 musicrecs/infrastructure/notifications/__init__.py
from .notification_queue import NotificationListener, NotificationQueue

__all__ = ["NotificationQueue", "NotificationListener"]
