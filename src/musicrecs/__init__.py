# 🎵 musicrecs/__init__.py
"""
🎵 musicrecs — клієнтський контролер сесії та синхронізації даних для застосунку музичних рекомендацій.

🔹 Сесія з bearer-токеном, що переживає перезапуск.
🔹 Агреговані стрічки рекомендацій (fan-out/fan-in), оптимістичні вподобайки, пошук із debounce.
🔹 Ефемерні сповіщення про успіх і помилки.
"""

__version__ = "0.1.0"
