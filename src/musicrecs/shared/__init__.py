# 🧰 musicrecs/shared/__init__.py
"""🧰 Спільні утиліти та метрики клієнта musicrecs."""
