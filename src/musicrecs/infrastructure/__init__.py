# 🏗️ musicrecs/infrastructure/__init__.py
"""
🏗️ Інфраструктурний шар: HTTP-транспорт, сесія, сповіщення та компоненти синхронізації.
"""
