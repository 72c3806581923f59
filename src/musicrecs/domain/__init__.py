# 🏭 musicrecs/domain/__init__.py
"""🏭 Доменний шар: DTO та контракти без інфраструктури."""
