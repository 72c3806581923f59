"""
🧪 test_logger.py — ініціалізація логування

Перевіряє:
- JSON-формат файлу з extra-полями
- Повторна ініціалізація не дублює хендлери
- Suppress сторонніх логерів (httpx)
"""

import json
import logging

import pytest

from musicrecs.shared.utils import LOG_NAME, get_logger, init_logging, init_logging_from_config


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger(LOG_NAME)
    level, handlers = root.level, list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_json_file_contains_extra_fields(tmp_path):
    log_file = tmp_path / "logs" / "app.log"
    init_logging(level="DEBUG", console=False, json_mode=True, file=str(log_file))

    get_logger("feeds").info("✅ Feeds refreshed", extra={"likes_added": 2})
    for handler in logging.getLogger(LOG_NAME).handlers:
        handler.flush()

    lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    record = lines[-1]
    assert record["name"] == f"{LOG_NAME}.feeds"
    assert record["message"] == "✅ Feeds refreshed"
    assert record["likes_added"] == 2


def test_reinit_replaces_handlers():
    init_logging(console=True, file="")
    init_logging(console=True, file=None)

    root = logging.getLogger(LOG_NAME)
    assert sum(isinstance(h, logging.StreamHandler) for h in root.handlers) == 1


def test_init_from_config_suppresses_third_party():
    init_logging_from_config({"console": False, "file": "", "suppress": {"httpx": "ERROR"}})
    assert logging.getLogger("httpx").level == logging.ERROR
