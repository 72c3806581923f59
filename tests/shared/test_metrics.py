"""
🧪 test_metrics.py — Prometheus-лічильники синхронізації
"""

from unittest.mock import patch

import pytest
from prometheus_client import REGISTRY

from musicrecs.errors import TransportError
from musicrecs.shared.metrics import exporters, maybe_start_prometheus


def _sample(name, labels=None):
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


@pytest.mark.asyncio
async def test_refresh_and_rollback_counters(api, controller):
    ok_before = _sample("musicrecs_feed_refresh_total", {"outcome": "success"})
    rollbacks_before = _sample("musicrecs_like_rollbacks_total")

    await controller.feeds.refresh()
    api.failures["like:s1"] = TransportError("down")
    await controller.likes.like("s1")

    assert _sample("musicrecs_feed_refresh_total", {"outcome": "success"}) == ok_before + 1
    assert _sample("musicrecs_like_rollbacks_total") == rollbacks_before + 1


def test_exporter_starts_once_per_port(monkeypatch):
    monkeypatch.setattr(exporters, "_started_ports", set())
    with patch.object(exporters, "start_http_server") as start:
        assert maybe_start_prometheus(9999) is True
        assert maybe_start_prometheus(9999) is False
    start.assert_called_once_with(9999)
