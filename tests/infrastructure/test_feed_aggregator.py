"""
🧪 test_feed_aggregator.py — fan-out/fan-in оновлення стрічок

Перевіряє:
- Успішне оновлення заповнює чотири стрічки та множину вподобайок
- Збій будь-якого з п'яти запитів: старі стрічки лишаються, рівно одне error-сповіщення
- 401 під час оновлення → примусовий вихід
- Результат, що прийшов після reset(), відкидається
- Перекриті оновлення: авторитетне те, що завершилося останнім
- Оновлення замінює підтверджені вподобайки серверними, PENDING лишаються
"""

import asyncio

import pytest

from conftest import make_song
from musicrecs.config.setup.constants import CONST
from musicrecs.domain.music import AGGREGATED_FEEDS, FeedName, NotificationKind, UserProfile
from musicrecs.errors import AuthRejectedError, TransportError

FIVE_KEYS = [f"feed:{name.value}" for name in AGGREGATED_FEEDS] + ["likes"]


@pytest.mark.asyncio
async def test_refresh_issues_five_requests_and_populates_state(api, controller):
    api.server_likes = {"s3"}

    assert await controller.feeds.refresh() is True

    assert sorted(api.calls) == sorted(FIVE_KEYS)
    feeds = controller.feeds.feeds()
    assert [s.id for s in feeds[FeedName.ALL]] == ["s1", "s2", "s3"]
    assert [s.id for s in feeds[FeedName.POPULAR]] == ["s1", "s3"]
    assert controller.feeds.is_loaded
    assert controller.likes.like_set.ids() == frozenset({"s3"})


@pytest.mark.parametrize("failing_key", FIVE_KEYS)
@pytest.mark.asyncio
async def test_any_single_failure_keeps_previous_feeds(api, controller, pushed, failing_key):
    await controller.feeds.refresh()
    before = controller.feeds.feeds()

    api.feeds[FeedName.ALL] = [make_song("new")]
    api.failures[failing_key] = TransportError("boom")
    pushed.clear()

    assert await controller.feeds.refresh() is False

    assert controller.feeds.feeds() == before
    assert len(pushed) == 1
    assert pushed[0].kind is NotificationKind.ERROR
    assert pushed[0].text == CONST.MSG.FEEDS_LOAD_FAILED


@pytest.mark.asyncio
async def test_auth_rejection_forces_logout(api, controller, pushed, storage):
    await controller.session.login("tok", UserProfile(id="u1", username="alice"))
    api.failures["feed:popular"] = AuthRejectedError("nope")

    await controller.feeds.refresh()

    assert not controller.session.is_authenticated
    assert storage.data == {}
    assert [n.text for n in pushed] == [CONST.MSG.SESSION_EXPIRED]


@pytest.mark.asyncio
async def test_refresh_finishing_after_reset_is_discarded(api, controller):
    api.gates["likes"] = asyncio.Event()
    task = asyncio.create_task(controller.feeds.refresh())
    await asyncio.sleep(0)

    controller.feeds.reset()
    api.gates["likes"].set()

    assert await task is False
    assert not controller.feeds.is_loaded
    assert controller.feeds.feed(FeedName.ALL) == ()


@pytest.mark.asyncio
async def test_refresh_does_not_drop_pending_likes(api, controller):
    controller.likes.like_set.begin("s2")
    await controller.feeds.refresh()
    assert "s2" in controller.likes.like_set


def test_select_switches_only_between_aggregated_feeds(controller):
    assert controller.feeds.selected is FeedName.CONTENT_BASED
    controller.feeds.select(FeedName.POPULAR)
    assert controller.feeds.selected is FeedName.POPULAR
    with pytest.raises(ValueError):
        controller.feeds.select(FeedName.SEARCH)


@pytest.mark.asyncio
async def test_overlapping_refreshes_last_completion_wins(api, controller):
    api.feeds[FeedName.ALL] = [make_song("old")]
    first_gate = api.gates["likes"] = asyncio.Event()
    first = asyncio.create_task(controller.feeds.refresh())
    while api.count("likes") < 1:
        await asyncio.sleep(0)

    del api.gates["likes"]
    api.feeds[FeedName.ALL] = [make_song("new")]
    assert await controller.feeds.refresh() is True
    assert [s.id for s in controller.feeds.feed(FeedName.ALL)] == ["new"]

    first_gate.set()
    assert await first is True
    assert [s.id for s in controller.feeds.feed(FeedName.ALL)] == ["old"]


@pytest.mark.asyncio
async def test_refresh_replaces_confirmed_likes_with_server_records(api, controller):
    like_set = controller.likes.like_set
    like_set.replace_confirmed(["gone"])
    like_set.begin("p")
    api.server_likes = {"s1"}

    await controller.feeds.refresh()

    assert like_set.ids() == frozenset({"s1", "p"})
    assert like_set.pending() == frozenset({"p"})
