"""
🧪 test_music_session_controller.py — сценарії сесії від входу до виходу

Перевіряє:
- Вхід/реєстрацію: валідацію, повідомлення сервера, вітання і перше оновлення
- Відсутність залишків попереднього користувача після logout → login
- Примусовий вихід при 401 і відкидання запізнілих результатів
- Відновлення сесії при старті та представлення стрічок із прапорцями вподобань
"""

import asyncio

import pytest

from conftest import make_song
from musicrecs.config.setup.constants import CONST
from musicrecs.domain.music import FeedName, NotificationKind
from musicrecs.errors import AuthRejectedError
from musicrecs.infrastructure.session import SessionStore
from musicrecs.config.setup.container import build_session_controller


@pytest.mark.asyncio
async def test_login_success_welcomes_and_loads_feeds(api, controller, pushed, storage):
    api.server_likes = {"s2"}

    assert await controller.login("alice", "secret") is True

    assert controller.user.username == "alice"
    assert storage.data["token"] == "token-alice"
    assert [n.text for n in pushed] == [CONST.MSG.WELCOME]
    view = controller.present()
    assert view.feed is FeedName.CONTENT_BASED
    assert view.title == CONST.FEED_TITLES["content-based"]
    assert [(p.song.id, p.is_liked) for p in view.songs] == [("s2", True)]


@pytest.mark.asyncio
async def test_login_rejected_shows_server_message_without_feed_calls(api, controller, pushed):
    assert await controller.login("alice", "wrong") is False

    assert not controller.is_authenticated
    assert [(n.text, n.kind) for n in pushed] == [("Invalid credentials", NotificationKind.ERROR)]
    assert api.calls == ["login:alice"]


@pytest.mark.asyncio
@pytest.mark.parametrize("username,password", [("", "secret"), ("alice", ""), ("   ", "x")])
async def test_login_validation_makes_no_requests(api, controller, pushed, username, password):
    assert await controller.login(username, password) is False

    assert api.calls == []
    assert [n.text for n in pushed] == [CONST.MSG.CREDENTIALS_REQUIRED]


@pytest.mark.asyncio
async def test_register_requires_name_then_creates_account(api, controller, pushed):
    assert await controller.register("carol", "pw", " ") is False
    assert api.calls == []

    assert await controller.register("carol", "pw", "Carol") is True

    assert controller.user.display_name == "Carol"
    assert [n.text for n in pushed] == [CONST.MSG.NAME_REQUIRED, CONST.MSG.ACCOUNT_CREATED]
    assert controller.feeds.is_loaded


@pytest.mark.asyncio
async def test_logout_then_login_as_other_user_leaves_no_residue(api, controller, pushed, storage):
    await controller.login("alice", "secret")
    await controller.like("s2")
    api.search_results["alice"] = [make_song("a1")]
    controller.set_search_term("alice")
    await controller.search.drain()
    controller.select_feed(FeedName.POPULAR)
    assert controller.present().is_search

    await controller.logout()

    assert storage.data == {}
    assert pushed[-1].text == CONST.MSG.LOGGED_OUT
    assert not controller.feeds.is_loaded
    assert len(controller.likes.like_set) == 0
    assert controller.search.term == "" and controller.search.results == ()

    api.server_likes = set()
    api.feeds[FeedName.CONTENT_BASED] = [make_song("b1")]
    await controller.login("bob", "secret")

    view = controller.present()
    assert view.feed is FeedName.CONTENT_BASED
    assert [(p.song.id, p.is_liked) for p in view.songs] == [("b1", False)]
    assert controller.notifications.current.text == CONST.MSG.WELCOME


@pytest.mark.asyncio
async def test_refresh_in_flight_across_logout_is_discarded(api, controller):
    api.gates["likes"] = asyncio.Event()
    login = asyncio.create_task(controller.login("alice", "secret"))
    for _ in range(5):
        await asyncio.sleep(0)
    assert controller.is_authenticated

    await controller.logout()
    api.gates["likes"].set()
    await login

    assert not controller.feeds.is_loaded
    assert controller.present().songs == ()


@pytest.mark.asyncio
async def test_auth_rejection_on_like_forces_single_logout_notification(api, controller, pushed, storage):
    await controller.login("alice", "secret")
    pushed.clear()
    api.failures["like:s1"] = AuthRejectedError("expired")

    assert await controller.like("s1") is False

    assert not controller.is_authenticated
    assert storage.data == {}
    assert [(n.text, n.kind) for n in pushed] == [(CONST.MSG.SESSION_EXPIRED, NotificationKind.ERROR)]


@pytest.mark.asyncio
async def test_actions_without_session_are_ignored(api, controller):
    assert await controller.like("s1") is False
    assert await controller.refresh() is False
    controller.set_search_term("anything")
    await controller.logout()

    assert api.calls == []
    assert not controller.search.has_pending


@pytest.mark.asyncio
async def test_start_restores_session_and_refreshes(api, storage):
    first = build_session_controller(api, SessionStore(storage), debounce_sec=0.02)
    await first.login("alice", "secret")
    api.calls.clear()

    restarted = build_session_controller(api, SessionStore(storage), debounce_sec=0.02)
    assert await restarted.start() is True

    assert restarted.user.username == "alice"
    assert api.count("feed:all") == 1
    assert restarted.feeds.is_loaded


@pytest.mark.asyncio
async def test_start_without_stored_session_does_nothing(api, controller):
    assert await controller.start() is False
    assert api.calls == []
