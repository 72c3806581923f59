# tests/conftest.py
import asyncio
import sys
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

import pytest

# 1) Додаємо src в sys.path, щоб працював імпорт "musicrecs.…"
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from musicrecs.config.setup.container import build_session_controller  # noqa: E402
from musicrecs.domain.music import (  # noqa: E402
    AGGREGATED_FEEDS,
    FeedName,
    Notification,
    Song,
    UserProfile,
)
from musicrecs.errors import AuthRejectedError  # noqa: E402
from musicrecs.infrastructure.session import InMemorySessionStorage, SessionStore  # noqa: E402


def make_song(song_id: str, title: Optional[str] = None, artists=("Artist",), genres=("Pop",)) -> Song:
    return Song(id=song_id, title=title or f"Song {song_id}", artists=tuple(artists), genres=tuple(genres))


class FakeMusicApi:
    """
    🧪 Фейковий бекенд у памʼяті.

    Кожен виклик записується в `calls` ключем ("feed:popular", "likes", "like:s1",
    "search:abc", "login:alice"). За тим самим ключем можна:
    - `failures[key] = exc` — виклик підніме виняток;
    - `gates[key] = asyncio.Event()` — виклик чекатиме, доки подію не встановлять.
    """

    def __init__(self) -> None:
        self.calls: List[str] = []
        self.feeds: Dict[FeedName, List[Song]] = {name: [] for name in AGGREGATED_FEEDS}
        self.search_results: Dict[str, List[Song]] = {}
        self.server_likes: Set[str] = set()
        self.users: Dict[str, Tuple[str, UserProfile]] = {}
        self.failures: Dict[str, BaseException] = {}
        self.gates: Dict[str, asyncio.Event] = {}

    def add_user(self, username: str, password: str = "secret", name: Optional[str] = None) -> UserProfile:
        profile = UserProfile(id=f"u-{username}", username=username, display_name=name or username.title())
        self.users[username] = (password, profile)
        return profile

    def count(self, key: str) -> int:
        return self.calls.count(key)

    async def _enter(self, key: str) -> None:
        self.calls.append(key)
        gate = self.gates.get(key)
        if gate is not None:
            await gate.wait()
        error = self.failures.get(key)
        if error is not None:
            raise error

    async def login(self, username: str, password: str) -> Tuple[str, UserProfile]:
        await self._enter(f"login:{username}")
        stored = self.users.get(username)
        if stored is None or stored[0] != password:
            raise AuthRejectedError("Invalid credentials")
        return f"token-{username}", stored[1]

    async def register(self, username: str, password: str, name: str) -> Tuple[str, UserProfile]:
        await self._enter(f"register:{username}")
        profile = self.add_user(username, password, name)
        return f"token-{username}", profile

    async def fetch_feed(self, feed: FeedName) -> List[Song]:
        await self._enter(f"feed:{feed.value}")
        return list(self.feeds[feed])

    async def my_likes(self) -> List[Song]:
        await self._enter("likes")
        return [make_song(song_id) for song_id in sorted(self.server_likes)]

    async def like(self, song_id: str) -> None:
        await self._enter(f"like:{song_id}")
        self.server_likes.add(song_id)

    async def search(self, term: str) -> List[Song]:
        await self._enter(f"search:{term}")
        return list(self.search_results.get(term, []))


@pytest.fixture
def api() -> FakeMusicApi:
    fake = FakeMusicApi()
    fake.add_user("alice")
    fake.add_user("bob")
    fake.feeds[FeedName.ALL] = [make_song("s1"), make_song("s2"), make_song("s3")]
    fake.feeds[FeedName.CONTENT_BASED] = [make_song("s2")]
    fake.feeds[FeedName.USER_BASED] = [make_song("s3")]
    fake.feeds[FeedName.POPULAR] = [make_song("s1"), make_song("s3")]
    return fake


@pytest.fixture
def storage() -> InMemorySessionStorage:
    return InMemorySessionStorage()


@pytest.fixture
def session_store(storage) -> SessionStore:
    return SessionStore(storage)


@pytest.fixture
def controller(api, session_store):
    return build_session_controller(
        api,
        session_store,
        notification_ttl_sec=0.05,
        debounce_sec=0.02,
        min_length=2,
    )


@pytest.fixture
def pushed(controller) -> List[Notification]:
    """Усі сповіщення, показані за час тесту (без очищень)."""
    log: List[Notification] = []
    controller.notifications.add_listener(lambda n: log.append(n) if n is not None else None)
    return log
