"""
🧪 test_api_client.py — HTTP-транспорт і фасад бекенду (httpx.MockTransport)

Перевіряє:
- Автопідстановку Bearer-токена в момент запиту
- Конвертацію 401 / інших статусів / мережевих збоїв / не-JSON у доменні помилки
- Шляхи й тіла запитів MusicApi та толерантний розбір відповідей
- Екранування id пісні в шляху
"""

import json

import httpx
import pytest

from musicrecs.config.setup.constants import CONST
from musicrecs.domain.music import FeedName
from musicrecs.errors import AuthRejectedError, TransportError
from musicrecs.infrastructure.api import ApiClient, MusicApi

BASE = "http://backend.test/api"


def make_client(handler, token=None):
    state = {"token": token}
    client = ApiClient(
        BASE,
        token_provider=lambda: state["token"],
        transport=httpx.MockTransport(handler),
    )
    return client, state


@pytest.mark.asyncio
async def test_bearer_token_is_read_at_request_time():
    seen = []

    def handler(request):
        seen.append(request.headers.get("Authorization"))
        return httpx.Response(200, json=[])

    client, state = make_client(handler)
    await client.get("/songs")
    state["token"] = "abc"
    await client.get("/songs")
    await client.aclose()

    assert seen == [None, "Bearer abc"]


@pytest.mark.asyncio
async def test_401_becomes_auth_rejected_with_server_message():
    client, _ = make_client(lambda r: httpx.Response(401, json={"message": "Token expired"}), token="t")

    with pytest.raises(AuthRejectedError) as exc_info:
        await client.get("/me/likes")
    await client.aclose()

    assert exc_info.value.message == "Token expired"
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_other_status_becomes_transport_error():
    client, _ = make_client(lambda r: httpx.Response(503, text="unavailable"))

    with pytest.raises(TransportError) as exc_info:
        await client.get("/songs")
    await client.aclose()

    assert not isinstance(exc_info.value, AuthRejectedError)
    assert exc_info.value.status_code == 503
    assert exc_info.value.message == CONST.MSG.CONNECTION_ERROR


@pytest.mark.asyncio
async def test_connection_failure_and_timeout():
    def refuse(request):
        raise httpx.ConnectError("refused", request=request)

    def slow(request):
        raise httpx.ReadTimeout("slow", request=request)

    client, _ = make_client(refuse)
    with pytest.raises(TransportError) as refused:
        await client.get("/songs")
    await client.aclose()

    client, _ = make_client(slow)
    with pytest.raises(TransportError) as timed_out:
        await client.get("/songs")
    await client.aclose()

    assert refused.value.message == CONST.MSG.CONNECTION_ERROR
    assert timed_out.value.message == CONST.MSG.HTTP_TIMEOUT


@pytest.mark.asyncio
async def test_non_json_body_is_unexpected_response():
    client, _ = make_client(lambda r: httpx.Response(200, text="<html>"))

    with pytest.raises(TransportError) as exc_info:
        await client.get("/songs")
    await client.aclose()

    assert exc_info.value.message == CONST.MSG.UNEXPECTED_RESPONSE


@pytest.mark.asyncio
async def test_music_api_paths_and_payloads():
    requests = []

    def handler(request):
        requests.append(request)
        path = request.url.path
        if path.endswith("/auth/login"):
            return httpx.Response(
                200, json={"token": "tok", "user": {"_id": "u1", "username": "alice", "name": "Alice"}}
            )
        if path.endswith("/interact"):
            return httpx.Response(200, json={"ok": True})
        return httpx.Response(
            200,
            json=[
                {"_id": "s1", "title": "One", "artist": ["A"], "genres": ["Pop"]},
                {"title": "broken"},
            ],
        )

    client, _ = make_client(handler)
    api = MusicApi(client)

    token, user = await api.login("alice", "pw")
    popular = await api.fetch_feed(FeedName.POPULAR)
    found = await api.search("rock n roll")
    await api.like("s1")
    await client.aclose()

    assert token == "tok" and user.display_name == "Alice"
    assert [s.id for s in popular] == ["s1"]  # зламаний запис пропущено
    assert [s.id for s in found] == ["s1"]

    paths = [r.url.path for r in requests]
    assert paths == ["/api/auth/login", "/api/recs/popular", "/api/songs/search", "/api/songs/s1/interact"]
    assert json.loads(requests[0].content) == {"username": "alice", "password": "pw"}
    assert requests[2].url.params["q"] == "rock n roll"
    assert json.loads(requests[3].content) == {"action": "like"}


@pytest.mark.asyncio
async def test_music_api_rejects_unexpected_shapes():
    client, _ = make_client(lambda r: httpx.Response(200, json={"songs": []}))
    api = MusicApi(client)

    with pytest.raises(TransportError):
        await api.fetch_feed(FeedName.ALL)
    with pytest.raises(TransportError):
        await api.login("alice", "pw")
    with pytest.raises(ValueError):
        await api.fetch_feed(FeedName.SEARCH)
    await client.aclose()


@pytest.mark.asyncio
async def test_like_escapes_song_id_in_path():
    raw_paths = []

    def handler(request):
        raw_paths.append(request.url.raw_path)
        return httpx.Response(200, json={"ok": True})

    client, _ = make_client(handler)
    await MusicApi(client).like("a/b?c#d")
    await client.aclose()

    assert raw_paths == [b"/api/songs/a%2Fb%3Fc%23d/interact"]
