"""
🧪 test_music_entities.py — unit-тести доменних DTO

Перевіряє:
- Толерантний розбір пісень (_id/id, artist/artists, рядок через кому)
- Розбір профілю користувача
- Інваріант сесії: токен і користувач разом або ніяк
"""

import pytest

from musicrecs.domain.music import FeedName, PresentedView, Session, Song, UserProfile


def test_song_from_payload_accepts_mongo_style_id_and_artist_list():
    song = Song.from_payload(
        {"_id": "abc", "title": " Blue ", "artists": ["A", "B"], "genres": ["Rock", "Indie"]}
    )
    assert song == Song(id="abc", title="Blue", artists=("A", "B"), genres=("Rock", "Indie"))
    assert song.display_artists == "A, B"
    assert song.primary_genre == "Rock"


def test_song_from_payload_accepts_comma_separated_artist_and_missing_genres():
    song = Song.from_payload({"id": 7, "title": "Seven", "artist": "X, Y"})
    assert song.id == "7"
    assert song.artists == ("X", "Y")
    assert song.genres == ()
    assert song.primary_genre == "N/A"


@pytest.mark.parametrize("payload", [{"title": "no id"}, {"_id": "  "}, ["not", "a", "dict"], None])
def test_song_from_payload_rejects_malformed(payload):
    with pytest.raises(ValueError):
        Song.from_payload(payload)


def test_user_profile_round_trips_through_storage_payload():
    user = UserProfile.from_payload({"_id": "u1", "username": "alice", "name": "Alice"})
    assert user.display_name == "Alice"
    assert UserProfile.from_payload(user.to_payload()) == user


def test_user_profile_falls_back_to_username_for_display_name():
    user = UserProfile.from_payload({"id": "u1", "username": "alice"})
    assert user.display_name == "alice"


def test_user_profile_requires_username():
    with pytest.raises(ValueError):
        UserProfile.from_payload({"id": "u1"})


def test_session_requires_token_and_user_together():
    user = UserProfile(id="u1", username="alice")
    assert Session().is_authenticated is False
    assert Session(token="t", user=user).is_authenticated is True
    with pytest.raises(ValueError):
        Session(token="t")
    with pytest.raises(ValueError):
        Session(user=user)
    with pytest.raises(ValueError):
        Session(token="  ", user=user)


def test_presented_view_knows_when_it_is_search():
    assert PresentedView(feed=FeedName.SEARCH, title="x").is_search
    assert not PresentedView(feed=FeedName.POPULAR, title="x").is_search
