"""Song Schema: optional parsing and row shaping."""

from melodify.schemas.playlist import PlaylistCreate
from melodify.schemas.song import SongCreate


def test_to_row_omits_unset_fields():
    song = SongCreate(title="T", artist="A", audio_url="u", cover_url="c")
    assert song.to_row() == {
        "title": "T", "artist": "A", "audio_url": "u", "cover_url": "c",
    }


def test_optional_fields_are_kept_when_set():
    song = SongCreate(
        title="T", artist="A", audio_url="u", cover_url="c",
        album="Al", genre="Pop", reel_audio_url="r", lyrics="la la",
    )
    row = song.to_row()
    assert row["reel_audio_url"] == "r"
    assert row["lyrics"] == "la la"


def test_empty_body_parses():
    assert SongCreate().to_row() == {}


def test_playlist_name_is_stripped():
    assert PlaylistCreate(name="  Road trip ").name == "Road trip"
