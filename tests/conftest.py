import json
from pathlib import Path

import pytest


@pytest.fixture
def scenario_events() -> list[dict[str, object]]:
    """Two plays by the same artist on New Year's morning 2023, one of them skipped."""
    return [
        {"ts": "2023-01-01T10:00:00Z", "msPlayed": 200000, "trackName": "X", "artistName": "A"},
        {"ts": "2023-01-01T10:05:00Z", "msPlayed": 10000, "trackName": "Y", "artistName": "A"},
    ]


@pytest.fixture
def extended_events() -> list[dict[str, object]]:
    """Records in the extended streaming history format spread over two years."""
    return [
        {
            "ts": "2022-12-31T23:30:00Z",
            "ms_played": 180000,
            "master_metadata_track_name": "Old Song",
            "master_metadata_album_artist_name": "Band",
            "master_metadata_album_album_name": "First Album",
        },
        {
            "ts": "2023-03-05T08:15:00Z",
            "ms_played": 240000,
            "master_metadata_track_name": "New Song",
            "master_metadata_album_artist_name": "Band",
            "master_metadata_album_album_name": "Second Album",
        },
        {
            "ts": "2023-03-06T21:00:00Z",
            "ms_played": 5000,
            "master_metadata_track_name": "Intro",
            "master_metadata_album_artist_name": "Singer",
            "master_metadata_album_album_name": "Solo",
        },
        {
            "ts": "2023-07-14T12:00:00Z",
            "ms_played": 3600000,
            "master_metadata_track_name": "New Song",
            "master_metadata_album_artist_name": "Band",
            "master_metadata_album_album_name": "Second Album",
        },
    ]


@pytest.fixture
def write_json(tmp_path: Path):
    def _write(name: str, payload: object) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
