"""Domain models for raw and resolved streaming history events"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Any, Mapping, Optional, Tuple

from unwrapped_stats.config import SKIP_THRESHOLD_MS

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"
KEY_SEPARATOR = " - "

# Field lookups in priority order: extended export first, then the legacy account export
TIMESTAMP_FIELDS: Tuple[str, ...] = ('ts', 'endTime')
MS_PLAYED_FIELDS: Tuple[str, ...] = ('ms_played', 'msPlayed')
TRACK_FIELDS: Tuple[str, ...] = ('master_metadata_track_name', 'trackName')
ARTIST_FIELDS: Tuple[str, ...] = ('master_metadata_album_artist_name', 'artistName')
ALBUM_FIELDS: Tuple[str, ...] = ('master_metadata_album_album_name', 'albumName')


def _first_present(raw: Mapping[str, Any], fields: Tuple[str, ...]) -> Any:
    """Return the first value that is neither missing, None nor an empty string."""
    if not isinstance(raw, Mapping):
        return None
    for name in fields:
        value = raw.get(name)
        if value is None or value == "":
            continue
        return value
    return None


def resolve_name(raw: Mapping[str, Any], fields: Tuple[str, ...]) -> str:
    value = _first_present(raw, fields)
    if value is None:
        return UNKNOWN
    return value if isinstance(value, str) else str(value)


def resolve_track(raw: Mapping[str, Any]) -> str:
    return resolve_name(raw, TRACK_FIELDS)


def resolve_artist(raw: Mapping[str, Any]) -> str:
    return resolve_name(raw, ARTIST_FIELDS)


def resolve_album(raw: Mapping[str, Any]) -> str:
    return resolve_name(raw, ALBUM_FIELDS)


def resolve_ms_played(raw: Mapping[str, Any]) -> int:
    """Played milliseconds, 0 when absent or invalid"""
    value = _first_present(raw, MS_PLAYED_FIELDS)
    if value is None or isinstance(value, bool):
        return 0
    try:
        return max(0, value if isinstance(value, int) else int(float(value)))
    except (ValueError, TypeError, OverflowError):
        logger.debug(f"Invalid ms_played value {value!r}, treating as 0")
        return 0


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an export timestamp to a timezone-aware datetime (naive values are UTC)"""
    if value is None or value == "":
        return None
    try:
        if isinstance(value, datetime):
            dt = value
        elif isinstance(value, str):
            text = value.strip()
            if text.endswith('Z'):
                text = text[:-1] + '+00:00'
            dt = datetime.fromisoformat(text)
        else:
            logger.debug(f"Unexpected type for timestamp: {type(value)}")
            return None
        if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt
    except (ValueError, TypeError) as e:
        logger.debug(f"Could not parse timestamp value: {value!r}. Error: {e}")
        return None


def resolve_played_at(raw: Mapping[str, Any], tz: Optional[tzinfo] = timezone.utc) -> Optional[datetime]:
    """Timestamp of the event converted to the reporting zone (None = host local zone)"""
    dt = parse_timestamp(_first_present(raw, TIMESTAMP_FIELDS))
    if dt is None:
        return None
    try:
        return dt.astimezone(tz)
    except (OverflowError, ValueError, OSError) as e:
        # Dates at the edge of the supported range cannot always be shifted
        logger.debug(f"Could not convert timestamp {dt.isoformat()} to reporting zone: {e}")
        return None


@dataclass(frozen=True)
class ResolvedEvent:
    """A single play with every field resolved through its fallback chain"""
    track: str
    artist: str
    album: str
    ms_played: int
    played_at: Optional[datetime]

    @property
    def track_key(self) -> str:
        return f"{self.track}{KEY_SEPARATOR}{self.artist}"

    @property
    def album_key(self) -> str:
        return f"{self.album}{KEY_SEPARATOR}{self.artist}"

    @property
    def is_skip(self) -> bool:
        return self.ms_played < SKIP_THRESHOLD_MS

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any], tz: Optional[tzinfo] = timezone.utc) -> "ResolvedEvent":
        return cls(
            track=resolve_track(raw),
            artist=resolve_artist(raw),
            album=resolve_album(raw),
            ms_played=resolve_ms_played(raw),
            played_at=resolve_played_at(raw, tz),
        )
