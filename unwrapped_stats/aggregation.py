"""Listening statistics aggregation for streaming history exports"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from unwrapped_stats.config import ALL_TIME, MS_PER_HOUR, MS_PER_MINUTE, TOP_N
from unwrapped_stats.models.events import ResolvedEvent, resolve_played_at
from unwrapped_stats.models.summary import (
    DAY_NAMES,
    DayBucket,
    HourBucket,
    MonthBucket,
    RankedEntry,
    Summary,
)

logger = logging.getLogger(__name__)

RawEvent = Mapping[str, Any]
YearFilter = Union[int, str]

UTC = timezone.utc


@dataclass
class _Tally:
    """Running totals for one artist, track or album"""
    plays: int = 0
    ms_played: int = 0

    def add(self, ms_played: int) -> None:
        self.plays += 1
        self.ms_played += ms_played


def normalize_year_filter(year_filter: YearFilter) -> Optional[int]:
    """
    Convert a year filter to an int year, or None for the full history.

    Accepts the 'all' sentinel, an int, or a string of digits ('2023').
    """
    if isinstance(year_filter, bool):
        raise ValueError(f"Invalid year filter: {year_filter!r}")
    if isinstance(year_filter, int):
        return year_filter
    if isinstance(year_filter, str):
        text = year_filter.strip()
        if text.lower() == ALL_TIME:
            return None
        if text.isdigit():
            return int(text)
    raise ValueError(f"Invalid year filter: {year_filter!r}")


def round_one_decimal(value: float) -> float:
    """Round to one decimal with ties going up (6.25 -> 6.3), not to the even digit."""
    return float(Decimal(str(value)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


def _in_year(played_at: Optional[datetime], year: Optional[int]) -> bool:
    """Year match for a resolved timestamp; None year means all time, undated plays match only all time."""
    if year is None:
        return True
    return played_at is not None and played_at.year == year


def _years(played_ats: Iterable[Optional[datetime]]) -> List[int]:
    return sorted({played_at.year for played_at in played_ats if played_at is not None}, reverse=True)


def filter_by_year(events: Sequence[RawEvent], year_filter: YearFilter = ALL_TIME,
                   tz: Optional[tzinfo] = UTC) -> List[RawEvent]:
    """Select the events played in the given year; events without a usable timestamp never match a year."""
    year = normalize_year_filter(year_filter)
    if year is None:
        return list(events)
    return [raw for raw in events if _in_year(resolve_played_at(raw, tz), year)]


def compute_available_years(events: Iterable[RawEvent], tz: Optional[tzinfo] = UTC) -> List[int]:
    """Distinct years with at least one timestamped play, most recent first."""
    return _years(resolve_played_at(raw, tz) for raw in events)


def _rank(tallies: Dict[str, _Tally], with_hours: bool) -> Tuple[RankedEntry, ...]:
    # sorted() is stable, so ties keep first-seen order
    ranked = sorted(tallies.items(), key=lambda item: item[1].plays, reverse=True)[:TOP_N]
    return tuple(
        RankedEntry(
            name=name,
            plays=tally.plays,
            hours=round_one_decimal(tally.ms_played / MS_PER_HOUR) if with_hours else None,
        )
        for name, tally in ranked
    )


def _build_summary(selected: List[ResolvedEvent], available_years: List[int]) -> Summary:
    artists: Dict[str, _Tally] = {}
    tracks: Dict[str, _Tally] = {}
    albums: Dict[str, _Tally] = {}
    hour_counts = [0] * 24
    day_counts = [0] * 7
    month_counts: Dict[Tuple[int, int], int] = {}
    total_ms = 0
    skipped = 0

    for event in selected:
        artists.setdefault(event.artist, _Tally()).add(event.ms_played)
        tracks.setdefault(event.track_key, _Tally()).add(event.ms_played)
        albums.setdefault(event.album_key, _Tally()).add(event.ms_played)

        total_ms += event.ms_played
        if event.is_skip:
            skipped += 1

        played_at = event.played_at
        if played_at is None:
            continue
        hour_counts[played_at.hour] += 1
        # isoweekday: Monday=1 .. Sunday=7, so % 7 puts Sunday at 0
        day_counts[played_at.isoweekday() % 7] += 1
        month_key = (played_at.year, played_at.month)
        month_counts[month_key] = month_counts.get(month_key, 0) + 1

    total_streams = len(selected)
    total_minutes = total_ms // MS_PER_MINUTE
    # Hours come from the floored minutes, not from the raw milliseconds
    total_hours = total_minutes // 60

    return Summary(
        total_streams=total_streams,
        total_minutes=total_minutes,
        total_hours=total_hours,
        skip_rate=round_one_decimal(skipped / total_streams * 100),
        unique_artists=len(artists),
        unique_tracks=len(tracks),
        unique_albums=len(albums),
        top_artists=_rank(artists, with_hours=True),
        top_tracks=_rank(tracks, with_hours=False),
        top_albums=_rank(albums, with_hours=True),
        hour_data=tuple(
            HourBucket(hour=hour, label=f"{hour}:00", plays=count)
            for hour, count in enumerate(hour_counts)
        ),
        day_data=tuple(
            DayBucket(day=day, label=DAY_NAMES[day], plays=count)
            for day, count in enumerate(day_counts)
        ),
        month_data=tuple(
            MonthBucket(month=f"{year:04d}-{month:02d}", plays=month_counts[(year, month)])
            for year, month in sorted(month_counts)
        ),
        available_years=tuple(available_years),
    )


def summarize(events: Sequence[RawEvent], year_filter: YearFilter = ALL_TIME,
              tz: Optional[tzinfo] = UTC) -> Optional[Summary]:
    """
    Compute listening statistics for a streaming history.

    Args:
        events: Raw export records (mappings); never modified
        year_filter: 'all' or a calendar year
        tz: Zone used for year filtering and hour/day/month buckets (None = host local zone)

    Returns:
        Summary, or None when no event falls inside the filter
    """
    year = normalize_year_filter(year_filter)

    # Each record is resolved once; years come from the full set, stats from the selection
    resolved = [ResolvedEvent.from_raw(raw, tz) for raw in events]
    available_years = _years(event.played_at for event in resolved)
    selected = [event for event in resolved if _in_year(event.played_at, year)]

    if not selected:
        logger.info(f"No plays to summarize (events: {len(resolved)}, year: {year_filter})")
        return None

    undated = sum(1 for event in selected if event.played_at is None)
    if undated:
        logger.debug(f"{undated} plays without a usable timestamp are left out of the histograms")

    summary = _build_summary(selected, available_years)
    logger.info(
        f"Summarized {summary.total_streams} plays (year: {year_filter}): "
        f"{summary.total_minutes} minutes, {summary.unique_artists} artists, skip rate {summary.skip_rate}%"
    )
    return summary
