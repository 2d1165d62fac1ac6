"""Stateful holder of a loaded history and the selected year"""
import logging
from datetime import tzinfo
from typing import Iterable, List, Optional, Tuple

from unwrapped_stats.aggregation import (
    UTC,
    RawEvent,
    YearFilter,
    compute_available_years,
    normalize_year_filter,
    summarize,
)
from unwrapped_stats.config import ALL_TIME
from unwrapped_stats.models.summary import Summary

logger = logging.getLogger(__name__)


class StreamingHistoryAnalyzer:
    """
    Keeps the event set and year filter a presentation layer works with.

    The summary is recomputed synchronously whenever the events or the year
    change and memoized for the current pair, so it can never lag behind the
    selected filter.
    """

    def __init__(self, events: Iterable[RawEvent] = (), year: YearFilter = ALL_TIME,
                 tz: Optional[tzinfo] = UTC):
        self._tz = tz
        self._events: Tuple[RawEvent, ...] = tuple(events)
        self._year: Optional[int] = normalize_year_filter(year)
        self._available_years: Optional[List[int]] = None
        self._cache_key: Optional[Tuple[int, Optional[int]]] = None
        self._cached: Optional[Summary] = None
        self._generation = 0

    @property
    def tz(self) -> Optional[tzinfo]:
        return self._tz

    @property
    def events(self) -> Tuple[RawEvent, ...]:
        return self._events

    @property
    def has_data(self) -> bool:
        return bool(self._events)

    @property
    def year(self) -> YearFilter:
        return ALL_TIME if self._year is None else self._year

    @property
    def available_years(self) -> List[int]:
        if self._available_years is None:
            self._available_years = compute_available_years(self._events, tz=self.tz)
        return list(self._available_years)

    def load(self, events: Iterable[RawEvent]) -> None:
        """Replace the event set; falls back to all time when the selected year is gone"""
        self._events = tuple(events)
        self._available_years = None
        self._generation += 1
        if self._year is not None and self._year not in self.available_years:
            logger.info(f"Year {self._year} not present in the new history, showing all time")
            self._year = None
        logger.info(f"Loaded {len(self._events)} plays into analyzer")

    def select_year(self, year: YearFilter) -> None:
        self._year = normalize_year_filter(year)

    @property
    def summary(self) -> Optional[Summary]:
        key = (self._generation, self._year)
        if key != self._cache_key:
            self._cached = summarize(self._events, self.year, tz=self.tz)
            self._cache_key = key
        return self._cached
