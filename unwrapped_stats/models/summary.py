"""Summary model definitions"""
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DAY_NAMES = ('Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat')


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class RankedEntry(_Frozen):
    """One row of a top-N list"""
    name: str = Field(description="Display name (track/album names carry their artist)")
    plays: int = Field(description="Number of plays")
    hours: Optional[float] = Field(None, description="Listening hours, one decimal (artists and albums only)")


class HourBucket(_Frozen):
    hour: int
    label: str
    plays: int = 0


class DayBucket(_Frozen):
    day: int = Field(description="0 = Sunday")
    label: str
    plays: int = 0


class MonthBucket(_Frozen):
    month: str = Field(description="Zero-padded YYYY-MM key")
    plays: int = 0


class Summary(_Frozen):
    """
    Aggregate statistics over a (possibly year-filtered) streaming history.

    Every field is computed from the filtered events except available_years,
    which always reflects the full history so a year picker can be populated
    regardless of the active filter.

    Totals:
        total_streams: number of plays
        total_minutes: floor of played milliseconds / 60000
        total_hours: floor of total_minutes / 60
        skip_rate: percentage of plays under 30 seconds, one decimal

    Rankings (at most 20 entries, most played first):
        top_artists, top_tracks, top_albums

    Histograms:
        hour_data: 24 buckets, hour of day
        day_data: 7 buckets, Sunday first
        month_data: one bucket per month with plays, oldest first
    """
    total_streams: int
    total_minutes: int
    total_hours: int
    skip_rate: float
    unique_artists: int
    unique_tracks: int
    unique_albums: int
    top_artists: Tuple[RankedEntry, ...] = ()
    top_tracks: Tuple[RankedEntry, ...] = ()
    top_albums: Tuple[RankedEntry, ...] = ()
    hour_data: Tuple[HourBucket, ...] = ()
    day_data: Tuple[DayBucket, ...] = ()
    month_data: Tuple[MonthBucket, ...] = ()
    available_years: Tuple[int, ...] = ()

    def to_json_dict(self) -> Dict[str, Any]:
        """camelCase dictionary consumed by the presentation layer"""
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)
