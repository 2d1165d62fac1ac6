import pytest

from unwrapped_stats.services.analyzer import StreamingHistoryAnalyzer


def test_empty_analyzer() -> None:
    analyzer = StreamingHistoryAnalyzer()
    assert not analyzer.has_data
    assert analyzer.summary is None
    assert analyzer.available_years == []
    assert analyzer.year == "all"


def test_summary_is_memoized_until_inputs_change(extended_events) -> None:
    analyzer = StreamingHistoryAnalyzer(extended_events)
    first = analyzer.summary
    assert first is not None
    assert analyzer.summary is first

    analyzer.select_year(2022)
    filtered = analyzer.summary
    assert filtered is not first
    assert filtered is not None and filtered.total_streams == 1

    analyzer.select_year("2022")
    assert analyzer.summary is filtered


def test_years_stay_available_when_filter_matches_nothing(extended_events) -> None:
    analyzer = StreamingHistoryAnalyzer(extended_events, year=1999)
    assert analyzer.summary is None
    assert analyzer.available_years == [2023, 2022]


def test_load_resets_missing_year(extended_events, scenario_events) -> None:
    analyzer = StreamingHistoryAnalyzer(extended_events, year=2022)
    assert analyzer.summary is not None and analyzer.summary.total_streams == 1

    analyzer.load(scenario_events)
    assert analyzer.year == "all"
    assert analyzer.available_years == [2023]
    assert analyzer.summary is not None and analyzer.summary.total_streams == 2


def test_load_keeps_year_present_in_new_data(extended_events, scenario_events) -> None:
    analyzer = StreamingHistoryAnalyzer(extended_events, year=2023)
    analyzer.load(scenario_events)
    assert analyzer.year == 2023
    assert analyzer.summary is not None and analyzer.summary.total_streams == 2


def test_events_are_copied(scenario_events) -> None:
    analyzer = StreamingHistoryAnalyzer(scenario_events)
    scenario_events.append({"msPlayed": 1})
    assert len(analyzer.events) == 2
    assert analyzer.summary is not None and analyzer.summary.total_streams == 2


def test_invalid_year_selection(scenario_events) -> None:
    analyzer = StreamingHistoryAnalyzer(scenario_events)
    with pytest.raises(ValueError):
        analyzer.select_year("someday")
    assert analyzer.year == "all"


def test_timezone_is_read_only(scenario_events) -> None:
    analyzer = StreamingHistoryAnalyzer(scenario_events)
    with pytest.raises(AttributeError):
        analyzer.tz = None
