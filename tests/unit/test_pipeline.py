"""Tests for the filter/sort/truncate pipeline."""

from datetime import date

import pytest
from pydantic import ValidationError

from gh_activity.pipeline import PipelineOptions, process


@pytest.fixture
def sample(make_event):
    return [
        make_event("A", "2024-01-01T00:00:00Z", repo="r/1"),
        make_event("B", "2024-01-03T00:00:00Z", repo="r/3"),
        make_event("A", "2024-01-02T00:00:00Z", repo="r/2"),
    ]


def describe_process():
    def it_filters_before_sorting(sample):
        result = process(sample, PipelineOptions(filter_type="A", sort_key="date"))

        assert [(e.type, e.repository_name) for e in result] == [("A", "r/2"), ("A", "r/1")]

    def it_truncates_last(sample):
        result = process(sample, PipelineOptions(filter_type="A", sort_key="date", limit=1))

        assert [e.repository_name for e in result] == ["r/2"]

    def it_passes_everything_through_without_options(sample):
        assert process(sample) == sample
        assert process(sample, PipelineOptions()) == sample

    def it_does_not_mutate_the_input(sample):
        original = list(sample)

        result = process(sample, PipelineOptions(sort_key="date", limit=1))

        assert sample == original
        assert result is not sample

    def it_matches_type_exactly(make_event):
        events = [make_event("PushEvent"), make_event("pushevent"), make_event("PushEvents")]

        result = process(events, PipelineOptions(filter_type="PushEvent"))

        assert [e.type for e in result] == ["PushEvent"]

    def it_treats_a_blank_filter_as_no_filter(sample):
        assert process(sample, PipelineOptions(filter_type="")) == sample

    def it_sorts_by_type_ascending(make_event):
        events = [make_event("WatchEvent"), make_event("ForkEvent"), make_event("PushEvent")]

        result = process(events, PipelineOptions(sort_key="type"))

        assert [e.type for e in result] == ["ForkEvent", "PushEvent", "WatchEvent"]

    def it_sorts_unparsable_dates_as_oldest(make_event):
        events = [
            make_event("A", "garbage", repo="r/bad"),
            make_event("A", None, repo="r/missing"),
            make_event("A", "2024-01-02T00:00:00Z", repo="r/new"),
            make_event("A", "2023-12-31T23:59:59Z", repo="r/old"),
        ]

        result = process(events, PipelineOptions(sort_key="date"))

        assert [e.repository_name for e in result] == ["r/new", "r/old", "r/bad", "r/missing"]

    def it_keeps_api_order_for_equal_dates(make_event):
        events = [make_event("A", "2024-01-01T00:00:00Z", repo=f"r/{i}") for i in range(4)]

        result = process(events, PipelineOptions(sort_key="date"))

        assert [e.repository_name for e in result] == ["r/0", "r/1", "r/2", "r/3"]

    def it_allows_a_zero_limit(sample):
        assert process(sample, PipelineOptions(limit=0)) == []

    def it_rejects_negative_limits():
        with pytest.raises(ValidationError):
            PipelineOptions(limit=-1)

    def it_rejects_unknown_sort_keys():
        with pytest.raises(ValidationError):
            PipelineOptions(sort_key="size")


def describe_date_window():
    def it_keeps_whole_days_inclusively(sample):
        options = PipelineOptions(from_date=date(2024, 1, 2), to_date=date(2024, 1, 3))

        result = process(sample, options)

        assert [e.repository_name for e in result] == ["r/3", "r/2"]

    def it_supports_open_ended_windows(sample):
        assert len(process(sample, PipelineOptions(from_date=date(2024, 1, 3)))) == 1
        assert len(process(sample, PipelineOptions(to_date=date(2024, 1, 1)))) == 1

    def it_drops_undated_events_only_when_windowed(make_event):
        events = [make_event("A", "garbage"), make_event("A", "2024-01-02T10:00:00Z")]

        assert len(process(events)) == 2
        assert len(process(events, PipelineOptions(from_date=date(2024, 1, 1)))) == 1
