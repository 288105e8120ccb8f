"""Tests for the export sink."""

import json
from datetime import UTC, datetime

import pytest

from gh_activity.errors.exceptions import UnsupportedFormat
from gh_activity.export.exporter import CSV_HEADER, ActivityExporter, ExportFormat, export_events

NOW = datetime(2024, 3, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def events(make_event):
    return [
        make_event(
            "PushEvent",
            "2024-03-15T11:00:00Z",
            repo="octocat/hello-world",
            payload={"commits": [{"message": "a"}, {"message": "b"}]},
            id="1",
        ),
        make_event("WatchEvent", "2024-03-13T12:00:00Z", repo="octocat/spoon-knife", id="2"),
    ]


@pytest.fixture
def exporter(tmp_path):
    return ActivityExporter(tmp_path)


def describe_export_format():
    @pytest.mark.parametrize("value", ["json", "csv", "md", " JSON "])
    def it_parses_supported_names(value):
        assert ExportFormat.parse(value).value == value.strip().lower()

    @pytest.mark.parametrize("value", ["xml", "markdown", ""])
    def it_rejects_everything_else(value):
        with pytest.raises(UnsupportedFormat):
            ExportFormat.parse(value)


class DescribeActivityExporter:
    """Tests for rendering and writing artifacts."""

    def it_writes_raw_records_as_json(self, exporter, events, tmp_path):
        path = exporter.export(events, "json", NOW)

        assert path == tmp_path / "activities.json"
        assert json.loads(path.read_text()) == [event.to_api_dict() for event in events]

    def it_produces_identical_json_on_repeat(self, exporter, events):
        first = exporter.export(events, "json").read_bytes()
        second = exporter.export(events, "json").read_bytes()

        assert first == second

    def it_pretty_prints_json(self, exporter, events):
        assert exporter.render(events, "json").startswith("[\n  {")

    def it_writes_csv_with_header(self, exporter, events):
        lines = exporter.export(events, "csv", NOW).read_text().split("\n")

        assert lines == [
            CSV_HEADER,
            "PushEvent, octocat/hello-world, 🚀 Pushed 2 commits, 1 hours ago",
            "WatchEvent, octocat/spoon-knife, ⭐ Starred, 2 days ago",
        ]

    def it_writes_markdown_bullets(self, exporter, events):
        lines = exporter.export(events, ExportFormat.MARKDOWN, NOW).read_text().splitlines()

        assert lines == [
            "- **PushEvent**: 🚀 Pushed 2 commits in `octocat/hello-world` (1 hours ago)",
            "- **WatchEvent**: ⭐ Starred in `octocat/spoon-knife` (2 days ago)",
        ]

    def it_names_the_file_after_the_format(self, exporter, events, tmp_path):
        assert exporter.export(events, "md", NOW) == tmp_path / "activities.md"

    def it_writes_an_empty_list(self, exporter):
        assert json.loads(exporter.export([], "json").read_text()) == []
        assert exporter.render([], "csv", NOW) == CSV_HEADER

    def it_raises_and_writes_nothing_for_unknown_formats(self, exporter, events, tmp_path):
        with pytest.raises(UnsupportedFormat):
            exporter.export(events, "xml")

        assert list(tmp_path.iterdir()) == []

    def it_creates_the_output_directory(self, events, tmp_path):
        path = export_events(events, "json", tmp_path / "out" / "nested")

        assert path.exists()
