"""Write processed events to json, csv or markdown files."""

import json
import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from gh_activity.errors.exceptions import UnsupportedFormat
from gh_activity.formatting import format_activity, time_ago
from gh_activity.models.events import EventRecord

logger = logging.getLogger(__name__)

CSV_HEADER = "Event Type, Repository, Details, Timestamp"


class ExportFormat(Enum):
    """Supported export formats."""

    JSON = "json"
    CSV = "csv"
    MARKDOWN = "md"

    @classmethod
    def parse(cls, value: "str | ExportFormat") -> "ExportFormat":
        """Resolve a format name, raising UnsupportedFormat for anything else."""
        if isinstance(value, ExportFormat):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError as e:
            raise UnsupportedFormat(value) from e


class ActivityExporter:
    """Render events and write them to activities.<format>."""

    def __init__(self, output_dir: Path | None = None) -> None:
        """Initialize the exporter.

        Args:
            output_dir: Directory for written artifacts (defaults to cwd)
        """
        self.output_dir = output_dir or Path.cwd()

        template_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
        )

    def render(
        self,
        events: Sequence[EventRecord],
        fmt: "str | ExportFormat",
        now: datetime | None = None,
    ) -> str:
        """Render events in the given format without writing anything."""
        export_format = ExportFormat.parse(fmt)
        now = now or datetime.now(UTC)

        if export_format is ExportFormat.JSON:
            return self._render_json(events)
        if export_format is ExportFormat.CSV:
            return self._render_csv(events, now)
        return self._render_markdown(events, now)

    def export(
        self,
        events: Sequence[EventRecord],
        fmt: "str | ExportFormat",
        now: datetime | None = None,
    ) -> Path:
        """Write events to activities.<format> and return the written path."""
        export_format = ExportFormat.parse(fmt)
        content = self.render(events, export_format, now)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.output_dir / f"activities.{export_format.value}"
        file_path.write_text(content, encoding="utf-8")

        logger.info(f"Exported {len(events)} events to {file_path}")
        return file_path

    def _render_json(self, events: Sequence[EventRecord]) -> str:
        return json.dumps([event.to_api_dict() for event in events], indent=2, ensure_ascii=False)

    def _render_csv(self, events: Sequence[EventRecord], now: datetime) -> str:
        # Plain comma-joined fields, commas inside values are not escaped
        rows = [
            ", ".join(
                [
                    event.type,
                    event.repository_name,
                    format_activity(event),
                    time_ago(event.created_at, now),
                ]
            )
            for event in events
        ]
        return "\n".join([CSV_HEADER, *rows])

    def _render_markdown(self, events: Sequence[EventRecord], now: datetime) -> str:
        template = self.env.get_template("activities.md.j2")
        rows = [
            {
                "type": event.type,
                "details": format_activity(event),
                "repo": event.repository_name,
                "when": time_ago(event.created_at, now),
            }
            for event in events
        ]
        return template.render(rows=rows)


def export_events(
    events: Sequence[EventRecord],
    fmt: "str | ExportFormat",
    output_dir: Path | None = None,
    now: datetime | None = None,
) -> Path:
    """Write events to output_dir/activities.<fmt>."""
    return ActivityExporter(output_dir).export(events, fmt, now)
