"""Export sinks for processed activity."""

from gh_activity.export.exporter import ActivityExporter, ExportFormat, export_events

__all__ = ["ActivityExporter", "ExportFormat", "export_events"]
