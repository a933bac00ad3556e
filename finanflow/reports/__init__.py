"""Reports package: CSV and printable HTML exports."""

from finanflow.reports.export import (
    CSV_HEADERS,
    export_filename,
    to_csv,
    to_html_report,
)

__all__ = ["CSV_HEADERS", "export_filename", "to_csv", "to_html_report"]
