"""Quote export functionality.

Exports the collection to CSV or Markdown. Output depends only on the
collection, so exporting the same quotes twice gives identical files.
"""

import csv
import logging
from dataclasses import dataclass
from enum import Enum
from io import StringIO
from pathlib import Path
from typing import Optional

from ..quotes.schemas import ALL_CATEGORIES, Quote, ordered_categories

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Raised when quotes cannot be exported."""


class ExportFormat(str, Enum):
    """Export format options."""

    CSV = "csv"
    MARKDOWN = "markdown"


@dataclass
class ExportResult:
    """Result of an export operation."""

    success: bool
    file_path: Optional[Path] = None
    quotes_exported: int = 0
    format: Optional[ExportFormat] = None
    error: Optional[str] = None


class QuoteExporter:
    """Exports quotes to interchange formats."""

    CSV_COLUMNS = ["text", "categories"]
    CATEGORY_SEPARATOR = ";"
    UNCATEGORISED_HEADING = "Uncategorised"

    def export(
        self,
        quotes: list[Quote],
        output_path: Path,
        format: ExportFormat = ExportFormat.CSV,
    ) -> ExportResult:
        """Export quotes to a file.

        Args:
            quotes: Quotes to export, in collection order
            output_path: Path for output file
            format: Export format to use

        Returns:
            ExportResult with success status and details
        """
        output_path = Path(output_path)
        try:
            data = self.export_to_string(quotes, format).encode("utf-8")
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "wb") as f:
                f.write(data)
        except (ExportError, OSError, ValueError) as e:
            logger.warning("Unable to export quotes to %s: %s", output_path, e)
            return ExportResult(success=False, format=format, error=str(e))

        return ExportResult(
            success=True,
            file_path=output_path,
            quotes_exported=len(quotes),
            format=format,
        )

    def export_to_string(
        self,
        quotes: list[Quote],
        format: ExportFormat = ExportFormat.CSV,
    ) -> str:
        """Render quotes in the given format.

        Raises:
            ExportError: If the format is not supported
        """
        if format == ExportFormat.CSV:
            return self._to_csv(quotes)
        elif format == ExportFormat.MARKDOWN:
            return self._to_markdown(quotes)
        raise ExportError(f"Unsupported export format: {format}")

    def _to_csv(self, quotes: list[Quote]) -> str:
        """Convert quotes to CSV rows."""
        output = StringIO()
        writer = csv.DictWriter(output, fieldnames=self.CSV_COLUMNS)
        writer.writeheader()
        for quote in quotes:
            writer.writerow({
                "text": quote.text,
                "categories": self.CATEGORY_SEPARATOR.join(
                    c.value for c in ordered_categories(quote.categories)
                ),
            })
        return output.getvalue()

    def _to_markdown(self, quotes: list[Quote]) -> str:
        """Convert quotes to a Markdown document grouped by category.

        A quote appears under every category it carries.
        """
        lines = ["# Quotes", ""]
        for category in ALL_CATEGORIES:
            matching = [q for q in quotes if category in q.categories]
            if not matching:
                continue
            lines.append(f"## {category.value.title()}")
            lines.append("")
            lines.extend(f"- {q.text}" for q in matching)
            lines.append("")

        uncategorised = [q for q in quotes if not q.categories]
        if uncategorised:
            lines.append(f"## {self.UNCATEGORISED_HEADING}")
            lines.append("")
            lines.extend(f"- {q.text}" for q in uncategorised)
            lines.append("")

        return "\n".join(lines)
