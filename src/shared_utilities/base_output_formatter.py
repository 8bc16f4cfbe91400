"""
Base output formatter for multi-format output generation.

This module provides a base class for output formatting that supports:
- Human-readable formats (markdown, table)
- Machine-readable formats (json)
- A consistent format/save interface across tools
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class OutputFormat:
    """Enumeration of supported output formats."""

    MARKDOWN = "markdown"
    JSON = "json"
    TABLE = "table"

    @classmethod
    def choices(cls) -> list[str]:
        return [cls.MARKDOWN, cls.JSON, cls.TABLE]


class BaseOutputFormatter(ABC):
    """
    Abstract base class for all output formatters.

    Provides a consistent interface and common functionality for formatting
    data into various output formats.
    """

    def __init__(self):
        """Initialize the formatter with format handlers."""
        self._format_handlers = {
            OutputFormat.MARKDOWN: self._format_markdown,
            OutputFormat.JSON: self._format_json,
            OutputFormat.TABLE: self._format_table,
        }

    def format(
        self, data: dict[str, Any], format_type: str = OutputFormat.MARKDOWN, **kwargs
    ) -> str:
        """
        Format data according to the specified format type.

        Args:
            data: Data to format
            format_type: Output format type
            **kwargs: Additional format-specific options

        Returns:
            Formatted string output
        """
        handler = self._format_handlers.get(format_type)
        if not handler:
            raise ValueError(f"Unsupported format type: {format_type}")

        return handler(data, **kwargs)

    def save(
        self,
        data: dict[str, Any],
        output_path: str | Path,
        format_type: str = OutputFormat.MARKDOWN,
        **kwargs,
    ) -> None:
        """
        Save formatted data to a file.

        Args:
            data: Data to save
            output_path: Path to save the file
            format_type: Output format type
            **kwargs: Additional format-specific options
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.format(data, format_type, **kwargs), encoding="utf-8")

    @abstractmethod
    def _format_markdown(self, data: dict[str, Any], **kwargs) -> str:
        """Format data as Markdown."""
        pass

    @abstractmethod
    def _format_table(self, data: dict[str, Any], **kwargs) -> str:
        """Format data as a human-readable table."""
        pass

    def _format_json(self, data: dict[str, Any], **kwargs) -> str:
        """Format data as JSON."""
        indent = kwargs.get("indent", 2)
        sort_keys = kwargs.get("sort_keys", False)
        return json.dumps(data, indent=indent, sort_keys=sort_keys, default=str)


class TableFormatter:
    """Helper class for creating formatted tables."""

    @staticmethod
    def create_table(
        headers: list[str],
        rows: list[list[str]],
        column_widths: list[int] | None = None,
        alignment: str = "left",
    ) -> str:
        """
        Create a formatted text table.

        Args:
            headers: Column headers
            rows: Data rows
            column_widths: Optional fixed column widths
            alignment: Text alignment (left, center, right)

        Returns:
            Formatted table as string
        """
        if not column_widths:
            column_widths = [len(h) for h in headers]
            for row in rows:
                for i, cell in enumerate(row):
                    column_widths[i] = max(column_widths[i], len(str(cell)))

        if alignment == "center":
            formats = [f"{{:^{w}}}" for w in column_widths]
        elif alignment == "right":
            formats = [f"{{:>{w}}}" for w in column_widths]
        else:  # left
            formats = [f"{{:<{w}}}" for w in column_widths]

        lines = []

        header_row = " | ".join(
            fmt.format(h) for fmt, h in zip(formats, headers, strict=False)
        )
        lines.append(header_row)
        lines.append("-" * len(header_row))

        for row in rows:
            row_str = " | ".join(
                fmt.format(str(cell)) for fmt, cell in zip(formats, row, strict=False)
            )
            lines.append(row_str)

        return "\n".join(lines)
