"""Output rendering and formatting utilities.

This module renders command results as Rich tables, JSON or YAML.
Pydantic models are converted to plain data before rendering.
"""

import sys
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table
from rich import box

from .exceptions import OutputFormatError

FORMATS = ("table", "json", "yaml")


def to_plain(data: Any) -> Any:
    """Convert models (or lists/dicts of them) to JSON-compatible data."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, (list, tuple)):
        return [to_plain(item) for item in data]
    if isinstance(data, dict):
        return {key: to_plain(value) for key, value in data.items()}
    return data


class OutputFormatter:
    """Main output formatter that handles multiple output formats."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize output formatter.

        Args:
            console: Rich console instance. If None, creates a new one.
        """
        self.console = console or Console()

    def determine_format(self, format_override: Optional[str] = None) -> str:
        """Determine the output format to use.

        Args:
            format_override: Explicit format override

        Returns:
            Format name (table, json, yaml)
        """
        if format_override:
            return format_override.lower()

        env_format = os.environ.get("CFBLOG_OUTPUT_FORMAT")
        if env_format:
            return env_format.lower()

        # Tables for terminals, JSON when piped
        return "table" if sys.stdout.isatty() else "json"

    def render(
        self,
        data: Any,
        format: Optional[str] = None,
        columns: Optional[List[str]] = None,
        title: Optional[str] = None,
    ) -> None:
        """Render data in the specified format.

        Args:
            data: Models, dicts or lists of either
            format: Output format (table, json, yaml)
            columns: Columns shown in table output
            title: Table title

        Raises:
            OutputFormatError: For unknown formats or unserializable data
        """
        format_name = self.determine_format(format)
        plain = to_plain(data)

        if format_name == "table":
            self.render_table(plain, columns=columns, title=title)
        elif format_name == "json":
            self.render_json(plain)
        elif format_name == "yaml":
            self.render_yaml(plain)
        else:
            raise OutputFormatError(f"Unknown output format: {format_name}")

    def render_table(
        self,
        data: Union[List[Dict[str, Any]], Dict[str, Any]],
        columns: Optional[List[str]] = None,
        title: Optional[str] = None,
    ) -> None:
        """Render data as a table using Rich."""
        if not data:
            self.console.print("[dim]No data to display[/dim]")
            return

        if isinstance(data, dict):
            data = [data]

        if not columns:
            columns = []
            for item in data:
                for key in item.keys():
                    if key not in columns:
                        columns.append(key)

        table = Table(title=title, box=box.ROUNDED)
        for col in columns:
            table.add_column(col.replace("_", " ").title(), overflow="fold")

        for item in data:
            row = []
            for col in columns:
                value = item.get(col, "")
                if value is None:
                    value = ""
                elif isinstance(value, bool):
                    value = "✓" if value else "✗"
                elif isinstance(value, list):
                    value = ", ".join(str(v) for v in value)
                row.append(str(value))
            table.add_row(*row)

        self.console.print(table)

    def render_json(self, data: Any, indent: int = 2) -> None:
        """Render data as JSON."""
        try:
            output = json.dumps(data, indent=indent, ensure_ascii=False, default=str)
        except (TypeError, ValueError) as e:
            raise OutputFormatError(f"Failed to serialize data to JSON: {e}")
        self.console.print(output, markup=False, highlight=False, soft_wrap=True)

    def render_yaml(self, data: Any) -> None:
        """Render data as YAML."""
        try:
            output = yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
        except yaml.YAMLError as e:
            raise OutputFormatError(f"Failed to serialize data to YAML: {e}")
        self.console.print(output.rstrip("\n"), markup=False, highlight=False, soft_wrap=True)

    def render_to_file(self, data: Any, file_path: Union[str, Path], format: Optional[str] = None) -> None:
        """Write data to a file, picking the format from the extension."""
        file_path = Path(file_path)
        if not format:
            format = "yaml" if file_path.suffix.lower() in (".yaml", ".yml") else "json"

        plain = to_plain(data)
        if format == "yaml":
            content = yaml.safe_dump(plain, default_flow_style=False, allow_unicode=True, sort_keys=False)
        elif format == "json":
            content = json.dumps(plain, indent=2, ensure_ascii=False, default=str) + "\n"
        else:
            raise OutputFormatError(f"Unknown file format: {format}")

        with open(file_path, "w", encoding="utf-8") as f:
            f.write(content)
