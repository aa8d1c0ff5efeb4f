"""
Output formatter for CLI commands.

This module provides consistent formatting for CLI output,
including result tables, JSON, and error and info panels.
"""

import json
from typing import Any, Dict, List, Optional, Union

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from tabulate import tabulate

from ...views.results_view import (
    EmptyView,
    ErrorView,
    IdleView,
    LoadingView,
    ResultListView,
    ResultsView
)

MAX_DESCRIPTION_LENGTH = 60


def _shorten(value: Any, limit: int = MAX_DESCRIPTION_LENGTH) -> str:
    text = "" if value is None else str(value)
    return text if len(text) <= limit else text[:limit - 3] + "..."


class OutputFormatter:
    """
    Formatter for CLI command output.

    With rich enabled, methods return renderables for the console;
    otherwise they return plain strings built with tabulate.
    """

    def __init__(self, use_rich: bool = True, console: Optional[Console] = None):
        """
        Initialize the formatter.

        Args:
            use_rich: Whether to use rich formatting
            console: Console to print to, created when omitted
        """
        self.use_rich = use_rich
        self.console = (console or Console()) if use_rich else None

    def format_table(
        self,
        data: List[Dict[str, Any]],
        headers: Optional[List[str]] = None,
        title: Optional[str] = None
    ) -> Union[str, Table]:
        """
        Format data as a table.

        Args:
            data: List of dictionaries containing row data
            headers: Optional list of header names
            title: Optional table title

        Returns:
            Union[str, Table]: Formatted table
        """
        if not data:
            return "No data to display"

        columns = headers or list(data[0].keys())

        if self.use_rich:
            table = Table(title=title) if title else Table()
            for column in columns:
                table.add_column(column)
            for row in data:
                table.add_row(*[Text(str(row.get(key, ""))) for key in columns])
            return table

        rendered = tabulate(
            [[row.get(key, "") for key in columns] for row in data],
            headers=columns,
            tablefmt="grid"
        )
        return f"{title}\n{rendered}" if title else rendered

    def format_json(
        self,
        data: Union[Dict[str, Any], List[Any]],
        pretty: bool = True
    ) -> str:
        """
        Format data as JSON.

        Args:
            data: Data to format
            pretty: Whether to pretty print

        Returns:
            str: Formatted JSON
        """
        if pretty:
            return json.dumps(data, indent=2, ensure_ascii=False, default=str)
        return json.dumps(data, ensure_ascii=False, default=str)

    def format_error(
        self,
        message: str,
        details: Optional[str] = None
    ) -> Union[str, Panel]:
        """
        Format error message.

        Args:
            message: Error message
            details: Optional error details

        Returns:
            Union[str, Panel]: Formatted error
        """
        if self.use_rich:
            error_text = Text(message, style="bold red")
            if details:
                error_text.append("\n" + details, style="red")
            return Panel(error_text, title="Error", border_style="red")
        if details:
            return f"Error: {message}\n{details}"
        return f"Error: {message}"

    def format_info(
        self,
        message: str,
        details: Optional[str] = None
    ) -> Union[str, Panel]:
        """Format an informational message."""
        if self.use_rich:
            info_text = Text(message, style="bold")
            if details:
                info_text.append("\n" + details)
            return Panel(info_text, border_style="blue")
        if details:
            return f"{message}\n{details}"
        return message

    def format_view(self, view: ResultsView) -> Union[str, Table, Panel]:
        """
        Format a results view model.

        Args:
            view: View model selected for the current state

        Returns:
            Union[str, Table, Panel]: Renderable for the view
        """
        if isinstance(view, LoadingView):
            return self.format_info(f'Searching for "{view.query}"...')

        if isinstance(view, ErrorView):
            details = f"Query: {view.query}" if view.query else None
            return self.format_error(view.message, details)

        if isinstance(view, EmptyView):
            details = None
            if view.suggestions:
                details = "Try: " + ", ".join(view.suggestions)
            return self.format_info(f'No results found for "{view.query}"', details)

        if isinstance(view, ResultListView):
            rows = [
                {
                    "ID": item.id,
                    "Title": item.title,
                    "Description": _shorten(item.description),
                    "Price": "" if item.price is None else item.price,
                    "Rating": "" if item.rating is None else item.rating,
                    "Category": item.category or ""
                }
                for item in view.page.items
            ]
            return self.format_table(rows, title=self._results_title(view))

        if isinstance(view, IdleView):
            return self.format_info("No search in progress")

        raise TypeError(f"Unknown view: {type(view).__name__}")

    @staticmethod
    def _results_title(view: ResultListView) -> str:
        title = (
            f'{view.total_results} results for "{view.query}" '
            f"(page {view.page.page}/{view.page.total_pages}, sorted by {view.sort.value})"
        )
        if view.processing_time is not None:
            title += f" in {view.processing_time:.2f}s"
        return title

    def print(
        self,
        content: Any,
        style: Optional[str] = None
    ) -> None:
        """
        Print content with optional styling.

        Args:
            content: Content to print
            style: Optional style
        """
        if self.use_rich:
            if style:
                self.console.print(content, style=style)
            else:
                self.console.print(content)
        else:
            print(content)

    def print_raw(self, text: str) -> None:
        """Print text without markup processing or wrapping."""
        if self.use_rich:
            self.console.print(text, markup=False, highlight=False, soft_wrap=True)
        else:
            print(text)
