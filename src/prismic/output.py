"""Terminal output for the ``prismic`` command line.

Data and diagnostics never share a stream:

* **stdout** carries what a command produces (rendered HTML, plain text,
  document listings, repository metadata) so it can be piped into a file or
  another tool.
* **stderr** carries everything else: progress notes, warnings, errors and
  next-step hints.

Rendering adapts to the terminal. ``AUTO`` picks Rich highlighting when
stdout is a TTY and plain text when it is piped; ``NO_COLOR``, ``TERM=dumb``
and ``--no-color`` turn colour off everywhere.

:class:`OutputManager` holds those choices. The root callback in
:mod:`prismic.app` installs one with :func:`set_output`, and commands go
through the module-level helpers (:func:`print_html`, :func:`info`, ...).
The library itself never writes to the terminal; it logs through
:mod:`logging`.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional, Sequence

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

_THEME = "monokai"


class OutputFormat(str, Enum):
    """How command results are written to stdout."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Writes command results to stdout and diagnostics to stderr.

    Args:
        format: Result format. ``AUTO`` becomes ``RICH`` on a colour TTY and
            ``PLAIN`` otherwise.
        no_color: Never emit colour or Rich markup.
        quiet: Drop informational diagnostics (warnings and errors still
            print).
        verbose: Also print ``debug`` diagnostics.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich_terminal = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich_terminal else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # ------------------------------------------------------------------ #
    # Results (stdout)
    # ------------------------------------------------------------------ #

    def format_response(self, data: Any) -> None:
        """Write repository metadata or any other JSON-like *data*.

        Plain mode prints one ``key<TAB>value`` line per entry of a mapping
        and one tab-separated line per record of a list; nested values are
        written as compact JSON.
        """
        if self._format == OutputFormat.PLAIN:
            for line in _plain_lines(data):
                self.print_data(line)
            return
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if self._format == OutputFormat.JSON:
            self.print_data(text)
        else:
            self._highlight(text, "json")

    def print_html(self, markup: str) -> None:
        """Write rendered HTML; JSON mode wraps it as ``{"html": ...}``."""
        if self._format == OutputFormat.JSON:
            self.print_data(json.dumps({"html": markup}, indent=2, ensure_ascii=False))
        elif self._format == OutputFormat.RICH:
            self._highlight(markup, "html")
        else:
            self.print_data(markup)

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def print_table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        title: Optional[str] = None,
    ) -> None:
        """Write a listing such as search results.

        JSON mode emits one object per row keyed by *headers*; plain mode
        emits a tab-separated header line followed by the rows.
        """
        if self._format == OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
        elif self._format == OutputFormat.PLAIN:
            for row in [headers, *rows]:
                self.print_data("\t".join(row))
        else:
            table = Table(title=title, header_style="bold cyan")
            for header in headers:
                table.add_column(header)
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    def _highlight(self, source: str, lexer: str) -> None:
        self._stdout.print(Syntax(source, lexer, theme=_THEME, word_wrap=True))

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        if not self._quiet:
            self._diagnose(message, message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._diagnose(message, f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        """Always shown, even with ``--quiet``."""
        self._diagnose(f"Warning: {message}", f"[yellow]Warning:[/yellow] {message}")

    def error(self, message: str) -> None:
        """Always shown, even with ``--quiet``."""
        self._diagnose(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def suggest(self, message: str) -> None:
        """Hint at the next command to run, e.g. the following search page."""
        if not self._quiet:
            self._diagnose(f"→ {message}", f"[dim]→ {message}[/dim]")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnose(f"[debug] {message}", f"[dim]\\[debug] {message}[/dim]")

    def _diagnose(self, plain: str, styled: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(styled)


def _plain_lines(data: Any) -> list[str]:
    if isinstance(data, dict):
        return [f"{key}\t{_plain_value(value)}" for key, value in data.items()]
    if isinstance(data, list):
        return [
            "\t".join(_plain_value(v) for v in item.values())
            if isinstance(item, dict)
            else _plain_value(item)
            for item in data
        ]
    return [_plain_value(data)]


def _plain_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """``NO_COLOR`` (any value, even empty) or ``TERM=dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_html(markup: str) -> None:
    get_output().print_html(markup)


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def error(message: str) -> None:
    get_output().error(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def debug(message: str) -> None:
    get_output().debug(message)
