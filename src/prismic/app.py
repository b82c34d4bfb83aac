"""The ``prismic`` command line: root options and command registration.

Commands:

* ``info`` -- refs, bookmarks, types, tags and forms of a repository.
* ``search`` -- list the documents matching a form and its predicates.
* ``render`` -- print a document, or one of its fields, as HTML or text.
* ``config`` -- show, edit and reset the user configuration.

:func:`main` is the console-script entry point. A
:class:`~prismic.exceptions.PrismicError` that escapes a command exits with
its ``exit_code``; any other exception leaves a traceback in
``<data dir>/logs/`` and exits with :data:`~prismic.exit_codes.EXIT_GENERIC_FAILURE`.
"""

from __future__ import annotations

import logging
import os
import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import typer

from prismic import __version__
from prismic.commands.config import config_app
from prismic.commands.content import info_command, render_command, search_command
from prismic.exceptions import PrismicError
from prismic.exit_codes import EXIT_GENERIC_FAILURE
from prismic.output import OutputFormat, OutputManager, error, set_output

EXIT_CANCELLED = 130

app = typer.Typer(
    name="prismic",
    help="Query a prismic.io repository and render its documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)
app.command("info")(info_command)
app.command("search")(search_command)
app.command("render")(render_command)
app.add_typer(config_app, name="config", help="Show or edit the user configuration.")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"prismic {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Print the version and exit.",
    ),
    api_url: Optional[str] = typer.Option(
        None, "--api-url", help="API endpoint, e.g. https://repo.prismic.io/api."
    ),
    token: Optional[str] = typer.Option(
        None, "--token", help="Access token for a private repository."
    ),
    json_output: bool = typer.Option(False, "--json", help="Write results as JSON."),
    plain_output: bool = typer.Option(False, "--plain", help="Write results as plain text."),
    no_color: bool = typer.Option(False, "--no-color", help="Never use colour."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print results and errors."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print debug details and logs."),
) -> None:
    """Set up output and logging, and hand the connection flags to the command.

    ``--api-url`` and ``--token`` win over every other configuration source
    (see :func:`~prismic.config.resolve_config`). Commands read them, along
    with the output flags, from ``ctx.obj``.
    """
    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    _configure_logging(verbose)

    ctx.obj = {
        "api_url": api_url,
        "token": token,
        "format": None if fmt == OutputFormat.AUTO else fmt.value,
        "no_color": no_color,
        "quiet": quiet,
        "verbose": verbose,
    }


def _configure_logging(verbose: bool) -> None:
    """Route library log records to stderr: everything with -v, warnings otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _exit_on_interrupt(signum: int, frame: Any) -> None:
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_CANCELLED)


def _write_crash_log(exc: BaseException) -> Path:
    from prismic.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    path = logs_dir / f"crash-{stamp}-{os.getpid()}.log"
    path.write_text("".join(traceback.format_exception(exc)), encoding="utf-8")
    return path


def main() -> None:
    """Run the ``prismic`` command line; always ends in ``SystemExit``."""
    signal.signal(signal.SIGINT, _exit_on_interrupt)
    try:
        app()
    except PrismicError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error. Traceback saved to {_write_crash_log(exc)}")
        sys.exit(EXIT_GENERIC_FAILURE)
