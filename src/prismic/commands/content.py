"""Content commands -- inspect a repository, search it and render documents.

Every command resolves the effective configuration through
:func:`~prismic.config.resolve_config` (``--api-url`` and ``--token`` from
the root callback take precedence), opens an :class:`~prismic.api.Api` and
writes its data to stdout through :mod:`prismic.output`.

Errors are reported on stderr and the command exits with the
:class:`~prismic.exceptions.PrismicError` exit code.
"""

from __future__ import annotations

from typing import Optional

import typer

from prismic.api import EVERYTHING_FORM, Api
from prismic.cache import get_default_cache
from prismic.config import ResolvedConfig, resolve_config
from prismic.exceptions import ConfigError, InvalidUsageError, NotFoundError, PrismicError
from prismic.output import (
    OutputFormat,
    OutputManager,
    debug,
    error,
    format_response,
    info,
    print_data,
    print_html,
    print_table,
    set_output,
    suggest,
    warning,
)
from prismic.resolver import LinkResolver


def _resolve(ctx: typer.Context) -> ResolvedConfig:
    """Resolve configuration from the root callback options.

    Raises:
        ConfigError: If no API URL is configured anywhere.
    """
    obj = ctx.obj or {}
    resolved = resolve_config(
        cli_api_url=obj.get("api_url"),
        cli_access_token=obj.get("token"),
        cli_format=obj.get("format"),
    )
    if not resolved.config.api_url:
        raise ConfigError(
            "No API URL configured. Pass --api-url, set PRISMIC_API_URL "
            "or run: prismic config set api_url <url>"
        )

    # A format saved in config applies when no --json / --plain flag was given.
    configured = resolved.config.output.format
    if obj.get("format") is None and configured != OutputFormat.AUTO.value:
        try:
            fmt = OutputFormat(configured)
        except ValueError:
            raise ConfigError(f"Invalid output format in config: {configured}") from None
        set_output(
            OutputManager(
                format=fmt,
                no_color=obj.get("no_color", False),
                quiet=obj.get("quiet", False),
                verbose=obj.get("verbose", False),
            )
        )
    return resolved


def _open_api(resolved: ResolvedConfig) -> Api:
    """Fetch the entry document of the configured API."""
    cache = get_default_cache()
    cache.set_capacity(resolved.config.cache.capacity)
    debug(f"Fetching API entry document from {resolved.config.api_url}")
    return Api.get(
        resolved.config.api_url,
        access_token=resolved.access_token,
        cache=cache,
        config=resolved.config.request,
    )


def _fail(exc: PrismicError) -> typer.Exit:
    error(str(exc))
    return typer.Exit(code=exc.exit_code)


def info_command(ctx: typer.Context) -> None:
    """Show the refs, bookmarks, types, tags and forms of the API.

    Example::

        prismic --api-url https://lesbonneschoses.prismic.io/api info
        prismic info --json
    """
    try:
        with _open_api(_resolve(ctx)) as api:
            format_response(
                {
                    "refs": [
                        {
                            "label": ref.label,
                            "ref": ref.ref,
                            "master": ref.is_master,
                        }
                        for ref in api.refs.values()
                    ],
                    "bookmarks": api.bookmarks,
                    "types": api.types,
                    "tags": api.tags,
                    "forms": sorted(api.forms),
                }
            )
    except PrismicError as exc:
        raise _fail(exc) from None


def search_command(
    ctx: typer.Context,
    form: str = typer.Option(EVERYTHING_FORM, "--form", help="Search form name."),
    query: Optional[list[str]] = typer.Option(
        None, "--query", help="Predicate query, e.g. '[[:d = at(document.type, \"product\")]]'."
    ),
    ref: Optional[str] = typer.Option(
        None, "--ref", help="Ref label to search at (default: master)."
    ),
    orderings: Optional[str] = typer.Option(
        None, "--orderings", help="Orderings, e.g. '[my.product.price desc]'."
    ),
    page: Optional[int] = typer.Option(None, "--page", min=1, help="Page number."),
    page_size: Optional[int] = typer.Option(
        None, "--page-size", min=1, help="Results per page."
    ),
) -> None:
    """List matching documents (id, type, slug).

    Example::

        prismic search --query '[[:d = at(document.type, "blog-post")]]'
        prismic search --ref "Christmas" --page-size 50 --plain
    """
    try:
        with _open_api(_resolve(ctx)) as api:
            search = api.form(form)
            if query:
                search.query(*query)
            if orderings:
                search.orderings(orderings)
            if page is not None:
                search.page(page)
            if page_size is not None:
                search.page_size(page_size)
            response = search.submit(api.ref(ref) if ref else api.master_ref)
    except PrismicError as exc:
        raise _fail(exc) from None

    if not response.results:
        warning("No documents matched")
        return

    rows = [[doc.id, doc.type, doc.slug] for doc in response]
    print_table(["id", "type", "slug"], rows, title=f"Form '{form}'")
    info(
        f"Page {response.page} of {response.total_pages}, "
        f"{response.total_results_size} documents in total"
    )
    if response.next_page:
        suggest(f"Next page: prismic search --page {response.page + 1}")


def render_command(
    ctx: typer.Context,
    document_id: str = typer.Argument(help="Id of the document to render."),
    field: Optional[str] = typer.Option(
        None, "--field", help="Render a single field, e.g. 'article.content'."
    ),
    link_pattern: Optional[str] = typer.Option(
        None, "--link-pattern", help="URL pattern for document links, e.g. '/{type}/{slug}'."
    ),
    ref: Optional[str] = typer.Option(
        None, "--ref", help="Ref label to render at (default: master)."
    ),
    text: bool = typer.Option(
        False, "--text", help="Print the field's plain text instead of HTML."
    ),
) -> None:
    """Render a document, or one of its fields, as HTML.

    Example::

        prismic render UlfoxUnM0wkXYXbH
        prismic render UlfoxUnM0wkXYXbH --field article.content --link-pattern '/{type}/{slug}'
        prismic render UlfoxUnM0wkXYXbH --field article.title --text
    """
    if text and not field:
        raise _fail(InvalidUsageError("--text requires --field"))

    try:
        resolved = _resolve(ctx)
        with _open_api(resolved) as api:
            at = api.ref(ref) if ref else api.master_ref
            document = api.get_by_id(document_id, at)
        if document is None:
            raise NotFoundError(f"Document '{document_id}' not found")

        resolver = LinkResolver.from_pattern(at.ref, link_pattern or resolved.config.link_pattern)
        if field is None:
            print_html(document.as_html(resolver))
            return

        fragment = document.get(field)
        if fragment is None:
            raise NotFoundError(f"Field '{field}' is empty or missing on document '{document_id}'")
        if text:
            print_data(fragment.as_text())
        else:
            print_html(fragment.as_html(resolver))
    except PrismicError as exc:
        raise _fail(exc) from None
