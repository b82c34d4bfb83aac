"""prismic -- client kit for the prismic.io content API.

Fetches documents over HTTP, parses them into typed fragments (text, links,
images, structured text, ...), renders fragments to HTML and caches parsed
search responses in a bounded in-memory LRU cache.

Typical usage::

    import prismic

    api = prismic.get_api("https://repo.prismic.io/api")
    response = api.form("everything").page_size(10).submit(api.master_ref)

    resolver = prismic.LinkResolver.from_pattern(api.master_ref.ref, "/{type}/{id}")
    for document in response:
        print(document.as_html(resolver))

Modules:
    api: API entry point and search forms.
    cache: Bounded LRU response cache and its process-wide default instance.
    client: httpx-based transport with retry and error mapping.
    document: Documents and search responses.
    fragments: Fragment kinds and the structured-text span renderer.
    parser: JSON to document / fragment parsing.
    resolver: Document link resolution.
    models: Pydantic configuration and entry-document models.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer command-line entry point.
"""

from __future__ import annotations

from typing import Any, Optional

from prismic.api import Api, SearchForm
from prismic.cache import LruCache, get_default_cache
from prismic.document import Document, SearchResponse
from prismic.resolver import LinkResolver, link_resolver

__version__ = "0.1.0"

__all__ = [
    "Api",
    "Document",
    "LinkResolver",
    "LruCache",
    "SearchForm",
    "SearchResponse",
    "get_api",
    "get_default_cache",
    "link_resolver",
]


def get_api(url: str, access_token: Optional[str] = None, **kwargs: Any) -> Api:
    """Shortcut for :meth:`Api.get`."""
    return Api.get(url, access_token=access_token, **kwargs)
