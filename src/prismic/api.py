"""The API entry point, search forms and cached searches.

:meth:`Api.get` fetches the API entry document (refs, bookmarks, types,
tags and search forms). Documents are then queried through a
:class:`SearchForm`::

    api = Api.get("https://repo.prismic.io/api")
    response = (
        api.form("everything")
        .query('[[:d = at(document.type, "product")]]')
        .orderings("[my.product.name]")
        .submit(api.master_ref)
    )

Every search goes through the response cache, keyed by its full request URL.
Content published under a ref never changes, so cached responses never go
stale; :meth:`Api.refresh` clears the cache when the master ref moves.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Union

import httpx
from pydantic import ValidationError

from prismic.cache import LruCache, get_default_cache
from prismic.client import HttpClient
from prismic.document import Document, SearchResponse
from prismic.exceptions import (
    FormNotFoundError,
    InvalidUsageError,
    NoRefSetError,
    NotFoundError,
    ParseError,
    RefNotFoundError,
)
from prismic.models import ApiData, Form, Ref, RequestConfig
from prismic.parser import parse_search_response

logger = logging.getLogger(__name__)

EVERYTHING_FORM = "everything"


class Api:
    """A connection to one repository's API.

    Use :meth:`get` rather than the constructor.

    Args:
        url: The API endpoint.
        data: The validated entry document.
        client: Transport used for every request.
        cache: Response cache shared by all searches of this API.
    """

    def __init__(self, url: str, data: ApiData, client: HttpClient, cache: LruCache) -> None:
        self.url = url
        self.client = client
        self.cache = cache
        self._data = data
        self._master = _find_master(data)

    @classmethod
    def get(
        cls,
        url: str,
        access_token: Optional[str] = None,
        cache: Optional[LruCache] = None,
        config: Optional[RequestConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> Api:
        """Fetch the entry document at *url* and return a ready :class:`Api`.

        Args:
            url: The API endpoint, e.g. ``https://repo.prismic.io/api``.
            access_token: Token for private repositories.
            cache: Response cache; defaults to the process-wide instance
                from :func:`~prismic.cache.get_default_cache`.
            config: Timeout, retry and SSL settings.
            transport: Optional httpx transport.

        Raises:
            ParseError: If the entry document is malformed.
            PrismicError: Any transport error from
                :meth:`~prismic.client.HttpClient.get_json`.
        """
        client = HttpClient(config, access_token=access_token, transport=transport)
        try:
            data = _fetch_api_data(client, url)
            return cls(url, data, client, cache if cache is not None else get_default_cache())
        except Exception:
            client.close()
            raise

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def refresh(self) -> bool:
        """Re-fetch the entry document, clearing the cache if the master ref moved.

        Returns:
            ``True`` if the master ref changed.
        """
        data = _fetch_api_data(self.client, self.url)
        master = _find_master(data)
        changed = master.ref != self._master.ref
        if changed:
            logger.info(
                "Master ref moved from %s to %s, clearing %d cached responses",
                self._master.ref, master.ref, self.cache.size(),
            )
            self.cache.clear()
        self._data = data
        self._master = master
        return changed

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> Api:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Entry document
    # ------------------------------------------------------------------ #

    @property
    def refs(self) -> dict[str, Ref]:
        """Refs keyed by label."""
        return {ref.label: ref for ref in self._data.refs}

    @property
    def master_ref(self) -> Ref:
        return self._master

    @property
    def bookmarks(self) -> dict[str, str]:
        return dict(self._data.bookmarks)

    @property
    def types(self) -> dict[str, str]:
        return dict(self._data.types)

    @property
    def tags(self) -> list[str]:
        return list(self._data.tags)

    @property
    def forms(self) -> dict[str, Form]:
        return dict(self._data.forms)

    @property
    def oauth_initiate_endpoint(self) -> Optional[str]:
        return self._data.oauth_initiate

    @property
    def oauth_token_endpoint(self) -> Optional[str]:
        return self._data.oauth_token

    def ref(self, label: str) -> Ref:
        """Return the ref called *label*.

        Raises:
            RefNotFoundError: If there is no such ref.
        """
        for ref in self._data.refs:
            if ref.label == label:
                return ref
        raise RefNotFoundError(f"Ref '{label}' not found")

    def bookmark(self, name: str) -> str:
        """Return the id of the document bookmarked as *name*.

        Raises:
            NotFoundError: If there is no such bookmark.
        """
        try:
            return self._data.bookmarks[name]
        except KeyError:
            raise NotFoundError(f"Bookmark '{name}' not found") from None

    def form(self, name: str) -> SearchForm:
        """Return a fresh :class:`SearchForm` for the form called *name*.

        Raises:
            FormNotFoundError: If there is no such form.
        """
        try:
            form = self._data.forms[name]
        except KeyError:
            raise FormNotFoundError(f"Form '{name}' not found") from None
        return SearchForm(self, form)

    # ------------------------------------------------------------------ #
    # Shortcuts
    # ------------------------------------------------------------------ #

    def get_by_id(self, document_id: str, ref: Union[Ref, str, None] = None) -> Optional[Document]:
        """Return the document with *document_id*, or ``None``."""
        response = (
            self.form(EVERYTHING_FORM)
            .query(f"[[:d = at(document.id, {quote_literal(document_id)})]]")
            .submit(ref or self._master)
        )
        return response.results[0] if response.results else None

    def get_by_ids(
        self, document_ids: Sequence[str], ref: Union[Ref, str, None] = None
    ) -> SearchResponse:
        ids = ", ".join(quote_literal(i) for i in document_ids)
        return (
            self.form(EVERYTHING_FORM)
            .query(f"[[:d = any(document.id, [{ids}])]]")
            .submit(ref or self._master)
        )

    def get_bookmark(self, name: str, ref: Union[Ref, str, None] = None) -> Optional[Document]:
        return self.get_by_id(self.bookmark(name), ref)


class SearchForm:
    """A search request being built against one of the API's forms.

    Field values start at the form's defaults. Setters return the form so
    calls can be chained; :meth:`submit` runs the search.
    """

    def __init__(self, api: Api, form: Form) -> None:
        self.api = api
        self.form = form
        self.data: dict[str, Union[str, list[str]]] = {}
        self._ref: Optional[str] = None
        for name, field in form.fields.items():
            if field.default is not None:
                self.data[name] = [field.default] if field.multiple else field.default

    def set(self, name: str, value: Any) -> SearchForm:
        """Set field *name*; values of multiple fields accumulate.

        Raises:
            InvalidUsageError: If the form has no such field.
        """
        field = self.form.fields.get(name)
        if field is None:
            raise InvalidUsageError(f"Unknown field '{name}' for form '{self.form.name}'")
        if field.multiple:
            values = self.data.setdefault(name, [])
            assert isinstance(values, list)
            values.append(str(value))
        else:
            self.data[name] = str(value)
        return self

    def query(self, *predicates: str) -> SearchForm:
        for predicate in predicates:
            self.set("q", predicate)
        return self

    def orderings(self, orderings: str) -> SearchForm:
        return self.set("orderings", orderings)

    def page(self, page: int) -> SearchForm:
        return self.set("page", page)

    def page_size(self, page_size: int) -> SearchForm:
        return self.set("pageSize", page_size)

    def ref(self, ref: Union[Ref, str]) -> SearchForm:
        self._ref = ref.ref if isinstance(ref, Ref) else ref
        return self

    def url(self, ref: Union[Ref, str, None] = None) -> str:
        """Return the full request URL, which is also the cache key.

        Raises:
            NoRefSetError: If no ref was given here or through :meth:`ref`.
        """
        if ref is not None:
            self.ref(ref)
        if self._ref is None:
            raise NoRefSetError("No ref set: pass one to submit() or call ref() first")

        params: list[tuple[str, str]] = []
        for name, value in self.data.items():
            if name == "q" and isinstance(value, list):
                params.append((name, merge_predicates(value)))
            elif isinstance(value, list):
                params.extend((name, v) for v in value)
            else:
                params.append((name, value))
        params.append(("ref", self._ref))
        token = self.api.client.access_token
        if token and "access_token" not in self.data:
            params.append(("access_token", token))
        return str(httpx.URL(self.form.action, params=params))

    def submit(self, ref: Union[Ref, str, None] = None) -> SearchResponse:
        """Run the search, serving it from the response cache when possible.

        Raises:
            NoRefSetError: If no ref was given here or through :meth:`ref`.
            InvalidUsageError: If the form is not a GET form.
        """
        if self.form.method.upper() != "GET":
            raise InvalidUsageError(
                f"Form '{self.form.name}' uses unsupported method {self.form.method}"
            )
        return self.api.cache.get(self.url(ref), self._fetch)

    def _fetch(self, url: str) -> SearchResponse:
        return parse_search_response(self.api.client.get_json(url))


def merge_predicates(predicates: Sequence[str]) -> str:
    """Merge ``[[...]]`` queries into one, e.g. ``[[:d = a][:d = b]]``.

    A bare predicate (``[:d = a]``) is kept as-is inside the merged query.
    """
    parts = []
    for predicate in predicates:
        predicate = predicate.strip()
        if predicate.startswith("[[") and predicate.endswith("]]"):
            predicate = predicate[1:-1]
        parts.append(predicate)
    return f"[{''.join(parts)}]"


def _fetch_api_data(client: HttpClient, url: str) -> ApiData:
    try:
        return ApiData.model_validate(client.get_json(url))
    except ValidationError as exc:
        raise ParseError(f"Invalid API entry document at {url}: {exc}") from exc


def _find_master(data: ApiData) -> Ref:
    for ref in data.refs:
        if ref.is_master:
            return ref
    raise ParseError("API entry document has no master ref")


def quote_literal(value: str) -> str:
    """Quote *value* as a predicate string literal, e.g. ``"UlfoxUnM0wkXYXbH"``.

    Backslashes and double quotes are escaped so the value cannot end the
    literal early.
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
