"""Turning document links into application URLs.

The API only knows document ids and types; the URL a document lives at is
the application's business. A :class:`LinkResolver` wraps the function that
decides it, together with the ref the content is being rendered at, and is
passed as the *link_resolver* argument of every ``as_html`` call.

Example::

    @prismic.link_resolver(api.master_ref.ref)
    def resolve(link):
        return f"/{link.type}/{link.id}"

    html = document.as_html(resolve)
"""

from __future__ import annotations

from string import Formatter
from typing import TYPE_CHECKING, Callable, Optional, Union

from prismic.exceptions import InvalidUsageError
from prismic.fragments import DocumentLink

if TYPE_CHECKING:
    from prismic.document import Document

PATTERN_FIELDS = frozenset({"id", "type", "slug", "uid"})
"""Placeholders accepted by :meth:`LinkResolver.from_pattern`."""


class LinkResolver:
    """Callable mapping a :class:`~prismic.fragments.DocumentLink` to a URL.

    Args:
        ref: The ref the content is rendered at, if the application needs it
            to build preview URLs.
        func: The resolving function.
    """

    def __init__(self, ref: Optional[str], func: Callable[[DocumentLink], str]) -> None:
        self.ref = ref
        self._func = func

    @classmethod
    def from_pattern(cls, ref: Optional[str], pattern: str) -> LinkResolver:
        """Build a resolver from a pattern with ``{id}``, ``{type}``, ``{slug}`` and ``{uid}``.

        Example::

            LinkResolver.from_pattern(None, "https://shop.example/{type}/{slug}")

        Raises:
            InvalidUsageError: If the pattern uses any other placeholder or is
                not a valid format string.
        """
        try:
            fields = {name for _, name, _, _ in Formatter().parse(pattern) if name is not None}
        except ValueError as exc:
            raise InvalidUsageError(f"Invalid link pattern '{pattern}': {exc}") from None
        unknown = sorted(fields - PATTERN_FIELDS)
        if unknown:
            raise InvalidUsageError(
                f"Invalid link pattern '{pattern}': unknown placeholder(s) "
                f"{', '.join(repr(f) for f in unknown)}; use {{id}}, {{type}}, {{slug}} or {{uid}}"
            )

        def _format(link: DocumentLink) -> str:
            return pattern.format(id=link.id, type=link.type, slug=link.slug, uid=link.uid or "")

        return cls(ref, _format)

    def link_to(self, target: Union[DocumentLink, Document]) -> str:
        """Return the URL of a document link, or of a document itself."""
        if not isinstance(target, DocumentLink):
            target = target.as_link()
        return self._func(target)

    __call__ = link_to


def link_resolver(ref: Optional[str] = None) -> Callable[[Callable[[DocumentLink], str]], LinkResolver]:
    """Decorator turning a function into a :class:`LinkResolver` for *ref*."""

    def decorator(func: Callable[[DocumentLink], str]) -> LinkResolver:
        return LinkResolver(ref, func)

    return decorator
