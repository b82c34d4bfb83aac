"""Documents and pages of search results returned by the search API.

A :class:`Document` holds its metadata (id, type, tags, slugs) and its
fragments keyed by field name. Fields can be addressed either by bare name
(``doc["name"]``) or qualified with the document type
(``doc["product.name"]``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from prismic.exceptions import InvalidUsageError
from prismic.fragments import (
    Date,
    DocumentLink,
    Fragment,
    Image,
    LinkResolverFunc,
    Number,
    StructuredText,
)
from prismic.fragments.group import render_sections


@dataclass
class Document:
    id: str
    type: str
    href: str = ""
    tags: list[str] = field(default_factory=list)
    slugs: list[str] = field(default_factory=list)
    fragments: dict[str, Fragment] = field(default_factory=dict)
    uid: Optional[str] = None

    @property
    def slug(self) -> str:
        """The current slug, or ``"-"`` when the document has none."""
        return self.slugs[0] if self.slugs else "-"

    def _field_name(self, field_path: str) -> str:
        if "." not in field_path:
            return field_path
        doc_type, _, name = field_path.partition(".")
        if doc_type != self.type:
            raise InvalidUsageError(
                f"Field '{field_path}' does not belong to document type '{self.type}'"
            )
        return name

    def __getitem__(self, field_path: str) -> Fragment:
        return self.fragments[self._field_name(field_path)]

    def __contains__(self, field_path: str) -> bool:
        return self.get(field_path) is not None

    def get(self, field_path: str) -> Optional[Fragment]:
        """Return the fragment at *field_path*, or ``None`` if the field is empty.

        Raises:
            InvalidUsageError: If *field_path* is qualified with another type.
        """
        return self.fragments.get(self._field_name(field_path))

    def get_text(self, field_path: str) -> Optional[str]:
        """Return the plain text of a field, or ``None`` if it is empty."""
        fragment = self.get(field_path)
        return fragment.as_text() if fragment is not None else None

    def get_number(self, field_path: str) -> Optional[Number]:
        return self._get_typed(field_path, Number)

    def get_date(self, field_path: str) -> Optional[Date]:
        return self._get_typed(field_path, Date)

    def get_image(self, field_path: str) -> Optional[Image]:
        return self._get_typed(field_path, Image)

    def get_structured_text(self, field_path: str) -> Optional[StructuredText]:
        return self._get_typed(field_path, StructuredText)

    def get_html(
        self,
        field_path: str,
        link_resolver: Optional[LinkResolverFunc] = None,
    ) -> Optional[str]:
        fragment = self.get(field_path)
        return fragment.as_html(link_resolver) if fragment is not None else None

    def _get_typed(self, field_path, kind):
        fragment = self.get(field_path)
        return fragment if isinstance(fragment, kind) else None

    def as_link(self) -> DocumentLink:
        """Return a (non-broken) link pointing to this document."""
        return DocumentLink(
            id=self.id, type=self.type, tags=list(self.tags), slug=self.slug, uid=self.uid
        )

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        """Render every field as a ``<section data-field="...">`` element."""
        return render_sections(self.fragments, link_resolver)


@dataclass
class SearchResponse:
    """One page of search results.

    Behaves as a sequence of its :attr:`results`.
    """

    results: list[Document] = field(default_factory=list)
    page: int = 1
    results_per_page: int = 0
    results_size: int = 0
    total_results_size: int = 0
    total_pages: int = 0
    next_page: Optional[str] = None
    prev_page: Optional[str] = None

    def __getitem__(self, index: int) -> Document:
        return self.results[index]

    def __iter__(self):
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)
