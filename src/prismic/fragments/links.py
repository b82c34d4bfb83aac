"""Link fragments: web, file, image and document links.

All links share one interface:

* :meth:`Link.url` -- the target URL. Web, file and image links carry it
  themselves; document links need a *link_resolver*.
* :meth:`Link.start_html` / :meth:`Link.end_html` -- the opening and closing
  tags used both by :meth:`~prismic.fragments.base.Fragment.as_html` and by
  hyperlink spans in structured text.

Links have no plain-text form.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from prismic.exceptions import MissingResolverError
from prismic.fragments.base import Fragment, LinkResolverFunc, escape_attr, escape_text


class Link(Fragment):
    """Base class for every link kind."""

    @abstractmethod
    def url(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        """Return the URL this link points to."""
        ...

    @abstractmethod
    def label(self) -> str:
        """Return the text shown inside the link when rendered on its own."""
        ...

    def start_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return f'<a href="{escape_attr(self.url(link_resolver))}">'

    def end_html(self) -> str:
        return "</a>"

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return f"{self.start_html(link_resolver)}{escape_text(self.label())}{self.end_html()}"


@dataclass
class WebLink(Link):
    target: str

    def url(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return self.target

    def label(self) -> str:
        return self.target


@dataclass
class FileLink(Link):
    """A link to a file in the media library."""

    target: str
    name: str
    kind: str = ""
    size: int = 0

    def url(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return self.target

    def label(self) -> str:
        return self.name


@dataclass
class ImageLink(Link):
    """A link to an image in the media library."""

    target: str
    name: str = ""
    kind: str = ""
    size: int = 0
    width: int = 0
    height: int = 0

    def url(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return self.target

    def label(self) -> str:
        return self.target


@dataclass
class DocumentLink(Link):
    """A link to another document of the repository.

    A *broken* link points to a document that is not published under the
    current ref; it renders as a ``<span>`` rather than an anchor.
    """

    id: str
    type: str
    tags: list[str] = field(default_factory=list)
    slug: str = "-"
    broken: bool = False
    uid: Optional[str] = None

    def url(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        """Resolve this link to a URL.

        Raises:
            MissingResolverError: If *link_resolver* is ``None``.
        """
        if link_resolver is None:
            raise MissingResolverError(
                f"A link resolver is required to render the link to document '{self.id}'"
            )
        return link_resolver(self)

    def label(self) -> str:
        return self.slug

    def start_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        if self.broken:
            return "<span>"
        return super().start_html(link_resolver)

    def end_html(self) -> str:
        return "</span>" if self.broken else "</a>"
