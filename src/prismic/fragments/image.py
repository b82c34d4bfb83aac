"""Image fragments: one main view plus named alternative views."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from prismic.exceptions import ViewNotFoundError
from prismic.fragments.base import Fragment, LinkResolverFunc, escape_attr

MAIN_VIEW = "main"


@dataclass
class ImageView(Fragment):
    """One rendition of an image."""

    url: str
    width: int
    height: int
    alt: str = ""
    copyright: str = ""

    @property
    def ratio(self) -> float:
        """Width divided by height, or ``0.0`` when the height is unknown."""
        if not self.height:
            return 0.0
        return self.width / self.height

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return (
            f'<img src="{escape_attr(self.url)}" alt="{escape_attr(self.alt)}" '
            f'width="{self.width}" height="{self.height}" />'
        )


@dataclass
class Image(Fragment):
    main: ImageView
    views: dict[str, ImageView] = field(default_factory=dict)

    def get_view(self, name: str) -> ImageView:
        """Return the view called *name*; ``"main"`` is the main view.

        Raises:
            ViewNotFoundError: If there is no such view.
        """
        if name == MAIN_VIEW:
            return self.main
        try:
            return self.views[name]
        except KeyError:
            raise ViewNotFoundError(name) from None

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return self.main.as_html(link_resolver)
