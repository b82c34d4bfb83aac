"""Structured text: a sequence of rich-text blocks.

Text blocks (headings, paragraphs, preformatted text and list items) carry
their own text and spans and render through
:func:`~prismic.fragments.spans.render_spans`. Image and embed blocks wrap
the corresponding fragments.

:meth:`StructuredText.as_html` groups consecutive list items into a single
``<ul>`` or ``<ol>`` and separates groups with a blank line.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from itertools import groupby
from typing import Optional

from prismic.fragments.base import Fragment, LinkResolverFunc
from prismic.fragments.basic import Embed
from prismic.fragments.image import ImageView
from prismic.fragments.spans import Span, render_spans


class Block(ABC):
    """One block of a structured text."""

    @abstractmethod
    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        ...


@dataclass
class TextBlock(Block):
    """A block made of text and inline spans."""

    text: str
    spans: list[Span] = field(default_factory=list)

    tag = "p"

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        inner = render_spans(self.text, self.spans, link_resolver)
        return f"<{self.tag}>{inner}</{self.tag}>"


@dataclass
class Heading(TextBlock):
    level: int = 1

    @property
    def tag(self) -> str:  # type: ignore[override]
        return f"h{self.level}"


@dataclass
class Paragraph(TextBlock):
    tag = "p"


@dataclass
class Preformatted(TextBlock):
    tag = "pre"


@dataclass
class ListItem(TextBlock):
    ordered: bool = False

    tag = "li"


@dataclass
class ImageBlock(Block):
    view: ImageView

    @property
    def url(self) -> str:
        return self.view.url

    @property
    def width(self) -> int:
        return self.view.width

    @property
    def height(self) -> int:
        return self.view.height

    @property
    def alt(self) -> str:
        return self.view.alt

    @property
    def copyright(self) -> str:
        return self.view.copyright

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return f'<p class="block-img">{self.view.as_html(link_resolver)}</p>'


@dataclass
class EmbedBlock(Block):
    embed: Embed

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return self.embed.as_html(link_resolver)


def _list_kind(block: Block) -> Optional[str]:
    if isinstance(block, ListItem):
        return "ol" if block.ordered else "ul"
    return None


@dataclass
class StructuredText(Fragment):
    blocks: list[Block] = field(default_factory=list)

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        groups: list[str] = []
        for kind, blocks in groupby(self.blocks, key=_list_kind):
            if kind is None:
                groups.extend(block.as_html(link_resolver) for block in blocks)
            else:
                items = "".join(block.as_html(link_resolver) for block in blocks)
                groups.append(f"<{kind}>{items}</{kind}>")
        return "\n\n".join(groups)

    def as_text(self) -> str:
        """Join the text of every text block with newlines."""
        return "\n".join(b.text for b in self.blocks if isinstance(b, TextBlock))

    def first_title(self) -> Optional[str]:
        """Return the text of the highest-level heading, or ``None``.

        The first heading wins among headings of the same level.
        """
        headings = [b for b in self.blocks if isinstance(b, Heading)]
        if not headings:
            return None
        return min(headings, key=lambda h: h.level).text

    def first_paragraph(self) -> Optional[Paragraph]:
        return next((b for b in self.blocks if isinstance(b, Paragraph)), None)

    def first_preformatted(self) -> Optional[Preformatted]:
        return next((b for b in self.blocks if isinstance(b, Preformatted)), None)

    def first_image(self) -> Optional[ImageBlock]:
        return next((b for b in self.blocks if isinstance(b, ImageBlock)), None)
