"""Inline spans of structured text and the algorithm that renders them.

A span marks up ``text[start:end]`` of a block: emphasis, strong, a
hyperlink or a label. Spans may nest, cross each other and share
boundaries. :func:`render_spans` turns a text plus its spans into balanced
HTML:

1. Every span start and end, plus ``0`` and ``len(text)``, is a boundary.
2. At each boundary, spans ending there are closed, most recently opened
   first, then spans starting there are opened in input order.
3. The text up to the next boundary is emitted, HTML-escaped.

When a span must close while spans opened after it are still open (crossing
spans), those later spans are closed first and reopened right after, so every
block renders to a well-formed tag tree.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass
from typing import Optional, Sequence

from prismic.fragments.base import LinkResolverFunc, escape_attr, escape_text
from prismic.fragments.links import Link


@dataclass
class Span(ABC):
    """A marked-up range ``[start, end)`` of a text block."""

    start: int
    end: int

    @abstractmethod
    def start_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        ...

    @abstractmethod
    def end_html(self) -> str:
        ...


@dataclass
class Em(Span):
    def start_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return "<em>"

    def end_html(self) -> str:
        return "</em>"


@dataclass
class Strong(Span):
    def start_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return "<strong>"

    def end_html(self) -> str:
        return "</strong>"


@dataclass
class Hyperlink(Span):
    """A span linking to a web page, a file, an image or a document.

    Broken document links open a ``<span>`` instead of an anchor, whether or
    not a resolver is available.
    """

    link: Link

    def start_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return self.link.start_html(link_resolver)

    def end_html(self) -> str:
        return self.link.end_html()


@dataclass
class Label(Span):
    """A span carrying a custom CSS class."""

    label: str

    def start_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return f'<span class="{escape_attr(self.label)}">'

    def end_html(self) -> str:
        return "</span>"


def render_spans(
    text: str,
    spans: Sequence[Span],
    link_resolver: Optional[LinkResolverFunc] = None,
) -> str:
    """Render *text* with its *spans* applied as nested HTML tags.

    Offsets are clamped to ``[0, len(text)]``; a span ending before it starts
    is treated as empty. Empty spans produce an empty tag pair.

    Args:
        text: The block's plain text.
        spans: The block's spans. Spans sharing a start offset are opened in
            this order.
        link_resolver: Turns document links of hyperlink spans into URLs.

    Returns:
        The HTML-escaped text with every span's tags inserted.

    Raises:
        MissingResolverError: If a hyperlink span points to a (non-broken)
            document and *link_resolver* is ``None``.
    """
    length = len(text)

    def bounds(span: Span) -> tuple[int, int]:
        start = min(max(span.start, 0), length)
        end = min(max(span.end, start), length)
        return start, end

    ends: dict[int, int] = {}
    starting: defaultdict[int, list[Span]] = defaultdict(list)
    offsets = {0, length}
    for span in spans:
        start, end = bounds(span)
        starting[start].append(span)
        ends[id(span)] = end
        offsets.update((start, end))
    boundaries = sorted(offsets)

    html: list[str] = []
    stack: list[Span] = []
    for index, offset in enumerate(boundaries):
        # Close down to the deepest span ending here, reopening the ones
        # that continue past this offset.
        depth = next(
            (i for i, span in enumerate(stack) if ends[id(span)] <= offset), None
        )
        if depth is not None:
            continuing: list[Span] = []
            while len(stack) > depth:
                span = stack.pop()
                html.append(span.end_html())
                if ends[id(span)] > offset:
                    continuing.append(span)
            for span in reversed(continuing):
                html.append(span.start_html(link_resolver))
                stack.append(span)

        for span in starting.get(offset, ()):
            html.append(span.start_html(link_resolver))
            if ends[id(span)] <= offset:
                html.append(span.end_html())
            else:
                stack.append(span)

        if index + 1 < len(boundaries):
            html.append(escape_text(text[offset:boundaries[index + 1]]))

    while stack:
        html.append(stack.pop().end_html())
    return "".join(html)
