"""Typed content fragments and their HTML / plain-text serialisation.

Every fragment kind implements :class:`~prismic.fragments.base.Fragment`:
``as_html(link_resolver=None)`` and ``as_text()``.

Modules:
    base: The shared contract and escaping helpers.
    basic: Text, select, number, date, timestamp, color and embed.
    links: Web, file, image and document links.
    image: Images and their views.
    spans: Inline spans and the span-overlay renderer.
    structured_text: Rich-text blocks.
    group: Groups and multi-valued fields.
"""

from prismic.fragments.base import Fragment, LinkResolverFunc
from prismic.fragments.basic import Color, Date, Embed, Number, Select, Text, Timestamp
from prismic.fragments.group import FragmentList, Group, Multiple
from prismic.fragments.image import Image, ImageView
from prismic.fragments.links import DocumentLink, FileLink, ImageLink, Link, WebLink
from prismic.fragments.spans import Em, Hyperlink, Label, Span, Strong, render_spans
from prismic.fragments.structured_text import (
    Block,
    EmbedBlock,
    Heading,
    ImageBlock,
    ListItem,
    Paragraph,
    Preformatted,
    StructuredText,
    TextBlock,
)

__all__ = [
    "Block",
    "Color",
    "Date",
    "DocumentLink",
    "Em",
    "Embed",
    "EmbedBlock",
    "FileLink",
    "Fragment",
    "FragmentList",
    "Group",
    "Heading",
    "Hyperlink",
    "Image",
    "ImageBlock",
    "ImageLink",
    "ImageView",
    "Label",
    "Link",
    "LinkResolverFunc",
    "ListItem",
    "Multiple",
    "Number",
    "Paragraph",
    "Preformatted",
    "Select",
    "Span",
    "Strong",
    "StructuredText",
    "Text",
    "TextBlock",
    "Timestamp",
    "WebLink",
    "render_spans",
]
