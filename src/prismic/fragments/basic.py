"""Scalar fragments: text, select, number, date, timestamp, color and embed.

Each one renders through a fixed template. User-supplied values are
HTML-escaped; the one exception is :class:`Embed`, whose ``html`` comes from
the oEmbed provider and is emitted as-is.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from prismic.exceptions import ParseError
from prismic.fragments.base import Fragment, LinkResolverFunc, escape_attr, escape_text

_HEX_COLOR = re.compile(r"^[0-9a-fA-F]{6}$")


@dataclass
class Text(Fragment):
    """A single line of unformatted text."""

    value: str

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return f'<span class="text">{escape_text(self.value)}</span>'

    def as_text(self) -> str:
        return self.value


@dataclass
class Select(Fragment):
    """One value picked from a predefined list."""

    value: str

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return f'<span class="text">{escape_text(self.value)}</span>'


@dataclass
class Number(Fragment):
    value: float

    def as_int(self) -> int:
        """Return the value truncated to an integer."""
        return int(self.value)

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return f'<span class="number">{escape_text(self.value)}</span>'


@dataclass
class Date(Fragment):
    """A calendar date without time of day."""

    value: date

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return f"<time>{self.value.isoformat()}</time>"


@dataclass
class Timestamp(Fragment):
    """A point in time with its UTC offset."""

    value: datetime

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return f"<time>{self.value.isoformat()}</time>"


@dataclass
class Color(Fragment):
    """An RGB color stored as six hex digits, without the leading ``#``.

    Raises:
        ParseError: If *hex* is not six hex digits.
    """

    hex: str

    def __post_init__(self) -> None:
        if not Color.valid(self.hex):
            raise ParseError(f"Invalid color: {self.hex!r}")

    @staticmethod
    def valid(hex: str) -> bool:
        """Return whether *hex* is six hex digits."""
        return bool(_HEX_COLOR.match(hex))

    @staticmethod
    def to_rgb(hex: str) -> dict[str, int]:
        """Split *hex* into its ``red``, ``green`` and ``blue`` components."""
        return {
            "red": int(hex[0:2], 16),
            "green": int(hex[2:4], 16),
            "blue": int(hex[4:6], 16),
        }

    def as_rgb(self) -> dict[str, int]:
        return Color.to_rgb(self.hex)

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return f'<span class="color">#{self.hex}</span>'


@dataclass
class Embed(Fragment):
    """Third-party content described by an oEmbed payload.

    Attributes:
        embed_type: oEmbed ``type`` (``video``, ``rich``, ...).
        provider: oEmbed ``provider_name``.
        url: The embedded resource's URL.
        html: Provider-supplied markup, rendered unescaped.
        oembed: The complete oEmbed payload.
    """

    embed_type: str
    provider: str
    url: str
    html: str
    oembed: dict[str, Any] = field(default_factory=dict)

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return (
            f'<div data-oembed="{escape_attr(self.url)}" '
            f'data-oembed-type="{escape_attr(self.embed_type.lower())}" '
            f'data-oembed-provider="{escape_attr(self.provider.lower())}">'
            f"{self.html}</div>"
        )
