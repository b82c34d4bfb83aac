"""Parsing API JSON into documents and fragments.

Each fragment JSON object has a ``type`` and a ``value``; :func:`parse_fragment`
dispatches on the type to a dedicated parser. Unknown fragment, block and
span types are skipped with a warning so that a repository using a newer
field kind still renders everything else. Known types with an unexpected
shape raise :class:`~prismic.exceptions.ParseError`.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Optional

from prismic.document import Document, SearchResponse
from prismic.exceptions import ParseError
from prismic.fragments import (
    Block,
    Color,
    Date,
    DocumentLink,
    Em,
    Embed,
    EmbedBlock,
    FileLink,
    Fragment,
    FragmentList,
    Group,
    Heading,
    Hyperlink,
    Image,
    ImageBlock,
    ImageLink,
    ImageView,
    Label,
    Link,
    ListItem,
    Multiple,
    Number,
    Paragraph,
    Preformatted,
    Select,
    Span,
    Strong,
    StructuredText,
    Text,
    Timestamp,
    WebLink,
)

logger = logging.getLogger(__name__)

_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


# --- Scalar fragments ---


def _parse_text(value: Any) -> Text:
    return Text(str(value))


def _parse_select(value: Any) -> Select:
    return Select(str(value))


def _parse_number(value: Any) -> Number:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"Invalid number: {value!r}")
    return Number(value)


def _parse_date(value: Any) -> Date:
    return Date(date.fromisoformat(value))


def _parse_timestamp(value: Any) -> Timestamp:
    return Timestamp(datetime.strptime(value, _TIMESTAMP_FORMAT))


def _parse_color(value: Any) -> Color:
    return Color(value.lstrip("#"))


def _parse_embed(value: Any) -> Embed:
    oembed = value["oembed"]
    return Embed(
        embed_type=oembed.get("type", ""),
        provider=oembed.get("provider_name") or "",
        url=oembed.get("embed_url", ""),
        html=oembed.get("html") or "",
        oembed=oembed,
    )


# --- Links ---


def _parse_web_link(value: Any) -> WebLink:
    return WebLink(value["url"])


def _parse_file_link(value: Any) -> FileLink:
    file = value["file"]
    return FileLink(
        target=file["url"],
        name=file.get("name", ""),
        kind=file.get("kind", ""),
        size=int(file.get("size") or 0),
    )


def _parse_image_link(value: Any) -> ImageLink:
    image = value["image"]
    return ImageLink(
        target=image["url"],
        name=image.get("name", ""),
        kind=image.get("kind", ""),
        size=int(image.get("size") or 0),
        width=int(image.get("width") or 0),
        height=int(image.get("height") or 0),
    )


def _parse_document_link(value: Any) -> DocumentLink:
    document = value["document"]
    return DocumentLink(
        id=document["id"],
        type=document["type"],
        tags=list(document.get("tags") or []),
        slug=document.get("slug") or "-",
        broken=bool(value.get("isBroken", False)),
        uid=document.get("uid"),
    )


# --- Images ---


def _parse_view(value: Any) -> ImageView:
    dimensions = value.get("dimensions") or {}
    return ImageView(
        url=value["url"],
        width=int(dimensions.get("width") or 0),
        height=int(dimensions.get("height") or 0),
        alt=value.get("alt") or "",
        copyright=value.get("copyright") or "",
    )


def _parse_image(value: Any) -> Image:
    views = {name: _parse_view(view) for name, view in (value.get("views") or {}).items()}
    return Image(main=_parse_view(value["main"]), views=views)


# --- Structured text ---


def _parse_span(value: Any) -> Optional[Span]:
    span_type = value.get("type")
    start, end = int(value["start"]), int(value["end"])
    if span_type == "em":
        return Em(start, end)
    if span_type == "strong":
        return Strong(start, end)
    if span_type == "hyperlink":
        link = parse_fragment(value["data"])
        if link is None:
            logger.warning(
                "Skipping hyperlink span with unknown link type: %s", value["data"].get("type")
            )
            return None
        if not isinstance(link, Link):
            raise ParseError(f"Hyperlink span does not point to a link: {value['data']!r}")
        return Hyperlink(start, end, link)
    if span_type == "label":
        return Label(start, end, value["data"]["label"])
    logger.warning("Skipping unknown span type: %s", span_type)
    return None


def _parse_spans(values: Any) -> list[Span]:
    spans = (_parse_span(v) for v in values or [])
    return [s for s in spans if s is not None]


def _parse_block(value: Any) -> Optional[Block]:
    block_type = value.get("type", "")
    if block_type.startswith("heading"):
        level = int(block_type[len("heading"):] or 1)
        return Heading(value["text"], _parse_spans(value.get("spans")), level)
    if block_type == "paragraph":
        return Paragraph(value["text"], _parse_spans(value.get("spans")))
    if block_type == "preformatted":
        return Preformatted(value["text"], _parse_spans(value.get("spans")))
    if block_type in ("list-item", "o-list-item"):
        return ListItem(
            value["text"], _parse_spans(value.get("spans")), block_type == "o-list-item"
        )
    if block_type == "image":
        return ImageBlock(_parse_view(value))
    if block_type == "embed":
        return EmbedBlock(_parse_embed(value))
    logger.warning("Skipping unknown block type: %s", block_type)
    return None


def _parse_structured_text(value: Any) -> StructuredText:
    blocks = (_parse_block(v) for v in value)
    return StructuredText([b for b in blocks if b is not None])


# --- Composites ---


def _parse_fields(fields: dict[str, Any]) -> dict[str, Fragment]:
    fragments: dict[str, Fragment] = {}
    for name, value in fields.items():
        fragment = parse_field(value)
        if fragment is not None:
            fragments[name] = fragment
    return fragments


def _parse_group(value: Any) -> Group:
    return Group([FragmentList(_parse_fields(entry)) for entry in value])


def _parse_multiple(values: list[Any]) -> Multiple:
    fragments = (parse_fragment(v) for v in values)
    return Multiple([f for f in fragments if f is not None])


_FRAGMENT_PARSERS: dict[str, Callable[[Any], Fragment]] = {
    "Text": _parse_text,
    "Select": _parse_select,
    "Number": _parse_number,
    "Date": _parse_date,
    "Timestamp": _parse_timestamp,
    "Color": _parse_color,
    "Embed": _parse_embed,
    "Link.web": _parse_web_link,
    "Link.file": _parse_file_link,
    "Link.image": _parse_image_link,
    "Link.document": _parse_document_link,
    "Image": _parse_image,
    "StructuredText": _parse_structured_text,
    "Group": _parse_group,
}


# --- Public API ---


def parse_fragment(data: Any) -> Optional[Fragment]:
    """Parse one ``{"type": ..., "value": ...}`` object into a fragment.

    Returns:
        The fragment, or ``None`` if its type is unknown.

    Raises:
        ParseError: If the object does not have the shape its type requires.
    """
    if not isinstance(data, dict) or "type" not in data:
        raise ParseError(f"Fragment must be an object with a 'type': {data!r}")
    parser = _FRAGMENT_PARSERS.get(data["type"])
    if parser is None:
        logger.warning("Skipping unknown fragment type: %s", data["type"])
        return None
    try:
        return parser(data.get("value"))
    except ParseError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ParseError(f"Invalid {data['type']} fragment: {exc!r}") from exc


def parse_field(data: Any) -> Optional[Fragment]:
    """Parse a document field: a fragment object, or a list of them (:class:`Multiple`)."""
    if isinstance(data, list):
        return _parse_multiple(data)
    return parse_fragment(data)


def parse_structured_text(blocks: list[Any]) -> StructuredText:
    """Parse a bare list of structured-text blocks.

    Raises:
        ParseError: If a block does not have the shape its type requires.
    """
    return parse_fragment({"type": "StructuredText", "value": blocks})  # type: ignore[return-value]


def parse_document(data: Any) -> Document:
    """Parse one search result into a :class:`~prismic.document.Document`.

    Raises:
        ParseError: If required keys are missing.
    """
    try:
        doc_type = data["type"]
        fields = (data.get("data") or {}).get(doc_type) or {}
        return Document(
            id=data["id"],
            type=doc_type,
            href=data.get("href", ""),
            tags=list(data.get("tags") or []),
            slugs=list(data.get("slugs") or []),
            fragments=_parse_fields(fields),
            uid=data.get("uid"),
        )
    except (KeyError, TypeError, AttributeError) as exc:
        raise ParseError(f"Invalid document: {exc!r}") from exc


def parse_search_response(data: Any) -> SearchResponse:
    """Parse a search API response into a :class:`~prismic.document.SearchResponse`.

    Raises:
        ParseError: If the response or one of its documents is malformed.
    """
    if not isinstance(data, dict) or not isinstance(data.get("results"), list):
        raise ParseError("Search response must be an object with a 'results' list")
    results = [parse_document(d) for d in data["results"]]
    return SearchResponse(
        results=results,
        page=int(data.get("page", 1)),
        results_per_page=int(data.get("results_per_page", len(results))),
        results_size=int(data.get("results_size", len(results))),
        total_results_size=int(data.get("total_results_size", len(results))),
        total_pages=int(data.get("total_pages", 1)),
        next_page=data.get("next_page"),
        prev_page=data.get("prev_page"),
    )
