"""Tests for scalar, link, image and composite fragments."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from prismic.exceptions import (
    MissingResolverError,
    NotFoundError,
    ParseError,
    UnsupportedOperationError,
    ViewNotFoundError,
)
from prismic.fragments import (
    Color,
    Date,
    DocumentLink,
    Embed,
    FileLink,
    FragmentList,
    Group,
    Image,
    ImageLink,
    ImageView,
    Multiple,
    Number,
    Select,
    Text,
    Timestamp,
    WebLink,
)


def _resolve(link: DocumentLink) -> str:
    return f"/{link.type}/{link.slug}"


# ------------------------------------------------------------------ #
# Scalars
# ------------------------------------------------------------------ #


class TestText:
    def test_as_html_escapes(self) -> None:
        assert Text("Jane <Doe> & co").as_html() == (
            '<span class="text">Jane &lt;Doe&gt; &amp; co</span>'
        )

    def test_as_text(self) -> None:
        assert Text("plain").as_text() == "plain"


class TestSelect:
    def test_as_html(self) -> None:
        assert Select("Vanilla").as_html() == '<span class="text">Vanilla</span>'

    def test_as_text_unsupported(self) -> None:
        with pytest.raises(UnsupportedOperationError):
            Select("Vanilla").as_text()


class TestNumber:
    def test_as_html(self) -> None:
        assert Number(3.55).as_html() == '<span class="number">3.55</span>'

    def test_as_int(self) -> None:
        assert Number(3.55).as_int() == 3


class TestDates:
    def test_date(self) -> None:
        fragment = Date(date(2013, 8, 17))
        assert fragment.as_html() == "<time>2013-08-17</time>"

    def test_timestamp(self) -> None:
        fragment = Timestamp(datetime(2014, 6, 18, 15, 30, tzinfo=timezone(timedelta(hours=2))))
        assert fragment.as_html() == "<time>2014-06-18T15:30:00+02:00</time>"

    def test_as_text_unsupported(self) -> None:
        with pytest.raises(UnsupportedOperationError):
            Date(date(2013, 8, 17)).as_text()


class TestColor:
    def test_as_html(self) -> None:
        assert Color("ff00aa").as_html() == '<span class="color">#ff00aa</span>'

    def test_as_rgb(self) -> None:
        assert Color("ff00aa").as_rgb() == {"red": 255, "green": 0, "blue": 170}

    @pytest.mark.parametrize("value", ["fff", "#ff00aa", "gg00aa", ""])
    def test_invalid_hex(self, value: str) -> None:
        assert not Color.valid(value)
        with pytest.raises(ParseError):
            Color(value)

    def test_as_text_unsupported(self) -> None:
        with pytest.raises(UnsupportedOperationError):
            Color("ff00aa").as_text()


class TestEmbed:
    def test_as_html_keeps_provider_markup(self) -> None:
        embed = Embed(
            embed_type="Video",
            provider="YouTube",
            url="https://www.youtube.com/watch?v=abc",
            html='<iframe src="https://www.youtube.com/embed/abc"></iframe>',
        )
        assert embed.as_html() == (
            '<div data-oembed="https://www.youtube.com/watch?v=abc" '
            'data-oembed-type="video" data-oembed-provider="youtube">'
            '<iframe src="https://www.youtube.com/embed/abc"></iframe></div>'
        )

    def test_as_text_unsupported(self) -> None:
        with pytest.raises(UnsupportedOperationError):
            Embed("video", "YouTube", "https://y.tube/abc", "").as_text()


# ------------------------------------------------------------------ #
# Links
# ------------------------------------------------------------------ #


class TestLinks:
    def test_web_link(self) -> None:
        link = WebLink("https://example.org/?q=a&b")
        assert link.url() == "https://example.org/?q=a&b"
        assert link.as_html() == (
            '<a href="https://example.org/?q=a&amp;b">https://example.org/?q=a&amp;b</a>'
        )

    def test_file_link_shows_name(self) -> None:
        link = FileLink("https://files.example.io/menu.pdf", name="menu.pdf", kind="document", size=1024)
        assert link.as_html() == '<a href="https://files.example.io/menu.pdf">menu.pdf</a>'

    def test_image_link(self) -> None:
        link = ImageLink("https://images.example.io/a.png", width=10, height=20)
        assert link.as_html() == (
            '<a href="https://images.example.io/a.png">https://images.example.io/a.png</a>'
        )

    def test_document_link_resolves(self) -> None:
        link = DocumentLink(id="UlfoxUnM0wkXYXbj", type="product", slug="cupcakes")
        assert link.as_html(_resolve) == '<a href="/product/cupcakes">cupcakes</a>'

    def test_document_link_requires_resolver(self) -> None:
        link = DocumentLink(id="UlfoxUnM0wkXYXbj", type="product")
        with pytest.raises(MissingResolverError):
            link.as_html()

    def test_broken_document_link(self) -> None:
        link = DocumentLink(id="gone", type="article", slug="gone", broken=True)
        assert link.as_html() == "<span>gone</span>"
        assert link.as_html(_resolve) == "<span>gone</span>"

    @pytest.mark.parametrize(
        "link",
        [WebLink("https://example.org/"), DocumentLink(id="x", type="article")],
    )
    def test_as_text_unsupported(self, link) -> None:
        with pytest.raises(UnsupportedOperationError):
            link.as_text()


# ------------------------------------------------------------------ #
# Images
# ------------------------------------------------------------------ #


@pytest.fixture()
def image() -> Image:
    return Image(
        main=ImageView("https://images.example.io/main.png", 500, 250, alt='A "main" view'),
        views={"icon": ImageView("https://images.example.io/icon.png", 100, 50, alt="Icon")},
    )


class TestImage:
    def test_as_html_renders_main_view(self, image: Image) -> None:
        assert image.as_html() == (
            '<img src="https://images.example.io/main.png" alt="A &quot;main&quot; view" '
            'width="500" height="250" />'
        )

    def test_get_main_view(self, image: Image) -> None:
        assert image.get_view("main") is image.main

    def test_get_named_view(self, image: Image) -> None:
        view = image.get_view("icon")
        assert view.width == 100
        assert view.ratio == 2.0

    def test_ratio_without_height(self) -> None:
        assert ImageView("https://images.example.io/x.png", 100, 0).ratio == 0.0

    def test_unknown_view(self, image: Image) -> None:
        with pytest.raises(ViewNotFoundError) as exc_info:
            image.get_view("banner")
        assert exc_info.value.name == "banner"
        assert isinstance(exc_info.value, NotFoundError)

    def test_as_text_unsupported(self, image: Image) -> None:
        with pytest.raises(UnsupportedOperationError):
            image.as_text()


# ------------------------------------------------------------------ #
# Composites
# ------------------------------------------------------------------ #


class TestGroup:
    def test_as_html_renders_sections(self) -> None:
        group = Group(
            [
                FragmentList({"name": Text("Macaron"), "price": Number(2)}),
                FragmentList({"name": Text("Cupcake")}),
            ]
        )
        assert group.as_html() == (
            '<section data-field="name"><span class="text">Macaron</span></section>\n'
            '<section data-field="price"><span class="number">2</span></section>\n'
            '<section data-field="name"><span class="text">Cupcake</span></section>'
        )

    def test_sequence_protocol(self) -> None:
        group = Group([FragmentList({"name": Text("Macaron")})])
        assert len(group) == 1
        assert group[0]["name"] == Text("Macaron")
        assert list(group[0]) == ["name"]

    def test_resolver_is_threaded_through(self) -> None:
        link = DocumentLink(id="x", type="product", slug="cupcakes")
        group = Group([FragmentList({"link": link})])
        assert '<a href="/product/cupcakes">' in group.as_html(_resolve)


class TestMultiple:
    def test_as_html_joins_lines(self) -> None:
        multiple = Multiple([Text("a"), Text("b")])
        assert multiple.as_html() == '<span class="text">a</span>\n<span class="text">b</span>'

    def test_as_text_joins_lines(self) -> None:
        assert Multiple([Text("a"), Text("b")]).as_text() == "a\nb"

    def test_as_text_fails_on_non_text_member(self) -> None:
        with pytest.raises(UnsupportedOperationError):
            Multiple([Text("a"), WebLink("https://example.org/")]).as_text()

    def test_push(self) -> None:
        multiple = Multiple([])
        multiple.push(Text("a"))
        assert len(multiple) == 1
        assert multiple[0] == Text("a")
