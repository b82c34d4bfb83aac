"""Composite fragments: repeatable groups and multi-valued fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from prismic.fragments.base import Fragment, LinkResolverFunc, escape_attr


def render_sections(
    fragments: dict[str, Fragment],
    link_resolver: Optional[LinkResolverFunc] = None,
) -> str:
    """Render each fragment as ``<section data-field="name">...</section>``, one per line."""
    return "\n".join(
        f'<section data-field="{escape_attr(name)}">{fragment.as_html(link_resolver)}</section>'
        for name, fragment in fragments.items()
    )


@dataclass
class FragmentList:
    """One entry of a :class:`Group`: fragments keyed by field name."""

    fragments: dict[str, Fragment] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Fragment:
        return self.fragments[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.fragments)

    def __len__(self) -> int:
        return len(self.fragments)

    def items(self):
        return self.fragments.items()

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return render_sections(self.fragments, link_resolver)


@dataclass
class Group(Fragment):
    """A repeatable set of sub-fields."""

    fragment_lists: list[FragmentList] = field(default_factory=list)

    def __getitem__(self, index: int) -> FragmentList:
        return self.fragment_lists[index]

    def __iter__(self) -> Iterator[FragmentList]:
        return iter(self.fragment_lists)

    def __len__(self) -> int:
        return len(self.fragment_lists)

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return "\n".join(fl.as_html(link_resolver) for fl in self.fragment_lists)


@dataclass
class Multiple(Fragment):
    """Several fragments stored under one field."""

    fragments: list[Fragment] = field(default_factory=list)

    def push(self, fragment: Fragment) -> None:
        self.fragments.append(fragment)

    def __getitem__(self, index: int) -> Fragment:
        return self.fragments[index]

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self.fragments)

    def __len__(self) -> int:
        return len(self.fragments)

    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        return "\n".join(f.as_html(link_resolver) for f in self.fragments)

    def as_text(self) -> str:
        return "\n".join(f.as_text() for f in self.fragments)
