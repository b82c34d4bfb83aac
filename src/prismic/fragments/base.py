"""The rendering contract shared by every fragment kind.

Every fragment exposes two operations:

* :meth:`Fragment.as_html` -- serialise to an HTML string. Document links
  inside the fragment are turned into URLs by the *link_resolver*.
* :meth:`Fragment.as_text` -- extract plain text. Kinds with no sensible
  plain-text form keep the default implementation, which raises
  :class:`~prismic.exceptions.UnsupportedOperationError`.
"""

from __future__ import annotations

import html
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Optional

from prismic.exceptions import UnsupportedOperationError

if TYPE_CHECKING:
    from prismic.fragments.links import DocumentLink

LinkResolverFunc = Callable[["DocumentLink"], str]
"""Maps a document link to the URL it should point to."""


class Fragment(ABC):
    """Base class for all content fragments."""

    @abstractmethod
    def as_html(self, link_resolver: Optional[LinkResolverFunc] = None) -> str:
        """Return the HTML serialisation of this fragment.

        Args:
            link_resolver: Turns document links into URLs. Only fragments
                that contain document links need it.
        """
        ...

    def as_text(self) -> str:
        """Return the plain-text content of this fragment.

        Raises:
            UnsupportedOperationError: For fragment kinds with no plain-text form.
        """
        raise UnsupportedOperationError(
            f"{type(self).__name__} fragments have no plain-text form"
        )


def escape_text(value: object) -> str:
    """Escape ``&``, ``<`` and ``>`` in element content."""
    return html.escape(str(value), quote=False)


def escape_attr(value: object) -> str:
    """Escape a value for use inside a double-quoted attribute."""
    return html.escape(str(value), quote=True)
