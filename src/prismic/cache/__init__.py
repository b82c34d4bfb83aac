"""In-memory response caching for prismic.

This package provides :class:`LruCache`, a bounded least-recently-used
store of parsed API responses keyed by full request URL, and a process-wide
default instance shared by every :class:`~prismic.api.Api` that is not given
its own cache.

The cache is consumed by :meth:`~prismic.api.SearchForm.submit` and cleared
by :meth:`~prismic.api.Api.refresh` when the master ref changes.
"""

from prismic.cache.lru import (
    DEFAULT_CAPACITY,
    LruCache,
    get_default_cache,
    reset_default_cache,
    set_default_cache,
)

__all__ = [
    "DEFAULT_CAPACITY",
    "LruCache",
    "get_default_cache",
    "reset_default_cache",
    "set_default_cache",
]
