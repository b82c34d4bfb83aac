"""HTTP client module for prismic.

Provides :class:`HttpClient`, a blocking client backed by
:class:`httpx.Client` with access-token injection, retry with exponential
backoff and typed error mapping.

Example::

    from prismic.client import HttpClient

    with HttpClient(access_token=token) as client:
        data = client.get_json("https://repo.prismic.io/api")
"""

from prismic.client.sync_client import HttpClient

__all__ = ["HttpClient"]
