"""Numeric process exit codes used by the ``prismic`` command line.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~prismic.exceptions.PrismicError` subclass.
Shell wrappers can inspect the exit code to determine the failure class
without parsing stderr.

Example::

    $ prismic search --ref preview
    $ echo $?
    2   # EXIT_INVALID_USAGE -- no such ref
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command or API was used with invalid arguments."""

EXIT_AUTH_FAILURE = 3
"""The access token was missing or rejected."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404, unknown view or form)."""

EXIT_SERVER_ERROR = 5
"""The remote API returned an HTTP error status."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_PARSE_ERROR = 7
"""An API response could not be decoded into documents or fragments."""

EXIT_RENDER_ERROR = 8
"""A fragment could not be rendered (missing link resolver, no text form)."""
