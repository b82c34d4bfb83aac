"""Exception hierarchy for prismic.

All exceptions inherit from :class:`PrismicError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`prismic.exit_codes`.
Library callers catch the specific subclasses; the command-line entry point
in :func:`prismic.app.main` catches ``PrismicError`` and exits with the
appropriate code.

Subclass hierarchy::

    PrismicError (exit 1)
    +-- InvalidUsageError          (exit 2)
    |   +-- InvalidCapacityError
    |   +-- NoRefSetError
    +-- AuthError                  (exit 3)
    +-- NotFoundError              (exit 4)
    |   +-- ViewNotFoundError
    |   +-- RefNotFoundError
    |   +-- FormNotFoundError
    +-- ServerError                (exit 5)
    +-- ConnectionError_           (exit 6)
    +-- ParseError                 (exit 7)
    +-- MissingResolverError       (exit 8)
    +-- UnsupportedOperationError  (exit 8)
    +-- ConfigError                (exit 1)
"""

from prismic.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_PARSE_ERROR,
    EXIT_RENDER_ERROR,
    EXIT_SERVER_ERROR,
)


class PrismicError(Exception):
    """Base exception for all prismic errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`prismic.exit_codes`.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(PrismicError):
    """Raised for invalid arguments, such as an unknown search form field."""

    exit_code = EXIT_INVALID_USAGE


class InvalidCapacityError(InvalidUsageError):
    """Raised when a cache capacity below 1 is requested."""

    def __init__(self, capacity: int):
        super().__init__(f"Cache capacity must be at least 1, got {capacity}")
        self.capacity = capacity


class NoRefSetError(InvalidUsageError):
    """Raised when a search form is submitted without a ref."""


class AuthError(PrismicError):
    """Raised when the API rejects the access token (HTTP 401 / 403)."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(PrismicError):
    """Raised when the API returns HTTP 404 or a named item does not exist."""

    exit_code = EXIT_NOT_FOUND


class ViewNotFoundError(NotFoundError):
    """Raised when an image has no view with the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Image view '{name}' does not exist")
        self.name = name


class RefNotFoundError(NotFoundError):
    """Raised when the API has no ref with the requested label."""


class FormNotFoundError(NotFoundError):
    """Raised when the API has no search form with the requested name."""


class ServerError(PrismicError):
    """Raised when the API returns an HTTP error status other than 401/403/404."""

    exit_code = EXIT_SERVER_ERROR


class ConnectionError_(PrismicError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ParseError(PrismicError):
    """Raised when a response body or fragment JSON has an unexpected shape."""

    exit_code = EXIT_PARSE_ERROR


class MissingResolverError(PrismicError):
    """Raised when a document link must be rendered but no link resolver was given."""

    exit_code = EXIT_RENDER_ERROR


class UnsupportedOperationError(PrismicError):
    """Raised by ``as_text`` on fragment kinds that have no plain-text form."""

    exit_code = EXIT_RENDER_ERROR


class ConfigError(PrismicError):
    """Raised for configuration problems (invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
