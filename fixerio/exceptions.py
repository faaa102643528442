"""Exceptions raised by the fixer.io client.

Every failure surfaces as one of three kinds, whatever the underlying
cause:

- ``ConnectionError``: the request could not be completed (connection
  refused, timeout, DNS failure, HTTP error status).
- ``ResponseError``: the request completed but the body is not a rates
  response.
- ``ConfigurationError``: the client was configured with a value it
  cannot use, raised at configuration time.

``ConnectionError`` shadows the builtin of the same name inside this
package, the same way ``requests.exceptions.ConnectionError`` does.
Import it qualified (``fixerio.ConnectionError``) where both are in scope.
"""

MALFORMED_RESPONSE = "Response body is malformed."


class FixerioError(Exception):
    """Base class for all errors raised by this package."""


class ConnectionError(FixerioError):  # noqa: A001
    """The HTTP request failed at the transport level."""


class ResponseError(FixerioError):
    """The response body could not be interpreted as a rates response."""

    def __init__(self, message: str = MALFORMED_RESPONSE):
        super().__init__(message)


class ConfigurationError(FixerioError, ValueError):
    """A configuration value was rejected."""
