"""Error taxonomy for gqlcache.

Every error raised inside a decision flow derives from ``GqlCacheError`` and
carries the HTTP-style status it maps to at the request boundary.
"""


class GqlCacheError(Exception):
    """Base class for all gqlcache errors."""

    status: int = 500
    user_facing: bool = False


class AuthError(GqlCacheError):
    """Raised when the shared-secret header is missing or wrong."""

    status = 401
    user_facing = True


class RequestValidationError(GqlCacheError):
    """Raised when a plugin request body has the wrong shape."""

    status = 400
    user_facing = True


class QueryParseError(GqlCacheError):
    """Raised when the query text is not a valid GraphQL document."""

    status = 400
    user_facing = True


class MissingHeaderError(GqlCacheError):
    """Raised when a header required by the cache key is absent."""

    status = 400
    user_facing = True

    def __init__(self, header: str) -> None:
        self.header = header
        super().__init__(
            f"Required header '{header}' for cache key is missing from request"
        )


class StoreUnavailableError(GqlCacheError):
    """Raised when the cache store backend cannot be reached."""


class SerializationError(GqlCacheError):
    """Raised when serialization or deserialization fails."""


class ConfigurationError(GqlCacheError):
    """Raised when the start-up configuration is invalid."""
