"""Plugin request structures sent by the GraphQL engine.

The engine posts loosely shaped JSON bodies at each lifecycle hook. They
are validated into these models at the boundary so the decision core only
ever sees well-formed requests.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gqlcache.core.exceptions import RequestValidationError

RequestT = TypeVar("RequestT", bound="PreParseRequest")


class RawRequest(BaseModel):
    """The GraphQL request as the client sent it.

    Fields other than ``query``, ``operationName`` and ``variables`` are kept
    as extras so they can take part in the cache key.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    query: str = Field(min_length=1)
    operation_name: str | None = Field(default=None, alias="operationName")
    variables: dict[str, Any] | None = None

    @property
    def extra_fields(self) -> dict[str, Any]:
        """Raw-request members outside the itemized ones."""
        return dict(self.model_extra or {})


class Session(BaseModel):
    """Session resolved by the engine for the caller."""

    model_config = ConfigDict(extra="allow")

    role: str | None = None
    variables: dict[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the session as it was received."""
        return self.model_dump(exclude_unset=True)


class PreParseRequest(BaseModel):
    """Body of a pre-parse hook call."""

    model_config = ConfigDict(populate_by_name=True)

    raw_request: RawRequest = Field(alias="rawRequest")
    session: Session | None = None

    @classmethod
    def from_body(cls: type[RequestT], body: Any) -> RequestT:
        """Validate a decoded JSON body.

        Args:
            body: The decoded request body.

        Returns:
            A validated request of this type.

        Raises:
            RequestValidationError: If the body does not have the expected
                shape.
        """
        try:
            return cls.model_validate(body)
        except ValidationError as e:
            raise RequestValidationError(_describe(e)) from e

    def session_dict(self) -> dict[str, Any] | None:
        return self.session.as_dict() if self.session is not None else None


class PreResponseRequest(PreParseRequest):
    """Body of a pre-response hook call; carries the engine's response."""

    response: dict[str, Any]


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    if location:
        return f"{location}: {first['msg']}"
    return first["msg"]
