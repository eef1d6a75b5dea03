"""Reply envelope decoding."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError

from .exceptions import GraphQlClientError
from .types import GraphQlError, GraphQlQuery, GraphQlResponse


class _Envelope(BaseModel):
    data: dict[str, Any] | None = None
    errors: list[GraphQlError] | None = None


def decode_response(body: str | bytes, query: GraphQlQuery | None = None) -> GraphQlResponse:
    """Decode a raw reply body into a :class:`GraphQlResponse`.

    This only checks the shape of the envelope, strictly: a JSON string where
    an int is expected is a decode error. A response whose ``errors``
    are set is returned as is, so callers that want partial data alongside
    errors can read it from here.

    Args:
        body: raw response body
        query: the operation the body answers, kept for error messages

    Raises:
        GraphQlClientError: ``DECODE_ERROR`` if the body is not valid JSON or
            does not have the reply envelope shape.
    """
    try:
        envelope = _Envelope.model_validate_json(body, strict=True)
    except ValidationError as e:
        raise GraphQlClientError(
            f"decode response error: {e}",
            GraphQlClientError.Code.DECODE_ERROR,
            cause=e,
        ) from e
    return GraphQlResponse(data=envelope.data, errors=envelope.errors, query=query)
