"""GraphQL client exceptions."""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import GraphQlResponse


class GraphQlClientError(Exception):
    """GraphQL client error."""

    class Code(Enum):
        BUILD_ERROR = auto()
        TRANSPORT_ERROR = auto()
        DEADLINE_EXCEEDED = auto()
        HTTP_ERROR = auto()
        DECODE_ERROR = auto()
        GRAPHQL_ERROR = auto()
        NO_DATA = auto()
        MISSING_FIELD = auto()
        CONVERSION_ERROR = auto()
        OPERATION_NOT_FOUND = auto()
        UNKNOWN_OPERATION = auto()

    def __init__(
        self,
        message: str,
        code: GraphQlClientError.Code,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause


class GraphQlResponseError(GraphQlClientError):
    """The server answered with a reply envelope that carries errors."""

    def __init__(self, response: GraphQlResponse) -> None:
        super().__init__(response.format_error(), GraphQlClientError.Code.GRAPHQL_ERROR)
        self.response = response
