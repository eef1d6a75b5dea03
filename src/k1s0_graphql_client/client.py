"""GraphQL client abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import replace

from .encoding import encode_upload_operation
from .exceptions import GraphQlClientError, GraphQlResponseError
from .types import GraphQlQuery, GraphQlResponse, Upload


class GraphQlClient(ABC):
    """Abstract GraphQL client.

    Every method raises :class:`GraphQlResponseError` when the server answers
    with errors, even if partial data came back with them.
    """

    @abstractmethod
    async def execute(self, query: GraphQlQuery, timeout: float | None = None) -> GraphQlResponse:
        ...

    @abstractmethod
    async def execute_mutation(
        self, mutation: GraphQlQuery, timeout: float | None = None
    ) -> GraphQlResponse:
        ...

    @abstractmethod
    async def single_upload(
        self, mutation: GraphQlQuery, upload: Upload, timeout: float | None = None
    ) -> GraphQlResponse:
        """Send ``upload`` as ``$file``."""
        ...

    @abstractmethod
    async def multi_upload(
        self,
        mutation: GraphQlQuery,
        uploads: Sequence[Upload],
        timeout: float | None = None,
    ) -> GraphQlResponse:
        """Send ``uploads`` as ``$files``, in order."""
        ...


class InMemoryGraphQlClient(GraphQlClient):
    """In-memory GraphQL client for testing."""

    def __init__(self) -> None:
        self._responses: dict[str, GraphQlResponse] = {}
        self._sent: list[GraphQlQuery] = []

    @property
    def sent_queries(self) -> list[GraphQlQuery]:
        """Get a copy of the queries sent so far, uploads included."""
        return list(self._sent)

    def set_response(self, operation_name: str, response: GraphQlResponse) -> None:
        self._responses[operation_name] = response

    async def execute(self, query: GraphQlQuery, timeout: float | None = None) -> GraphQlResponse:
        return self._resolve(query)

    async def execute_mutation(
        self, mutation: GraphQlQuery, timeout: float | None = None
    ) -> GraphQlResponse:
        return self._resolve(mutation)

    async def single_upload(
        self, mutation: GraphQlQuery, upload: Upload, timeout: float | None = None
    ) -> GraphQlResponse:
        upload_query = replace(mutation, uploads=[upload])
        encode_upload_operation(upload_query, single=True)
        return self._resolve(upload_query)

    async def multi_upload(
        self,
        mutation: GraphQlQuery,
        uploads: Sequence[Upload],
        timeout: float | None = None,
    ) -> GraphQlResponse:
        upload_query = replace(mutation, uploads=list(uploads))
        encode_upload_operation(upload_query, single=False)
        return self._resolve(upload_query)

    def _resolve(self, query: GraphQlQuery) -> GraphQlResponse:
        if not query.operation_name:
            raise GraphQlClientError(
                "No operation name provided",
                GraphQlClientError.Code.UNKNOWN_OPERATION,
            )
        if query.operation_name not in self._responses:
            raise GraphQlClientError(
                f"Operation not found: {query.operation_name}",
                GraphQlClientError.Code.OPERATION_NOT_FOUND,
            )
        self._sent.append(query)
        response = replace(self._responses[query.operation_name], query=query)
        if response.has_errors:
            raise GraphQlResponseError(response)
        return response
