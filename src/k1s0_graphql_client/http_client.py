"""GraphQL HTTP client implementation."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import replace

import httpx
import structlog

from .client import GraphQlClient
from .config import GraphQlClientConfig
from .decoding import decode_response
from .encoding import build_json_request, build_multipart_request
from .exceptions import GraphQlClientError, GraphQlResponseError
from .types import GraphQlQuery, GraphQlResponse, Upload

logger = structlog.get_logger(__name__)


class HttpGraphQlClient(GraphQlClient):
    """GraphQL client over httpx.

    When ``http_client`` is given it is shared by every call and never closed
    here. Otherwise each call opens and closes its own ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        config: GraphQlClientConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        headers = dict(config.headers)
        if config.api_key:
            headers["X-API-Key"] = config.api_key
        self._headers = headers
        self._http_client = http_client

    def copy(self, http_client: httpx.AsyncClient | None = None) -> HttpGraphQlClient:
        """Return a client for the same config that sends through ``http_client``."""
        return HttpGraphQlClient(self._config, http_client)

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._config.timeout_seconds)

    async def execute(self, query: GraphQlQuery, timeout: float | None = None) -> GraphQlResponse:
        request = build_json_request(self._config.url, query, self._headers)
        return await self._do(query, request, timeout)

    async def execute_mutation(
        self, mutation: GraphQlQuery, timeout: float | None = None
    ) -> GraphQlResponse:
        return await self.execute(mutation, timeout)

    async def single_upload(
        self, mutation: GraphQlQuery, upload: Upload, timeout: float | None = None
    ) -> GraphQlResponse:
        upload_query = replace(mutation, uploads=[upload])
        request = build_multipart_request(self._config.url, upload_query, True, self._headers)
        return await self._do(upload_query, request, timeout)

    async def multi_upload(
        self,
        mutation: GraphQlQuery,
        uploads: Sequence[Upload],
        timeout: float | None = None,
    ) -> GraphQlResponse:
        upload_query = replace(mutation, uploads=list(uploads))
        request = build_multipart_request(self._config.url, upload_query, False, self._headers)
        return await self._do(upload_query, request, timeout)

    async def _send(self, request: httpx.Request, timeout: float | None) -> httpx.Response:
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout
        try:
            async with asyncio.timeout_at(deadline):
                if self._http_client is not None:
                    return await self._http_client.send(request)
                async with self._make_client() as client:
                    return await client.send(request)
        except (TimeoutError, httpx.TimeoutException) as e:
            raise GraphQlClientError(
                "graphql do error: deadline exceeded",
                GraphQlClientError.Code.DEADLINE_EXCEEDED,
                cause=e,
            ) from e
        except httpx.HTTPError as e:
            # Deadline and cancellation take precedence over the transport error.
            if deadline is not None and loop.time() >= deadline:
                raise GraphQlClientError(
                    "graphql do error: deadline exceeded",
                    GraphQlClientError.Code.DEADLINE_EXCEEDED,
                    cause=e,
                ) from e
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise asyncio.CancelledError() from e
            logger.warning("graphql transport failed", url=str(request.url), error=str(e))
            raise GraphQlClientError(
                f"graphql do error: {e}",
                GraphQlClientError.Code.TRANSPORT_ERROR,
                cause=e,
            ) from e

    async def _do(
        self,
        query: GraphQlQuery,
        request: httpx.Request,
        timeout: float | None,
    ) -> GraphQlResponse:
        logger.debug(
            "graphql request",
            operation_name=query.operation_name,
            url=str(request.url),
            uploads=len(query.uploads),
        )
        resp = await self._send(request, timeout)
        logger.debug(
            "graphql response",
            operation_name=query.operation_name,
            status_code=resp.status_code,
        )
        try:
            response = decode_response(resp.content, query)
        except GraphQlClientError as e:
            if resp.status_code >= 400:
                raise GraphQlClientError(
                    f"graphql do error: HTTP {resp.status_code}: {resp.text}",
                    GraphQlClientError.Code.HTTP_ERROR,
                    cause=e,
                ) from e
            raise GraphQlClientError(
                f"graphql do error: {e}",
                GraphQlClientError.Code.DECODE_ERROR,
                cause=e,
            ) from e
        if response.has_errors:
            raise GraphQlResponseError(response)
        return response
