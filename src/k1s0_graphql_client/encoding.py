"""Request encoding for plain JSON and multipart upload operations.

Uploads follow the GraphQL multipart request convention
(https://github.com/jaydenseric/graphql-multipart-request-spec): an
``operations`` part with ``null`` placeholders where the files go, a ``map``
part pointing each file part at its placeholder, and one part per file keyed
by its position.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from .exceptions import GraphQlClientError
from .types import GraphQlQuery


def encode_operation(query: GraphQlQuery, variables: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return the JSON document for ``query``.

    ``variables`` overrides the query's own variables when given.
    """
    if variables is None:
        variables = query.variables or {}
    return {
        "operationName": query.operation_name,
        "query": query.query,
        "variables": variables,
    }


def build_json_request(
    url: str,
    query: GraphQlQuery,
    headers: dict[str, str] | None = None,
) -> httpx.Request:
    """Build a POST request carrying ``query`` as a single JSON document."""
    try:
        body = json.dumps(encode_operation(query)).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise GraphQlClientError(
            f"build http request error: {e}",
            GraphQlClientError.Code.BUILD_ERROR,
            cause=e,
        ) from e
    request_headers = dict(headers or {})
    request_headers["Content-Type"] = "application/json"
    return httpx.Request("POST", url, content=body, headers=request_headers)


def build_upload_map(count: int, single: bool) -> tuple[dict[str, Any], dict[str, list[str]]]:
    """Return the placeholder variables and the file map for ``count`` uploads."""
    if single:
        return {"file": None}, {"0": ["variables.file"]}
    file_map = {str(i): [f"variables.files.{i}"] for i in range(count)}
    return {"files": [None] * count}, file_map


def encode_upload_operation(
    query: GraphQlQuery,
    single: bool,
) -> tuple[dict[str, Any], dict[str, list[str]]]:
    """Return the ``operations`` and ``map`` documents for an upload.

    The placeholders replace the query's variables in the returned document;
    the query itself is left untouched.
    """
    if not query.uploads:
        raise GraphQlClientError(
            "build form data request error: has no files",
            GraphQlClientError.Code.BUILD_ERROR,
        )
    if single and len(query.uploads) != 1:
        raise GraphQlClientError(
            f"build form data request error: single upload expects one file, got {len(query.uploads)}",
            GraphQlClientError.Code.BUILD_ERROR,
        )
    placeholders, file_map = build_upload_map(len(query.uploads), single)
    return encode_operation(query, placeholders), file_map


def build_multipart_request(
    url: str,
    query: GraphQlQuery,
    single: bool,
    headers: dict[str, str] | None = None,
) -> httpx.Request:
    """Build a multipart/form-data POST request for an upload operation.

    httpx writes the form fields before the files, so the parts go out as
    ``operations``, ``map``, ``0``, ``1``, ... and sets the boundary in the
    ``Content-Type`` header.
    """
    operations, file_map = encode_upload_operation(query, single)
    # httpx sets the multipart Content-Type with its boundary.
    request_headers = {k: v for k, v in (headers or {}).items() if k.lower() != "content-type"}
    files = [
        (str(i), (upload.name, upload.content, upload.content_type))
        for i, upload in enumerate(query.uploads)
    ]
    try:
        fields = {
            "operations": json.dumps(operations),
            "map": json.dumps(file_map),
        }
        return httpx.Request("POST", url, data=fields, files=files, headers=request_headers)
    except (TypeError, ValueError) as e:
        raise GraphQlClientError(
            f"build form data request error: {e}",
            GraphQlClientError.Code.BUILD_ERROR,
            cause=e,
        ) from e
