"""k1s0 GraphQL client library."""

from .client import GraphQlClient, InMemoryGraphQlClient
from .config import GraphQlClientConfig
from .decoding import decode_response
from .encoding import (
    build_json_request,
    build_multipart_request,
    build_upload_map,
    encode_operation,
    encode_upload_operation,
)
from .exceptions import GraphQlClientError, GraphQlResponseError
from .http_client import HttpGraphQlClient
from .types import ErrorLocation, GraphQlError, GraphQlQuery, GraphQlResponse, Upload

__all__ = [
    "ErrorLocation",
    "GraphQlClient",
    "GraphQlClientConfig",
    "GraphQlClientError",
    "GraphQlError",
    "GraphQlQuery",
    "GraphQlResponse",
    "GraphQlResponseError",
    "HttpGraphQlClient",
    "InMemoryGraphQlClient",
    "Upload",
    "build_json_request",
    "build_multipart_request",
    "build_upload_map",
    "decode_response",
    "encode_operation",
    "encode_upload_operation",
]
