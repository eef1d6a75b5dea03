"""レスポンスデコードのユニットテスト"""

import json

import pytest

from k1s0_graphql_client import (
    ErrorLocation,
    GraphQlClientError,
    GraphQlError,
    GraphQlQuery,
    decode_response,
)


def test_decode_data() -> None:
    response = decode_response(b'{"data": {"person": {"name": "Jack"}}}')
    assert response.data == {"person": {"name": "Jack"}}
    assert response.errors is None
    assert response.has_errors is False


def test_decode_errors() -> None:
    body = json.dumps(
        {
            "data": None,
            "errors": [
                {
                    "message": "Not found",
                    "path": ["user", 0, "name"],
                    "locations": [{"line": 2, "column": 4}],
                    "extensions": {"code": "NOT_FOUND"},
                }
            ],
        }
    )
    response = decode_response(body)
    assert response.data is None
    assert response.has_errors is True
    assert response.errors == [
        GraphQlError(
            message="Not found",
            locations=[ErrorLocation(line=2, column=4)],
            path=["user", 0, "name"],
            extensions={"code": "NOT_FOUND"},
        )
    ]


def test_decode_partial_data() -> None:
    """data とエラーが両方あっても、そのまま返すこと。"""
    response = decode_response(
        '{"data": {"user": {"name": "Jack"}}, "errors": [{"message": "friends failed"}]}'
    )
    assert response.data == {"user": {"name": "Jack"}}
    assert response.has_errors is True


def test_decode_keeps_query() -> None:
    query = GraphQlQuery(query="{ a }", operation_name="A")
    response = decode_response(b'{"data": {"a": 1}}', query)
    assert response.query is query
    assert response.operation_name == "A"


def test_decode_empty_envelope() -> None:
    response = decode_response(b"{}")
    assert response.data is None
    assert response.has_errors is False


@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"not json",
        b"[]",
        b'{"data": [1, 2]}',
        b'{"errors": {"message": "boom"}}',
        b'{"errors": [{"path": ["a"]}]}',
        b'{"errors": [{"message": "boom", "locations": [{"line": "one", "column": 1}]}]}',
        b'{"errors": [{"message": "x", "locations": [{"line": "3", "column": 1}]}]}',
        b'{"errors": [{"message": 1}]}',
    ],
)
def test_decode_malformed(body: bytes) -> None:
    with pytest.raises(GraphQlClientError) as exc_info:
        decode_response(body)
    assert exc_info.value.code == GraphQlClientError.Code.DECODE_ERROR
