"""GraphQL types."""

from __future__ import annotations

import json
import mimetypes
import os
from dataclasses import asdict, dataclass, field
from typing import IO, Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from .exceptions import GraphQlClientError, GraphQlResponseError

T = TypeVar("T")


@dataclass
class Upload:
    """A named binary stream attached to an upload operation."""

    name: str
    content: bytes | IO[bytes]
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> Upload:
        """Open ``path`` for reading and name the upload after its basename.

        Use it as a context manager so the file is closed once the request
        has been sent::

            with Upload.from_path("report.pdf") as upload:
                await client.single_upload(mutation, upload)
        """
        content_type, _ = mimetypes.guess_type(os.fspath(path))
        return cls(
            name=os.path.basename(path),
            content=open(path, "rb"),
            content_type=content_type or "application/octet-stream",
        )

    def close(self) -> None:
        if not isinstance(self.content, bytes):
            self.content.close()

    def __enter__(self) -> Upload:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass
class GraphQlQuery:
    """GraphQL query or mutation."""

    query: str
    variables: dict[str, Any] | None = None
    operation_name: str | None = None
    uploads: list[Upload] = field(default_factory=list)


@dataclass
class ErrorLocation:
    """Error location in a GraphQL document."""

    line: int
    column: int


@dataclass
class GraphQlError:
    """GraphQL error."""

    message: str
    locations: list[ErrorLocation] | None = None
    path: list[str | int] | None = None
    extensions: dict[str, Any] | None = None


@dataclass
class GraphQlResponse:
    """GraphQL response.

    ``query`` links back to the operation that produced this response. It is
    only used to name the operation in error messages and is never part of the
    wire payload.
    """

    data: dict[str, Any] | None = None
    errors: list[GraphQlError] | None = None
    query: GraphQlQuery | None = field(default=None, repr=False, compare=False)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def operation_name(self) -> str:
        if self.query is None or not self.query.operation_name:
            return "unnamed operation"
        return self.query.operation_name

    def format_error(self) -> str:
        """Render the operation name followed by the errors as indented JSON."""
        errors = [asdict(e) for e in self.errors or []]
        return f"{self.operation_name} error: {json.dumps(errors, indent=2)}"

    def guess(self, name: str, target: type[T]) -> T:
        """Extract ``data[name]`` and convert it into ``target``.

        ``target`` is anything pydantic can validate: a ``BaseModel``, a
        dataclass, ``list[Model]`` and so on. JSON keys are matched to fields
        by name, or by the field's alias when one is declared::

            class Person(BaseModel):
                full_name: str = Field(alias="name")
                age: int

            person = response.guess("person", Person)
            people = response.guess("people", list[Person])

        Raises:
            GraphQlClientError: ``NO_DATA`` when the response carries no data,
                ``MISSING_FIELD`` when ``name`` is absent from the data and
                ``CONVERSION_ERROR`` when the value does not fit ``target``.
            GraphQlResponseError: the response carries errors.
        """
        if self.data is None:
            raise GraphQlClientError(
                "guess error: has no data",
                GraphQlClientError.Code.NO_DATA,
            )
        if self.has_errors:
            raise GraphQlResponseError(self)
        if name not in self.data:
            raise GraphQlClientError(
                f"guess error: has no data about {name}",
                GraphQlClientError.Code.MISSING_FIELD,
            )
        try:
            # Strict JSON validation: a JSON string never turns into an int or bool.
            return TypeAdapter(target).validate_json(json.dumps(self.data[name]), strict=True)
        except (ValidationError, TypeError, ValueError) as e:
            raise GraphQlClientError(
                f"guess error: {e}",
                GraphQlClientError.Code.CONVERSION_ERROR,
                cause=e,
            ) from e
