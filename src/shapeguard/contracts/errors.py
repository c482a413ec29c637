"""Structured failures raised by the validator and schema loader.

Two families:
- ValidationFailure: the DATA does not conform (recoverable by the caller,
  e.g. mapped to a 400 response)
- SchemaError: the SCHEMA itself is broken (programmer/config mistake,
  should crash loudly)

Every failure carries an ErrorKind, a display message, and the field path
from the root value to the offending node.
"""

from __future__ import annotations

from typing import Any

from shapeguard.contracts.enums import ErrorKind

PathSegment = str | int


def format_path(path: tuple[PathSegment, ...]) -> str:
    """Render a field path as ``a.b[2].c``.

    The root path renders as ``$``.
    """
    if not path:
        return "$"
    rendered = ""
    for segment in path:
        if isinstance(segment, int):
            rendered += f"[{segment}]"
        elif rendered:
            rendered += f".{segment}"
        else:
            rendered = segment
    return rendered


class ShapeguardError(Exception):
    """Base class for every failure this package raises."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        path: tuple[PathSegment, ...] = (),
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.path = path

    @property
    def location(self) -> str:
        """Dotted form of the path."""
        return format_path(self.path)

    def __str__(self) -> str:
        if self.path:
            return f"{self.location}: {self.message}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serializable form for logs and protocol responses."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "path": list(self.path),
        }


class ValidationFailure(ShapeguardError):
    """Raised when a value violates its schema.

    Attributes:
        kind: Which constraint failed
        message: Human-readable message naming the description label
        path: Field path from the validated root to the failing node
        description: The description label of the schema that failed
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        path: tuple[PathSegment, ...] = (),
        description: str | None = None,
    ) -> None:
        super().__init__(kind, message, path=path)
        self.description = description

    def with_prefix(self, segment: PathSegment) -> ValidationFailure:
        """Return the same failure relocated under ``segment``."""
        return ValidationFailure(
            self.kind,
            self.message,
            path=(segment, *self.path),
            description=self.description,
        )

    def __repr__(self) -> str:
        return f"ValidationFailure({self.kind.value!r}, {self.message!r}, path={self.path!r})"


class SchemaError(ShapeguardError):
    """Raised when a schema description is itself invalid."""

    pass


class UnsupportedTypeError(SchemaError):
    """Raised when a schema carries a type tag outside the five variants."""

    def __init__(self, tag: Any, *, path: tuple[PathSegment, ...] = ()) -> None:
        super().__init__(
            ErrorKind.UNSUPPORTED_TYPE,
            f"Unsupported schema type: {tag!r}",
            path=path,
        )
        self.tag = tag


class SchemaDefinitionError(SchemaError):
    """Raised when a plain-data schema has a known tag but malformed fields.

    The ``errors`` attribute holds (location, message) pairs taken from
    the underlying pydantic ValidationError.
    """

    def __init__(
        self,
        message: str,
        *,
        errors: list[tuple[str, str]] | None = None,
        path: tuple[PathSegment, ...] = (),
    ) -> None:
        super().__init__(ErrorKind.INVALID_SCHEMA, message, path=path)
        self.errors = errors or []
