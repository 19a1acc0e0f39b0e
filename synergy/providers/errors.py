"""Errors shared by the provider implementations."""

from __future__ import annotations

import msgspec


class ResponseShapeError(RuntimeError):
    """Raised when a GraphQL payload does not match the expected structure."""

    @classmethod
    def missing(cls, field: str) -> ResponseShapeError:
        """Return an error for a missing GraphQL response field."""
        return cls(f"GraphQL response missing expected field: {field}")

    @classmethod
    def invalid(cls, query_name: str, detail: str) -> ResponseShapeError:
        """Return an error for a payload that fails structural decoding."""
        return cls(f"GraphQL response for {query_name} has unexpected shape: {detail}")


def decode_response[ResponseT: msgspec.Struct](
    data: dict[str, object], model: type[ResponseT], *, query_name: str
) -> ResponseT:
    """Decode a GraphQL ``data`` mapping into the response struct ``model``."""
    try:
        return msgspec.convert(data, type=model)
    except msgspec.ValidationError as exc:
        raise ResponseShapeError.invalid(query_name, str(exc)) from exc
