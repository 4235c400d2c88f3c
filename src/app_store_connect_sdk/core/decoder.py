"""Response decoding shared by the sync and async clients.

The status class alone decides which schema a body is read against:
2xx bodies are parsed as the expected payload, everything else as the
API's error document.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..errors import DecodeError, ServerError
from ..models import ErrorDocument
from ..types import Failure, RawResponse, Success, classify
from .errors import ErrorFactory

T = TypeVar("T")


class ResponseDecoder:
    """Turns a RawResponse into a typed payload or raises a typed error."""

    def __init__(self) -> None:
        self._adapters: dict[Any, TypeAdapter[Any]] = {}

    def _adapter(self, response_type: type[T]) -> TypeAdapter[T]:
        adapter = self._adapters.get(response_type)
        if adapter is None:
            adapter = TypeAdapter(response_type)
            self._adapters[response_type] = adapter
        return adapter

    def decode(
        self,
        raw: RawResponse,
        response_type: type[T],
        *,
        correlation_id: str | None = None,
    ) -> T:
        """Decode a response expected to carry a ``response_type`` payload.

        Raises:
            DecodeError: If a 2xx body does not match ``response_type`` or a
                non-2xx body is not an error document.
            ServerError: If a non-2xx body is a well-formed error document.
        """
        outcome = classify(raw)
        if isinstance(outcome, Failure):
            raise self._failure_error(outcome, correlation_id)
        try:
            return self._adapter(response_type).validate_json(outcome.body)
        except PydanticValidationError as e:
            raise ErrorFactory.decode_failure(
                e,
                status_code=outcome.status_code,
                body=outcome.body,
                correlation_id=correlation_id,
            ) from e

    def decode_empty(
        self,
        raw: RawResponse,
        *,
        correlation_id: str | None = None,
    ) -> None:
        """Decode a response with no success payload; 2xx bodies are discarded.

        Raises:
            DecodeError: If a non-2xx body is not an error document.
            ServerError: If a non-2xx body is a well-formed error document.
        """
        outcome = classify(raw)
        if isinstance(outcome, Success):
            return
        raise self._failure_error(outcome, correlation_id)

    def _failure_error(
        self,
        outcome: Failure,
        correlation_id: str | None,
    ) -> DecodeError | ServerError:
        try:
            document = ErrorDocument.model_validate_json(outcome.body)
        except PydanticValidationError as e:
            error = ErrorFactory.decode_failure(
                e,
                status_code=outcome.status_code,
                body=outcome.body,
                error_body=True,
                correlation_id=correlation_id,
            )
            error.__cause__ = e
            return error
        return ErrorFactory.server_error(
            document.errors,
            status_code=outcome.status_code,
            correlation_id=correlation_id,
        )
