"""Transport-level type definitions for the App Store Connect SDK."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal


@dataclass(frozen=True)
class RequestDescriptor:
    """One outbound call: method, absolute URL, optional query and JSON body."""

    method: str
    url: str
    query: list[tuple[str, str]] | None = None
    body: Any = None

    @property
    def has_body(self) -> bool:
        return self.body is not None


@dataclass(frozen=True)
class RawResponse:
    """Status code and full body text of a completed HTTP exchange."""

    status_code: int
    body: str


@dataclass(frozen=True)
class Success:
    """2xx response."""

    status_code: int
    body: str
    kind: Literal["success"] = "success"


@dataclass(frozen=True)
class Failure:
    """Any non-2xx response."""

    status_code: int
    body: str
    kind: Literal["failure"] = "failure"


ResponseOutcome = Success | Failure


def classify(response: RawResponse) -> ResponseOutcome:
    """Split a raw response on its status class only, never on body shape."""
    if response.status_code // 100 == 2:
        return Success(response.status_code, response.body)
    return Failure(response.status_code, response.body)
