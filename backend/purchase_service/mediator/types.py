"""Mediator Types: request markers and the contracts handlers and behaviors implement.

Invariants:
    - Every concrete request subclasses Command or Query (or Request directly)
    - Requests are immutable values (frozen dataclasses)
    - A behavior receives the request plus the next link; calling it is optional

Design Decisions:
    - Generic[TResponse] on the request marker: send() is typed by the request it gets
    - Cancellation is asyncio task cancellation: no token is threaded through
      signatures, CancelledError reaches every awaited link
"""

from typing import Any, Awaitable, Callable, Generic, Mapping, Protocol, Sequence, TypeVar

TResponse = TypeVar("TResponse")
TRequest = TypeVar("TRequest", bound="Request")


class Request(Generic[TResponse]):
    """Marker base: a value describing intent, answered by TResponse."""


class Command(Request[TResponse]):
    """State-changing intent."""


class Query(Request[TResponse]):
    """Read-only intent."""


NextCall = Callable[[Request], Awaitable[Any]]


class RequestHandler(Protocol):
    """Answers exactly one concrete request type."""
    async def handle(self, request: Any) -> Any: ...


class PipelineBehavior(Protocol):
    """Middleware around a handler. May replace the request or skip next_call."""
    async def handle(self, request: Request, next_call: NextCall) -> Any: ...


class CommandSanitizer(Protocol[TRequest]):
    """Normalizes a command and re-validates it.

    Returns (sanitized, errors). A non-empty errors mapping (field -> messages)
    means the command must not reach its handler.
    """
    def sanitize(
        self, command: TRequest,
    ) -> tuple[TRequest, Mapping[str, Sequence[str]] | None]: ...
