"""Pipeline Behaviors: sanitization, logging and post-command side effects.

Invariants:
    - CommandSanitizationBehavior only touches Commands with a registered sanitizer
    - Sanitization errors raise RequestValidationError before the handler runs
    - RequestLoggingBehavior is a pure observer: never alters request/response,
      never suppresses exceptions (cancellation included)
    - CommandSideEffectBehavior publishes only after the inner chain succeeded;
      its own failures fail the whole request

Design Decisions:
    - Registration order in the composition root: sanitization → logging →
      side effect → handler, so rejected commands are never logged as started
      and side-effect failures are logged with the request's timing
    - Sanitizers and event factories keyed by exact command type
"""

import asyncio
import dataclasses
import logging
import time
from typing import Any, Callable, Mapping

from purchase_service.core.domain_types import RequestCategory
from purchase_service.core.errors import ErrorContext, RequestValidationError
from purchase_service.events.dispatcher import EventDispatcher
from purchase_service.mediator.types import (
    Command, CommandSanitizer, NextCall, Query, Request,
)

logger = logging.getLogger(__name__)

EventFactory = Callable[[Any, Any], Any]


def request_category(request: Request) -> RequestCategory:
    if isinstance(request, Command):
        return RequestCategory.COMMAND
    if isinstance(request, Query):
        return RequestCategory.QUERY
    return RequestCategory.REQUEST


def _payload(request: Request) -> Any:
    if dataclasses.is_dataclass(request):
        return dataclasses.asdict(request)
    return repr(request)


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class CommandSanitizationBehavior:
    """Normalizes commands with their sanitizer and rejects invalid ones."""

    def __init__(self, sanitizers: Mapping[type, CommandSanitizer]):
        self._sanitizers = dict(sanitizers)

    async def handle(self, request: Request, next_call: NextCall) -> Any:
        if not isinstance(request, Command):
            return await next_call(request)
        sanitizer = self._sanitizers.get(type(request))
        if sanitizer is None:
            return await next_call(request)

        request_name = type(request).__name__
        sanitized, errors = sanitizer.sanitize(request)
        if errors:
            logger.warning(
                f"Command {request_name} failed sanitization: {dict(errors)}",
                extra={"request_name": request_name, "error_code": "VALIDATION_ERROR"},
            )
            raise RequestValidationError(
                errors, ErrorContext(request_name=request_name),
            )

        if sanitized is not request:
            logger.debug(f"Command {request_name} sanitized successfully")
        return await next_call(sanitized)


class RequestLoggingBehavior:
    """Logs start, completion or failure of every request with elapsed time."""

    async def handle(self, request: Request, next_call: NextCall) -> Any:
        request_name = type(request).__name__
        category = request_category(request).value
        logger.info(
            f"Starting {category} {request_name}",
            extra={
                "request_name": request_name,
                "request_category": category,
                "payload": _payload(request),
            },
        )

        started = time.perf_counter()
        try:
            response = await next_call(request)
        except asyncio.CancelledError:
            logger.info(
                f"{category} {request_name} cancelled after {_elapsed_ms(started)}ms",
                extra={
                    "request_name": request_name,
                    "request_category": category,
                    "elapsed_ms": _elapsed_ms(started),
                },
            )
            raise
        except Exception:
            elapsed = _elapsed_ms(started)
            logger.error(
                f"{category} {request_name} failed after {elapsed}ms",
                exc_info=True,
                extra={
                    "request_name": request_name,
                    "request_category": category,
                    "elapsed_ms": elapsed,
                },
            )
            raise

        elapsed = _elapsed_ms(started)
        logger.info(
            f"Completed {category} {request_name} in {elapsed}ms",
            extra={
                "request_name": request_name,
                "request_category": category,
                "elapsed_ms": elapsed,
            },
        )
        return response


class CommandSideEffectBehavior:
    """After a successful command, publishes its follow-up event (if one is mapped)."""

    def __init__(
        self,
        dispatcher: EventDispatcher,
        event_factories: Mapping[type, EventFactory] | None = None,
    ):
        self._dispatcher = dispatcher
        self._event_factories = dict(event_factories or {})

    async def handle(self, request: Request, next_call: NextCall) -> Any:
        response = await next_call(request)
        if not isinstance(request, Command):
            return response

        factory = self._event_factories.get(type(request))
        if factory is None:
            logger.debug(f"Command {type(request).__name__} has no follow-up event")
            return response

        event = factory(request, response)
        logger.info(
            f"Command {type(request).__name__} completed; publishing {type(event).__name__}",
            extra={"event_type": type(event).__name__},
        )
        await self._dispatcher.publish(event)
        return response
