"""Mediator: dispatches a request to its handler through a precomposed behavior chain.

Invariants:
    - Chains are composed once in build(); send() only looks up and awaits
    - Lookup is by exact runtime type of the request (no MRO walk)
    - Unknown request types raise HandlerNotRegistered
    - The mediator translates no errors: whatever a link raises leaves send() unchanged

Design Decisions:
    - Builder + frozen Mediator: registration is startup-only, the registry is a
      read-only mapping afterwards, so dispatch needs no locking
    - functools.partial per link over nested closures: each link is inspectable
    - Per-type behavior lists override the pipeline-wide defaults when given
"""

import logging
from functools import partial
from types import MappingProxyType
from typing import Mapping, Sequence

from purchase_service.core.errors import HandlerNotRegistered
from purchase_service.mediator.types import (
    NextCall, PipelineBehavior, Request, RequestHandler, TResponse,
)

logger = logging.getLogger(__name__)


def compose_pipeline(
    handler: RequestHandler, behaviors: Sequence[PipelineBehavior],
) -> NextCall:
    """Wrap handler.handle so behaviors[0] runs first on the way in."""
    call: NextCall = handler.handle
    for behavior in reversed(behaviors):
        call = partial(behavior.handle, next_call=call)
    return call


class Mediator:
    """Sends requests down their registered pipelines."""

    def __init__(self, pipelines: Mapping[type, NextCall]):
        self._pipelines = MappingProxyType(dict(pipelines))

    @property
    def registered_types(self) -> frozenset[type]:
        return frozenset(self._pipelines)

    async def send(self, request: Request[TResponse]) -> TResponse:
        pipeline = self._pipelines.get(type(request))
        if pipeline is None:
            raise HandlerNotRegistered(type(request))
        return await pipeline(request)


class MediatorBuilder:
    """Startup-time registry of behaviors and handlers."""

    def __init__(self):
        self._behaviors: list[PipelineBehavior] = []
        self._handlers: dict[
            type, tuple[RequestHandler, Sequence[PipelineBehavior] | None]
        ] = {}

    def add_behavior(self, behavior: PipelineBehavior) -> "MediatorBuilder":
        """Append a pipeline-wide behavior (inner to those added before it)."""
        self._behaviors.append(behavior)
        return self

    def register(
        self,
        request_type: type[Request],
        handler: RequestHandler,
        behaviors: Sequence[PipelineBehavior] | None = None,
    ) -> "MediatorBuilder":
        if request_type in self._handlers:
            raise ValueError(
                f"Handler already registered for {request_type.__name__}",
            )
        self._handlers[request_type] = (
            handler, list(behaviors) if behaviors is not None else None,
        )
        return self

    def build(self) -> Mediator:
        pipelines = {
            request_type: compose_pipeline(
                handler, self._behaviors if behaviors is None else behaviors,
            )
            for request_type, (handler, behaviors) in self._handlers.items()
        }
        logger.info(
            f"Mediator built with {len(pipelines)} request type(s) "
            f"and {len(self._behaviors)} behavior(s)",
        )
        return Mediator(pipelines)
