"""Services Layer: requests, handlers, conversion engine, rate cache and wiring.

Invariants:
    - Handlers are built once in pipeline.build_mediator and shared by all requests
    - Services depend on core protocols, never on concrete infrastructure

Design Decisions:
    - One file per concern for locality: requests, sanitizers, handlers, events
"""
