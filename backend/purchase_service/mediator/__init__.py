"""Request Pipeline: typed command/query dispatch through ordered behaviors.

Invariants:
    - One handler per concrete request type; registry frozen once built
    - Behaviors wrap handlers in registration order (first registered = outermost)

Design Decisions:
    - Explicit registration in the composition root, no auto-discovery
"""
