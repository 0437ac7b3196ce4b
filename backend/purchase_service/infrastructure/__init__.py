"""Infrastructure: database sessions, HTTP clients, logging setup.

Invariants:
    - Everything here does IO; core/ never imports from this package
"""
