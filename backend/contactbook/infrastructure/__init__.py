"""Infrastructure Layer - store implementations and cross-cutting concerns.

Invariants:
    - Implements the Protocols in core/repository_protocols.py
    - All store calls wrapped with timeout and error mapping
"""
