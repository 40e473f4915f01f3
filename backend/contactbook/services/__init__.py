"""Service Layer - request handlers orchestrating validation, identifiers and stores.

Invariants:
    - One pass per call, no state kept between requests
    - Failures leave as ContactBookError subclasses; the transport maps them to statuses
    - Store access only through core.repository_protocols (stores are injected)
"""
