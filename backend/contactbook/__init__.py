"""Contact Book - contacts and groups over an HTTP JSON API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
