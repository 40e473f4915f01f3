"""API Schemas - Pydantic request/response models.

Invariants:
    - Schemas live at the transport boundary only; core never imports them
"""
