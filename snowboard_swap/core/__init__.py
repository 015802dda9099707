"""Core Layer: pure domain logic, no IO, no async, no network.

Invariants:
    - No module in core/ imports from services/, infrastructure/, or schemas/
    - Gate and validation functions are pure and deterministic
"""
