"""Infrastructure Layer: REST client, token persistence, and logging setup.

Invariants:
    - Every network/parse failure is mapped to an APIError subclass (core/errors.py)
"""
