"""Pydantic Schemas: wire DTOs for the remote REST API.

Invariants:
    - Wire field names are snake_case; domain mapping happens in to_domain()
    - Enum-like wire strings are validated during mapping, not during parsing
"""
