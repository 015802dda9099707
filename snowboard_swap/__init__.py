"""SnowboardSwap Client Core: marketplace listings, mutual-follow chat, group trips.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
