"""Services Layer: in-memory owners of accounts, threads, trips, and the listing feed.

Invariants:
    - Each service is the single writer of its collections
    - Commands are atomic under the service lock; queries return snapshots
    - Acting identity is passed explicitly or via an AccountProvider
"""
