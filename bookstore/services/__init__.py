"""Services Layer — data access for route handlers.

Invariants:
    - Services receive their AsyncSession; they never create engines or sessions
"""
