"""Bookstore Application Package — books CRUD over HTTP/JSON.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
