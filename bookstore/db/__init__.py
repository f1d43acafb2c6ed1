"""Database Metadata — SQLAlchemy declarative Base shared by models and migrations.

Invariants:
    - Holds table metadata only; engine and sessions live in infrastructure/database.py
"""
