"""Database Declarations: SQLAlchemy Base shared by models and migrations.

Invariants:
    - Single declarative Base per process
    - Engine and sessions live in infrastructure/database.py
"""
