"""
Scheduling Infrastructure Layer

SQLAlchemy models and repository implementations.
"""
