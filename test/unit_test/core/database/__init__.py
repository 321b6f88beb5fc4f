"""Unit tests for the database layer.

Repositories run against a fresh in-memory SQLite database per test, so no
external database service is needed.
"""
