"""Persistence layer for the collection store."""
