"""Breadth-first keyword crawler with per-identity streaming sessions."""
