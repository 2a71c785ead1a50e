"""Dependency events emitted during compilation and their consumers."""
