"""Compilation orchestration for primary and secondary language sources."""
