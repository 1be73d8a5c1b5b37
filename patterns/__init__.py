"""Reusable patterns the task vertical is built from.

Each module is a self-contained pattern: a pure-function rules engine, an
in-memory repository, and dataclass domain configuration.
"""
