"""Tasks vertical — in-memory task tracker.

Every pattern of the project working together in one domain:
- Pydantic record and request models with closed status/priority enums
- In-memory repository with a monotonic id generator and a single lock
- Pure-function field rules for create, replace and patch
- Pure query engine (filter, search, sort) and stats aggregator
- FastAPI router with store injection via Depends
"""
