"""
Runtime package for the in-depth interviewer backend.

This package contains:
- API layer (FastAPI server + interview / config routes)
- Agents (interview session controller)
- Stores (in-memory sessions, saved sessions, config, event log)
- Models (Pydantic models for sessions, config and HTTP payloads)
"""
