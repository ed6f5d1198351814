"""
Storage abstractions for the interviewer runtime.

Includes:
- SessionStore: in-progress sessions (in-memory, TTL + LRU)
- SessionExportStore: saved sessions as JSON files
- ConfigStore: interview config (defaults + stored overrides)
- LogStore: append-only JSONL event log
"""
