"""
Shared utilities for HERALD.

Common functionality used across contexts:
- Logger setup with provenance
- JSON Lines event log
- Timestamps
"""

from herald.utils.timestamp import format_timestamp, now_exact

__all__ = ["format_timestamp", "now_exact"]
