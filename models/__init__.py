"""Data models for Quote Widget.

Updates: v0.1.0 - 2026-09-02 - Export Quote dataclass.
"""

from .quote_model import Quote

__all__ = ["Quote"]
