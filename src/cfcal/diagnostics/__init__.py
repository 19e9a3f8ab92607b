"""Diagnostics package.

Standalone tools run through `cfcal diag <tool>`; nothing here is imported
by the library itself.
"""

__all__ = ["round_trip"]
