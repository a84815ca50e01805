"""
HTTP layer for the wording checker.

Exposes the JSON serialisers shared by the API and any other frontend
that needs verdict payloads.
"""

from .schema import serialize_display, serialize_program, serialize_verdict

__all__ = ["serialize_display", "serialize_program", "serialize_verdict"]
