"""Dispatch engine error types."""

from __future__ import annotations


class ProtocolViolation(RuntimeError):
    """Caller issued an event inconsistent with the engine state.

    These are driver bugs, not runtime conditions; nothing in the package
    catches them.
    """
