"""Exceptions raised by locomotion_sample."""

from __future__ import annotations


class AlreadyAssignedError(RuntimeError):
    """A write-once field was assigned a second time."""
