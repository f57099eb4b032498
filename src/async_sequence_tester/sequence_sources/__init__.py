"""Sequence source exports."""

from .replayed_sequence import ReplayedSequence

__all__ = ["ReplayedSequence"]
