"""Windowed differencing with bounded pairwise alignment."""

from .records import Difference, Subsection
from .differencer import SequenceDifferencer

__all__ = [
    'Difference',
    'Subsection',
    'SequenceDifferencer'
]
