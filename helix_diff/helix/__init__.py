"""Bases, helix streams and the cursor used to scan them."""

from .bases import (
    Base,
    PACKED_SIZE,
    pack,
    unpack,
    pack_sequence,
    bases_from_string
)
from .streams import (
    HelixStream,
    Person,
    InMemoryHelixStream,
    InMemoryPerson
)
from .cursor import HelixCursor
from .fasta import FastaHelixStream, FastaPerson

__all__ = [
    'Base',
    'PACKED_SIZE',
    'pack',
    'unpack',
    'pack_sequence',
    'bases_from_string',
    'HelixStream',
    'Person',
    'InMemoryHelixStream',
    'InMemoryPerson',
    'HelixCursor',
    'FastaHelixStream',
    'FastaPerson'
]
