"""Helix stream and person contracts, with in-memory implementations."""

from typing import List, Protocol, Sequence, runtime_checkable

from .bases import Base, PACKED_SIZE, unpack

# Number of chromosomes in a valid sample
NUM_CHROMOSOMES = 23


@runtime_checkable
class HelixStream(Protocol):
    """Seekable, chunked source of one chromosome's bases.

    seek() and size() count storage units; read() returns the bases of the
    next chunk and an empty sequence at the end of the stream. Streams must
    accept seeks to earlier units so chromosome ends can be scanned backwards.
    """

    def seek(self, unit_index: int) -> None: ...

    def read(self) -> Sequence[Base]: ...

    def size(self) -> int: ...


@runtime_checkable
class Person(Protocol):
    """One genomic sample, exposed chromosome by chromosome."""

    def chromosomes(self) -> int: ...

    def chromosome(self, index: int) -> HelixStream: ...


class InMemoryHelixStream:
    """HelixStream over packed storage units held in memory."""

    def __init__(self, data: bytes, chunk_size: int = 128, packed_size: int = PACKED_SIZE):
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least one unit")
        self.data = bytes(data)
        self.chunk_size = chunk_size
        self.packed_size = packed_size
        self.position = 0

    def seek(self, unit_index: int) -> None:
        if not 0 <= unit_index <= len(self.data):
            raise IndexError(f"Seek to unit {unit_index} outside stream of {len(self.data)} units")
        self.position = unit_index

    def read(self) -> List[Base]:
        units = self.data[self.position:self.position + self.chunk_size]
        self.position += len(units)
        chunk = []
        for unit in units:
            chunk.extend(unpack(unit, self.packed_size))
        return chunk

    def size(self) -> int:
        return len(self.data)


class InMemoryPerson:
    """Person whose chromosomes are packed byte strings."""

    def __init__(self, chromosomes: Sequence[bytes], chunk_size: int = 128, packed_size: int = PACKED_SIZE):
        self._chromosomes = list(chromosomes)
        self.chunk_size = chunk_size
        self.packed_size = packed_size

    def chromosomes(self) -> int:
        return len(self._chromosomes)

    def chromosome(self, index: int) -> InMemoryHelixStream:
        # A fresh stream per call, so concurrent tasks never share a cursor
        return InMemoryHelixStream(self._chromosomes[index], self.chunk_size, self.packed_size)
