import logging
import random

import numpy as np
import pytest

from helix_diff.helix.bases import Base, bases_from_string, pack_sequence
from helix_diff.helix.streams import NUM_CHROMOSOMES, InMemoryHelixStream

TELOMERE = "TTAGGG"


def random_bases(length: int, seed: int) -> str:
    rng = random.Random(seed)
    return "".join(rng.choice("ACGT") for _ in range(length))


def mutate(text: str, position: int) -> str:
    """Substitute the base at position with a different one."""
    replacement = "C" if text[position] != "C" else "G"
    return text[:position] + replacement + text[position + 1:]


def helix_from_string(text: str, chunk_size: int = 128, packed_size: int = 1) -> InMemoryHelixStream:
    return InMemoryHelixStream(pack_sequence(bases_from_string(text), packed_size), chunk_size, packed_size)


class StringPerson:
    """Person over plain base strings, one base per storage unit."""

    def __init__(self, chromosomes, chunk_size: int = 16):
        self.sequences = list(chromosomes)
        self.chunk_size = chunk_size
        self.requested = []

    def chromosomes(self):
        return len(self.sequences)

    def chromosome(self, index):
        self.requested.append(index)
        seq = self.sequences[index]
        if not isinstance(seq, str):
            return seq
        return helix_from_string(seq, self.chunk_size)


class SyntheticHelixStream:
    """
    Long constant stream generated on the fly, with optional point mutations.
    Chunks are numpy arrays so chromosome-23 sized streams stay cheap.
    """

    def __init__(self, length: int, mutations=None, fill: Base = Base.C, chunk_size: int = 1 << 22):
        self.length = length
        self.mutations = dict(mutations or {})
        self.fill = fill
        self.chunk_size = chunk_size
        self.position = 0

    def seek(self, unit_index):
        self.position = unit_index

    def read(self):
        stop = min(self.position + self.chunk_size, self.length)
        chunk = np.full(max(0, stop - self.position), int(self.fill), dtype=np.uint8)
        for index, base in self.mutations.items():
            if self.position <= index < stop:
                chunk[index - self.position] = int(base)
        self.position = stop
        return chunk

    def size(self):
        return self.length


class FailingHelixStream:
    """Stream whose reads always fail."""

    def __init__(self, length: int = 64):
        self.length = length

    def seek(self, unit_index):
        pass

    def read(self):
        raise OSError("device not ready")

    def size(self):
        return self.length


class SizeOnlyHelixStream:
    """Stream that only answers size(); any seek or read fails the test."""

    def __init__(self, size: int):
        self._size = size

    def seek(self, unit_index):
        raise AssertionError("seek() must not be called")

    def read(self):
        raise AssertionError("read() must not be called")

    def size(self):
        return self._size


def genome(seed: int = 1, length: int = 120):
    """23 distinct telomere-capped chromosomes."""
    return [
        TELOMERE * 2 + "C" + random_bases(length, seed * 100 + idx) + "C" + TELOMERE * 2
        for idx in range(NUM_CHROMOSOMES)
    ]


@pytest.fixture(autouse=True)
def reset_root_logger():
    root = logging.getLogger()
    before = list(root.handlers)
    yield
    for handler in [h for h in root.handlers if h not in before]:
        root.removeHandler(handler)
        handler.close()
