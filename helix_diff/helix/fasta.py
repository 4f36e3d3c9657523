import pysam
from typing import List

from .bases import Base
from ..exceptions import InvalidInputError
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)

# Bases fetched per read() call
DEFAULT_CHUNK_SIZE = 1 << 16

_LETTER_TO_BASE = {letter: base for base in Base for letter in (base.name, base.name.lower())}


class FastaHelixStream:
    """
    HelixStream over one record of an indexed FASTA file.
    FASTA stores one base per character, so a storage unit is one base
    and comparisons over these streams use packed_size=1.
    """

    def __init__(self, fasta_path: str, reference: str, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.fasta_path = str(fasta_path)
        self.reference = reference
        self.chunk_size = chunk_size
        # Each stream owns its handle; pysam handles are not shared between threads
        self._fasta = pysam.FastaFile(self.fasta_path)
        self._length = self._fasta.get_reference_length(reference)
        self._position = 0

    def seek(self, unit_index: int) -> None:
        if not 0 <= unit_index <= self._length:
            raise IndexError(f"Seek to {unit_index} outside {self.reference} ({self._length} bases)")
        self._position = unit_index

    def read(self) -> List[Base]:
        stop = min(self._position + self.chunk_size, self._length)
        if stop <= self._position:
            return []
        seq = self._fasta.fetch(self.reference, self._position, stop)
        try:
            chunk = [_LETTER_TO_BASE[c] for c in seq]
        except KeyError as e:
            raise InvalidInputError(
                f"Unsupported base {e.args[0]!r} in {self.reference} near position {self._position}"
            ) from None
        self._position = stop
        return chunk

    def size(self) -> int:
        return self._length

    def close(self) -> None:
        self._fasta.close()


class FastaPerson:
    """Person backed by the first 23 records of a FASTA file, in file order."""

    def __init__(self, fasta_path: str, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.fasta_path = str(fasta_path)
        self.chunk_size = chunk_size
        try:
            with pysam.FastaFile(self.fasta_path) as fasta:
                self.references = list(fasta.references)
        except (OSError, ValueError) as e:
            raise InvalidInputError(f"Failed to open FASTA file {self.fasta_path}: {str(e)}")
        logger.info(f"Loaded {len(self.references)} records from {self.fasta_path}")

    def chromosomes(self) -> int:
        return len(self.references)

    def chromosome(self, index: int) -> FastaHelixStream:
        return FastaHelixStream(self.fasta_path, self.references[index], self.chunk_size)
