import numpy as np

from .bases import PACKED_SIZE
from .streams import HelixStream
from ..exceptions import StreamFaultError


class HelixCursor:
    """
    Base-indexed access to a HelixStream that only keeps one chunk in memory.

    Indices outside the current chunk are served by seeking and reading
    again, so scans work for any chunk size and in either direction.
    When scanning backwards the cursor seeks far enough back that the next
    chunk ends at the requested base, once the stream's chunk size is known.
    """

    def __init__(self, helix: HelixStream, packed_size: int = PACKED_SIZE):
        self.helix = helix
        self.packed_size = packed_size
        self.length = helix.size() * packed_size
        self._chunk = np.empty(0, dtype=np.uint8)
        self._chunk_start = 0
        self._chunk_units = 0

    def __len__(self) -> int:
        return self.length

    def _covers(self, index: int) -> bool:
        return self._chunk_start <= index < self._chunk_start + len(self._chunk)

    def _read_at(self, unit: int) -> None:
        try:
            self.helix.seek(unit)
            chunk = self.helix.read()
        except StreamFaultError:
            raise
        except Exception as e:
            raise StreamFaultError(f"Failed to read at unit {unit}: {e}") from e

        self._chunk = np.asarray(chunk, dtype=np.uint8)
        self._chunk_start = unit * self.packed_size
        self._chunk_units = max(self._chunk_units, len(self._chunk) // self.packed_size)

    def _load(self, index: int, backward: bool = False) -> None:
        if not 0 <= index < self.length:
            raise IndexError(f"Base {index} outside helix of {self.length} bases")

        unit = index // self.packed_size
        if backward and self._chunk_units > 1:
            self._read_at(max(0, unit - self._chunk_units + 1))
            if self._covers(index):
                return
        self._read_at(unit)
        if not self._covers(index):
            raise StreamFaultError(
                f"Short read: chunk at unit {unit} holds {len(self._chunk)} bases, "
                f"base {index} not reached"
            )

    def base_at(self, index: int, backward: bool = False) -> int:
        if not self._covers(index):
            self._load(index, backward)
        return int(self._chunk[index - self._chunk_start])

    def window(self, start: int, stop: int) -> np.ndarray:
        """Bases in [start, stop) as a uint8 array, read forward chunk by chunk."""
        stop = min(stop, self.length)
        pieces = []
        pos = start
        while pos < stop:
            if not self._covers(pos):
                self._load(pos)
            offset = pos - self._chunk_start
            piece = self._chunk[offset:offset + (stop - pos)]
            pieces.append(piece)
            pos += len(piece)
        if not pieces:
            return np.empty(0, dtype=np.uint8)
        return np.concatenate(pieces)
