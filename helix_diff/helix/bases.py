from enum import IntEnum
from typing import Iterable, Tuple

from ..exceptions import InvalidInputError

# Bases stored per storage unit (one byte, two bits per base)
PACKED_SIZE = 4
BITS_PER_BASE = 2
BASE_MASK = (1 << BITS_PER_BASE) - 1


class Base(IntEnum):
    A = 0
    C = 1
    G = 2
    T = 3

    @classmethod
    def from_letter(cls, letter: str) -> "Base":
        try:
            return cls[letter.upper()]
        except KeyError:
            raise InvalidInputError(f"Unsupported base letter: {letter!r}") from None


def pack(*bases: Base) -> int:
    """
    Pack up to PACKED_SIZE bases into one storage unit.
    The first base occupies the most significant bits.
    """
    if len(bases) > PACKED_SIZE:
        raise ValueError(f"At most {PACKED_SIZE} bases fit in one unit, got {len(bases)}")
    unit = 0
    for base in bases:
        unit = (unit << BITS_PER_BASE) | int(base)
    return unit


def unpack(unit: int, packed_size: int = PACKED_SIZE) -> Tuple[Base, ...]:
    """Inverse of pack() for a unit holding packed_size bases."""
    return tuple(
        Base((unit >> (BITS_PER_BASE * (packed_size - 1 - i))) & BASE_MASK)
        for i in range(packed_size)
    )


def pack_sequence(bases: Iterable[Base], packed_size: int = PACKED_SIZE) -> bytes:
    """Pack bases into storage units; the length must be a multiple of packed_size."""
    bases = list(bases)
    if len(bases) % packed_size:
        raise ValueError(f"{len(bases)} bases do not fill whole units of {packed_size}")
    return bytes(pack(*bases[i:i + packed_size]) for i in range(0, len(bases), packed_size))


def bases_from_string(text: str) -> Tuple[Base, ...]:
    return tuple(Base.from_letter(c) for c in text)
