from enum import Enum

from ..helix.bases import PACKED_SIZE
from ..helix.streams import HelixStream

# Index of chromosome 23, the one that determines genetic sex
SEX_CHROMOSOME_IDX = 22

# Approx. lengths (in bases) of chromosome 23 for X/Y
X_CHROMOSOME_LEN = 156_000_000
Y_CHROMOSOME_LEN = 57_000_000


class SexChromosome(Enum):
    X = "X"
    Y = "Y"
    UNKNOWN = "unknown"


def _within_band(length: int, reference: int) -> bool:
    # Exclusive band [4/5, 5/4] around the reference length
    return 4 * reference // 5 < length < 5 * reference // 4


def classify_sex(helix: HelixStream, packed_size: int = PACKED_SIZE) -> SexChromosome:
    """
    Classify a chromosome-23 stream as X or Y from its length alone.

    Only helix.size() is consulted, so the stream position is left untouched.
    Lengths outside both bands are UNKNOWN. The result is meaningless for
    any chromosome other than index 22.
    """
    length = helix.size() * packed_size
    if _within_band(length, X_CHROMOSOME_LEN):
        return SexChromosome.X
    if _within_band(length, Y_CHROMOSOME_LEN):
        return SexChromosome.Y
    return SexChromosome.UNKNOWN
