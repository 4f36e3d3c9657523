from typing import Optional, Tuple

from ..helix.bases import Base, PACKED_SIZE
from ..helix.cursor import HelixCursor
from ..helix.streams import HelixStream
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)

# Fixed sequence of repeating bases in telomeres
TELOMERE_SEQ = (Base.T, Base.T, Base.A, Base.G, Base.G, Base.G)
PERIOD = len(TELOMERE_SEQ)


def _leading_phase(cursor: HelixCursor) -> Optional[int]:
    """Rotation of the pattern that the first PERIOD bases follow, if any."""
    for phase in range(PERIOD):
        if all(cursor.base_at(i) == TELOMERE_SEQ[(phase + i) % PERIOD] for i in range(PERIOD)):
            return phase
    return None


def _trailing_phase(cursor: HelixCursor, data_end: int) -> Optional[int]:
    """Pattern position of base data_end - 1 when the last PERIOD bases are a telomere."""
    for phase in range(PERIOD):
        if all(
            cursor.base_at(data_end - 1 - i, backward=True) == TELOMERE_SEQ[(phase - i) % PERIOD]
            for i in range(PERIOD)
        ):
            return phase
    return None


def find_data_range(helix: HelixStream, packed_size: int = PACKED_SIZE) -> Tuple[int, int]:
    """
    Return [start, end) of the informative data between the telomeres of a helix.

    Values are indices of bases, not storage units. A telomere end is only
    recognised when a full period is present; from there the scan follows the
    pattern one base at a time, so partial periods are trimmed up to the
    first mismatching base. Sequences shorter than one period are returned
    unchanged.
    """
    cursor = HelixCursor(helix, packed_size)
    data_start = 0
    data_end = len(cursor)

    # At least one complete period is needed to classify a telomere
    if data_end < PERIOD:
        return data_start, data_end

    phase = _leading_phase(cursor)
    if phase is not None:
        data_start = PERIOD
        while data_start < data_end and cursor.base_at(data_start) == TELOMERE_SEQ[phase]:
            data_start += 1
            phase = (phase + 1) % PERIOD

    # Not enough room left for a complete telomere at the end
    if data_end < data_start + PERIOD:
        return data_start, data_end

    phase = _trailing_phase(cursor, data_end)
    if phase is not None:
        data_end -= PERIOD
        while data_end > data_start and cursor.base_at(data_end - 1, backward=True) == TELOMERE_SEQ[phase]:
            data_end -= 1
            phase = (phase - 1) % PERIOD

    logger.debug(f"Telomeres trimmed: {data_start} leading, {len(cursor) - data_end} trailing bases")
    return data_start, data_end
