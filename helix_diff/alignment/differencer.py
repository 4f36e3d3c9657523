"""
Windowed sequence differencer.

Two samples of the same chromosome are expected to be almost identical, so
the differencer compares fixed windows of both sequences for exact equality
and only falls back to alignment around a mismatch. The alignment is a
global Biopython PairwiseAligner run over at most `align_window` bases per
side, which bounds the dynamic-programming work per divergence. After each
divergence both cursors continue from the point where the sequences agree
again for `resync_length` consecutive bases.

Insertions, deletions and replaced blocks longer than the alignment window
leave no such run inside it. For those the differencer looks for the
nearest shared `resync_length`-mer in windows that double in size up to
`anchor_search` bases per side, which finds the shifted diagonal in time
linear in the window.
"""

from typing import Iterator, Optional, Tuple

import numpy as np
from Bio.Align import PairwiseAligner

from .records import Difference, Subsection
from ..config import Config
from ..exceptions import AlignmentError
from ..helix.cursor import HelixCursor
from ..helix.streams import HelixStream
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)

_LETTERS = np.frombuffer(b"ACGT", dtype=np.uint8)


def _as_text(window: np.ndarray) -> str:
    return _LETTERS[window].tobytes().decode("ascii")


def first_mismatch(window_a: np.ndarray, window_b: np.ndarray) -> Optional[int]:
    """Offset of the first differing base of two equally long windows."""
    mismatches = np.flatnonzero(window_a != window_b)
    if len(mismatches) == 0:
        return None
    return int(mismatches[0])


def resync_point(coordinates: np.ndarray, seq_a: str, seq_b: str, run_length: int,
                 accept_tail: bool = False) -> Optional[Tuple[int, int]]:
    """
    Walk an alignment path and return the offsets (i, j) where the first run
    of `run_length` identical aligned bases starts.

    `coordinates` is the 2 x N array of a Biopython alignment. With
    `accept_tail`, a shorter run that reaches the end of both sequences also
    counts, since nothing follows it that could extend the run.
    """
    run = 0
    run_start = None
    for (a0, b0), (a1, b1) in zip(coordinates.T[:-1], coordinates.T[1:]):
        if a1 - a0 != b1 - b0:
            # Gap segment
            run = 0
            continue
        for offset in range(a1 - a0):
            i, j = a0 + offset, b0 + offset
            if seq_a[i] == seq_b[j]:
                if run == 0:
                    run_start = (int(i), int(j))
                run += 1
                if run >= run_length:
                    return run_start
            else:
                run = 0
    if accept_tail and run > 0:
        return run_start
    return None


def find_anchor(seq_a: str, seq_b: str, run_length: int) -> Optional[Tuple[int, int]]:
    """
    Offsets (i, j) of the shared `run_length`-mer nearest to the start of
    both sequences, by i + j. None when the sequences share no such k-mer.
    """
    first_in_b = {}
    for j in range(len(seq_b) - run_length + 1):
        first_in_b.setdefault(seq_b[j:j + run_length], j)

    best = None
    for i in range(len(seq_a) - run_length + 1):
        if best is not None and i >= sum(best):
            break
        j = first_in_b.get(seq_a[i:i + run_length])
        if j is not None and (best is None or i + j < sum(best)):
            best = (i, j)
    return best


class SequenceDifferencer:
    """Locates divergent subsections between two trimmed chromosome ranges."""

    def __init__(self, config: Config = None):
        self.config = config or Config()
        self.aligner = self._setup_aligner()

    def _setup_aligner(self) -> PairwiseAligner:
        aligner = PairwiseAligner()
        aligner.mode = "global"
        aligner.match_score = self.config.match_score
        aligner.mismatch_score = self.config.mismatch_score
        aligner.open_gap_score = self.config.open_gap_score
        aligner.extend_gap_score = self.config.extend_gap_score
        # Windows cut through the sequences, so overhang at the right end is free
        aligner.open_right_insertion_score = 0
        aligner.extend_right_insertion_score = 0
        aligner.open_right_deletion_score = 0
        aligner.extend_right_deletion_score = 0
        return aligner

    def differences(self, chromosome_idx: int,
                    helix_a: HelixStream, range_a: Tuple[int, int],
                    helix_b: HelixStream, range_b: Tuple[int, int]) -> Iterator[Difference]:
        """Yield the differences between range_a of helix_a and range_b of helix_b."""
        cursor_a = HelixCursor(helix_a, self.config.packed_size)
        cursor_b = HelixCursor(helix_b, self.config.packed_size)
        a, a_end = range_a
        b, b_end = range_b
        # An all-telomere chromosome trims to an empty region
        a_end = max(a, a_end)
        b_end = max(b, b_end)

        while a < a_end and b < b_end:
            n = min(self.config.window_size, a_end - a, b_end - b)
            offset = first_mismatch(cursor_a.window(a, a + n), cursor_b.window(b, b + n))
            if offset is None:
                a += n
                b += n
                continue

            a += offset
            b += offset
            i, j = self._realign(cursor_a, a, a_end, cursor_b, b, b_end)
            difference = Difference(chromosome_idx, Subsection(a, a + i), Subsection(b, b + j))
            logger.debug(f"Divergence found: {difference}")
            yield difference
            a += i
            b += j

        if a < a_end or b < b_end:
            yield Difference(chromosome_idx, Subsection(a, a_end), Subsection(b, b_end))

    def _realign(self, cursor_a: HelixCursor, a: int, a_end: int,
                 cursor_b: HelixCursor, b: int, b_end: int) -> Tuple[int, int]:
        """
        Align the windows starting at a divergence and return how many bases
        of each sample the divergence spans.
        """
        la = min(self.config.align_window, a_end - a)
        lb = min(self.config.align_window, b_end - b)
        seq_a = _as_text(cursor_a.window(a, a + la))
        seq_b = _as_text(cursor_b.window(b, b + lb))

        try:
            alignment = next(iter(self.aligner.align(seq_a, seq_b)))
        except StopIteration:
            raise AlignmentError(f"No alignment for windows at {a} and {b}") from None

        reaches_end = a + la == a_end and b + lb == b_end
        point = resync_point(alignment.coordinates, seq_a, seq_b,
                             self.config.resync_length, accept_tail=reaches_end)
        if point is None:
            logger.debug(f"No resynchronisation within {self.config.align_window} bases at {a}/{b}")
            return self._anchor(cursor_a, a, a_end, cursor_b, b, b_end)
        return point

    def _anchor(self, cursor_a: HelixCursor, a: int, a_end: int,
                cursor_b: HelixCursor, b: int, b_end: int) -> Tuple[int, int]:
        """
        Resynchronise past a divergence longer than the alignment window.
        Falls back to the largest searched window pair when no anchor exists
        within `anchor_search` bases, or to both range ends when the search
        reached them.
        """
        span = min(2 * self.config.align_window, self.config.anchor_search)
        while True:
            la = min(span, a_end - a)
            lb = min(span, b_end - b)
            anchor = find_anchor(_as_text(cursor_a.window(a, a + la)),
                                 _as_text(cursor_b.window(b, b + lb)),
                                 self.config.resync_length)
            if anchor is not None:
                logger.debug(f"Anchor at {a + anchor[0]}/{b + anchor[1]} after a long divergence")
                return anchor
            if (a + la == a_end and b + lb == b_end) or span >= self.config.anchor_search:
                return la, lb
            span = min(2 * span, self.config.anchor_search)
