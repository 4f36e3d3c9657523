"""
Tests for telomere trimming.

Most fixtures use repeated Cs as non-telomere data; other bases belong to telomeres.
"""

import pytest

from helix_diff.comparison.telomere import find_data_range
from helix_diff.helix.bases import Base, PACKED_SIZE, pack
from helix_diff.helix.streams import InMemoryHelixStream

from conftest import TELOMERE, helix_from_string

A, C, G, T = Base.A, Base.C, Base.G, Base.T


def data_range(units, chunk_size=128):
    return find_data_range(InMemoryHelixStream(bytes(units), chunk_size), PACKED_SIZE)


class TestPackedFixtures:
    """Fixtures with four bases per storage unit."""

    def test_empty_helix(self):
        assert data_range([]) == (0, 0)

    def test_no_telomeres(self):
        assert data_range([pack(C, C, C, C), pack(C, C, C, C)]) == (0, 8)

    def test_complete_telomere_at_start(self):
        assert data_range([pack(T, T, A, G), pack(G, G, C, C)]) == (6, 8)

    def test_multiple_complete_telomeres_at_start(self):
        units = [pack(T, T, A, G), pack(G, G, T, T), pack(A, G, G, G), pack(C, C, C, C)]
        assert data_range(units) == (12, 16)

    def test_partial_telomere_at_start(self):
        units = [
            pack(G, G, T, T),
            pack(A, G, G, G),
            pack(T, T, A, G),
            pack(G, G, T, T),
            pack(A, G, G, G),
            pack(C, C, C, C)]
        assert data_range(units) == (20, 24)

    def test_complete_telomere_at_end(self):
        units = [pack(C, C, C, C), pack(C, C, T, T), pack(A, G, G, G)]
        assert data_range(units) == (0, 6)

    def test_multiple_complete_telomeres_at_end(self):
        units = [pack(C, C, C, C), pack(T, T, A, G), pack(G, G, T, T), pack(A, G, G, G)]
        assert data_range(units) == (0, 4)

    def test_partial_telomere_at_end(self):
        units = [pack(C, C, C, C), pack(C, C, C, C), pack(T, T, A, G), pack(G, G, T, T)]
        assert data_range(units) == (0, 8)

    def test_partial_telomeres_at_start_and_end(self):
        units = [
            pack(G, G, T, T),
            pack(A, G, G, G),
            pack(T, T, A, G),
            pack(G, G, T, T),
            pack(A, G, G, G),
            pack(C, C, C, C),
            pack(C, C, C, C),
            pack(T, T, A, G),
            pack(G, G, T, T)]
        assert data_range(units) == (20, 28)

    def test_telomere_like_data_between_telomeres(self):
        units = [
            pack(G, G, T, T),
            pack(A, G, G, G),
            pack(T, T, A, G),
            pack(G, G, T, T),
            pack(A, G, G, G),
            pack(G, G, G, G),
            pack(T, T, T, T),
            pack(T, T, A, G),
            pack(G, G, T, T)]
        assert data_range(units) == (20, 28)

    def test_single_unit_chunks(self):
        units = [
            pack(G, G, T, T),
            pack(A, G, G, G),
            pack(T, T, A, G),
            pack(G, G, T, T),
            pack(A, G, G, G),
            pack(C, C, C, C),
            pack(C, C, C, C),
            pack(C, C, T, T),
            pack(A, G, G, G),
            pack(T, T, A, G),
            pack(G, G, T, T)]
        assert data_range(units, chunk_size=1) == (20, 30)


class TestTrimmingProperties:
    """Tests on plain strings, one base per unit."""

    @pytest.mark.parametrize("chunk_size", [1, 2, 5, 6, 7, 64])
    @pytest.mark.parametrize("leading,trailing", [(0, 0), (1, 0), (0, 1), (2, 3), (5, 5)])
    def test_whole_periods(self, leading, trailing, chunk_size):
        interior = "CATCAGTCC"
        text = TELOMERE * leading + interior + TELOMERE * trailing
        helix = helix_from_string(text, chunk_size)
        assert find_data_range(helix, 1) == (6 * leading, len(text) - 6 * trailing)

    @pytest.mark.parametrize("chunk_size", [1, 3, 64])
    def test_partial_periods_trimmed_to_mismatch(self, chunk_size):
        # Starts mid-pattern and stops after "TTA" of the last period
        text = "AGGG" + TELOMERE * 2 + "CCCC" + TELOMERE * 2 + "TTA"
        helix = helix_from_string(text, chunk_size)
        assert find_data_range(helix, 1) == (16, 20)

    def test_interior_pattern_not_trimmed(self):
        text = "CCCC" + TELOMERE * 3 + "CCCC"
        assert find_data_range(helix_from_string(text), 1) == (0, len(text))

    def test_shorter_than_one_period(self):
        assert find_data_range(helix_from_string("TTAGG"), 1) == (0, 5)

    def test_telomere_only(self):
        text = TELOMERE * 3
        start, end = find_data_range(helix_from_string(text, chunk_size=4), 1)
        assert start == len(text)
        assert end == len(text)

    def test_short_tail_left_unchanged(self):
        # Fewer than six bases after the leading telomere
        text = TELOMERE + "CTTAG"
        assert find_data_range(helix_from_string(text), 1) == (6, 11)

    def test_does_not_depend_on_stream_position(self):
        helix = helix_from_string(TELOMERE + "CCCCCC" + TELOMERE, chunk_size=2)
        helix.seek(5)
        helix.read()
        assert find_data_range(helix, 1) == (6, 12)
        assert find_data_range(helix, 1) == (6, 12)
