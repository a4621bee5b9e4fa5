"""
Unit tests for reveal regions and chording.
"""
import numpy as np
from minefield.board import Board
from minefield.geometry import all_cells
from minefield.region import can_chord, chord_targets, reveal_multiple, reveal_region


def grid(dims, cells) -> np.ndarray:
    """Bool grid with the given cells set."""
    result = np.zeros(dims, dtype=bool)
    for cell in cells:
        result[cell] = True
    return result


# ============================================================================
# Reveal Region Tests
# ============================================================================

class TestRevealRegion:
    """Test single-cell and flood-fill regions."""

    def test_numbered_cell_is_revealed_alone(self, corner_mine_board: Board) -> None:
        """A nonzero count does not flood."""
        assert reveal_region(corner_mine_board, (1, 1)) == {(1, 1)}

    def test_mine_is_revealed_alone(self, corner_mine_board: Board) -> None:
        """A mine yields only itself."""
        assert reveal_region(corner_mine_board, (0, 0)) == {(0, 0)}

    def test_zero_floods_every_safe_cell(self, open_board: Board) -> None:
        """A connected zero region uncovers all reachable safe cells."""
        expected = {cell for cell in all_cells((3, 3)) if cell != (2, 2)}
        assert reveal_region(open_board, (0, 0)) == expected

    def test_flood_stops_at_numbered_wall(self, walled_board: Board) -> None:
        """Cells behind the numbered border are not reached."""
        region = reveal_region(walled_board, (1, 0))
        assert region == {(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)}
        assert not any(col >= 2 for _, col in region)

    def test_flood_never_includes_mines(self, walled_board: Board) -> None:
        """Mines are never part of a flood."""
        region = reveal_region(walled_board, (0, 4))
        assert not any(walled_board.is_mine(cell) for cell in region)

    def test_region_is_idempotent(self, open_board: Board) -> None:
        """Resolving from any zero cell in the region gives the same region."""
        region = reveal_region(open_board, (0, 0))
        for cell in region:
            if open_board.value(cell) == 0:
                assert reveal_region(open_board, cell) == region

    def test_large_empty_board_floods_without_recursion(self) -> None:
        """A mine-free 200x200 board floods in one go."""
        board = Board.from_mines((200, 200), [])
        assert len(reveal_region(board, (100, 100))) == 200 * 200


class TestRevealMultiple:
    """Test batch reveals."""

    def test_union_of_regions(self, walled_board: Board) -> None:
        """Both sides of the wall are uncovered."""
        region = reveal_multiple(walled_board, [(0, 0), (0, 4)])
        assert region == reveal_region(walled_board, (0, 0)) | reveal_region(walled_board, (0, 4))
        assert len(region) == 12

    def test_empty_input(self, walled_board: Board) -> None:
        """No cells, no region."""
        assert reveal_multiple(walled_board, []) == set()

    def test_overlapping_inputs(self, open_board: Board) -> None:
        """Cells already covered add nothing."""
        assert reveal_multiple(open_board, [(0, 0), (1, 1), (0, 1)]) == reveal_region(open_board, (0, 0))


# ============================================================================
# Chord Tests
# ============================================================================

class TestCanChord:
    """Test the chord precondition."""

    def test_satisfied_number_with_hidden_neighbor(self, chord_board: Board) -> None:
        """Two flags around a 2 with one hidden cell left allows a chord."""
        mask = grid((2, 3), [(1, 0), (1, 1), (1, 2)])
        flags = grid((2, 3), [(0, 0), (0, 1)])
        assert can_chord(chord_board, mask, flags, (1, 1)) is True
        assert chord_targets(chord_board, mask, flags, (1, 1)) == {(0, 2)}

    def test_too_few_flags(self, chord_board: Board) -> None:
        """Flag count below the number blocks the chord."""
        mask = grid((2, 3), [(1, 0), (1, 1), (1, 2)])
        flags = grid((2, 3), [(0, 0)])
        assert can_chord(chord_board, mask, flags, (1, 1)) is False

    def test_too_many_flags(self, chord_board: Board) -> None:
        """Flag count above the number blocks the chord."""
        mask = grid((2, 3), [(1, 0), (1, 1), (1, 2)])
        flags = grid((2, 3), [(0, 0), (0, 1), (0, 2)])
        assert can_chord(chord_board, mask, flags, (1, 1)) is False

    def test_nothing_left_to_reveal(self, chord_board: Board) -> None:
        """A satisfied number with no hidden unflagged neighbor is inert."""
        mask = grid((2, 3), [(0, 2), (1, 0), (1, 1), (1, 2)])
        flags = grid((2, 3), [(0, 0), (0, 1)])
        assert can_chord(chord_board, mask, flags, (1, 1)) is False

    def test_zero_cell_never_chords(self, open_board: Board) -> None:
        """Zeros have nothing to chord."""
        mask = grid((3, 3), [(0, 0)])
        flags = grid((3, 3), [])
        assert can_chord(open_board, mask, flags, (0, 0)) is False

    def test_mine_never_chords(self, chord_board: Board) -> None:
        """Mines carry no count."""
        mask = grid((2, 3), [])
        flags = grid((2, 3), [])
        assert can_chord(chord_board, mask, flags, (0, 0)) is False
