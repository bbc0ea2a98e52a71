"""Tests for collapse and neighbour repair."""

import pytest

from py_spp.core.alea_prng import AleaPRNG
from py_spp.core.growth import grow_backtracking_maze, grow_cascade
from py_spp.core.particle import (
    ALL_IDS,
    HORIZONTAL_FACES,
    Face,
    ParticleChunk,
    ParticleInvariantError,
    create_cell,
    create_wall_default_cell,
    is_open_option,
    is_wall_option,
    resolved_option,
)
from py_spp.core.resolver import collapse_chunk, find_symmetry_violations, repair_neighbors, resolve

from helpers import carved_cross, resolved_cross


def resolved_pair(left_option, right_option, reverse=False):
    """Two resolved cells sharing the +X / -X face, optionally inserted right first."""
    chunk = ParticleChunk()
    positions = [(0, 0, 0), (1, 0, 0)]
    if reverse:
        positions.reverse()
    for position in positions:
        cell = create_wall_default_cell(position)
        for face in HORIZONTAL_FACES:
            cell.face_options[face] = [10]
        chunk.add(cell)
    chunk[(0, 0, 0)].face_options[Face.POS_X] = [left_option]
    chunk[(1, 0, 0)].face_options[Face.NEG_X] = [right_option]
    return chunk


class TestCollapseChunk:
    """Test independent per-cell collapse."""

    def test_every_face_resolved(self):
        """Test that every horizontal face collapses to one option."""
        cells = [create_cell((x, 0, 0)) for x in range(5)]
        chunk = collapse_chunk(cells, AleaPRNG("collapse"))
        assert len(chunk) == 5
        for cell in chunk:
            assert cell.is_resolved()
            for face in HORIZONTAL_FACES:
                assert resolved_option(cell, face) in ALL_IDS

    def test_inputs_untouched(self):
        """Grown cells keep their candidate lists; resolution works on copies."""
        domain, _ = carved_cross()
        before = [[list(o) for o in cell.face_options] for cell in domain]
        resolved = resolve(list(domain), AleaPRNG("copy"))
        after = [[list(o) for o in cell.face_options] for cell in domain]
        assert before == after
        assert all(resolved[p] is not domain[p] for p in domain.positions())

    def test_empty_participating_face_is_fatal(self):
        """Test that a participating face without candidates fails."""
        cell = create_wall_default_cell((0, 0, 0))
        cell.face_options[Face.NEG_Z] = []
        with pytest.raises(ParticleInvariantError):
            collapse_chunk([cell], AleaPRNG("bad"))


class TestRepair:
    """Test the neighbour repair pass."""

    def test_open_side_wins(self):
        """Test that the smaller position's open id is copied across."""
        chunk = resolved_pair(1, 2)
        assert repair_neighbors(chunk) == 1
        assert resolved_option(chunk[(1, 0, 0)], Face.NEG_X) == 1
        assert resolved_option(chunk[(0, 0, 0)], Face.POS_X) == 1

    def test_open_forced_over_wall(self):
        """Test that an open face overwrites a wall neighbour."""
        chunk = resolved_pair(11, 0)
        repair_neighbors(chunk)
        assert resolved_option(chunk[(0, 0, 0)], Face.POS_X) == 0

    @pytest.mark.parametrize("left, right, expected", [(1, 2, 1), (2, 0, 2), (0, 2, 0), (12, 1, 1), (2, 13, 2)])
    def test_result_ignores_insertion_order(self, left, right, expected):
        """Test that both insertion orders settle a shared face on the same id."""
        forward = resolved_pair(left, right)
        backward = resolved_pair(left, right, reverse=True)
        assert repair_neighbors(forward) == repair_neighbors(backward) == 1
        for chunk in (forward, backward):
            assert resolved_option(chunk[(0, 0, 0)], Face.POS_X) == expected
            assert resolved_option(chunk[(1, 0, 0)], Face.NEG_X) == expected

    def test_smaller_position_wins_open_conflict(self):
        """Test that the cell with the smaller position keeps its open id."""
        chunk = resolved_pair(2, 1, reverse=True)
        repair_neighbors(chunk)
        assert resolved_option(chunk[(1, 0, 0)], Face.NEG_X) == 2

    def test_divergent_walls_kept(self):
        """Test that two different walls facing each other are kept."""
        chunk = resolved_pair(10, 13)
        assert repair_neighbors(chunk) == 0
        assert resolved_option(chunk[(0, 0, 0)], Face.POS_X) == 10
        assert resolved_option(chunk[(1, 0, 0)], Face.NEG_X) == 13
        assert find_symmetry_violations(chunk) == []

    def test_violation_detected_before_repair(self):
        """Test that a mismatch is reported before repair and cleared after."""
        chunk = resolved_pair(1, 2)
        assert find_symmetry_violations(chunk)
        repair_neighbors(chunk)
        assert find_symmetry_violations(chunk) == []

    @pytest.mark.parametrize("seed", ["a", "b", "c", "d"])
    def test_repair_is_fixed_point(self, seed):
        """A second pass over a repaired chunk changes nothing."""
        growth = grow_cascade(7, 7, 40, AleaPRNG(seed))
        chunk = resolve(list(growth.chunk), AleaPRNG(seed))
        snapshot = [[list(o) for o in cell.face_options] for cell in chunk]
        assert repair_neighbors(chunk) == 0
        assert snapshot == [[list(o) for o in cell.face_options] for cell in chunk]


class TestResolve:
    """Test the full resolve step on grown chunks."""

    @pytest.mark.parametrize("seed", ["one", "two", "three"])
    def test_symmetry_after_cascade(self, seed):
        """Test that resolved cascade chunks are symmetric."""
        growth = grow_cascade(9, 9, 60, AleaPRNG(seed))
        chunk = resolve(list(growth.chunk), AleaPRNG(seed))
        assert find_symmetry_violations(chunk) == []

    @pytest.mark.parametrize("seed", ["one", "two", "three"])
    def test_carved_edges_open_others_walls(self, seed):
        """Test that carved edges resolve open and the rest resolve to walls."""
        growth = grow_backtracking_maze(40, AleaPRNG(seed))
        chunk = resolve(list(growth.chunk), AleaPRNG(seed))
        for cell in chunk:
            links = growth.adjacency[cell.position]
            for face in HORIZONTAL_FACES:
                neighbor = chunk.neighbor(cell, face)
                option = resolved_option(cell, face)
                if neighbor is not None and neighbor.position in links:
                    assert is_open_option(option)
                    assert resolved_option(neighbor, face.opposite) == option
                else:
                    assert is_wall_option(option)

    def test_cross_walls(self):
        """Corner cells of the cross are fully walled."""
        chunk = resolved_cross()
        corner = chunk[(1, 0, 1)]
        for face in HORIZONTAL_FACES:
            assert is_wall_option(resolved_option(corner, face))
