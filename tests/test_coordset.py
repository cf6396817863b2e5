"""CoordSet geometry and texture-offset bookkeeping."""

from measureonce.core.base import Vec2
from measureonce.game.coordset import CoordSet, Holes
from measureonce.game.rotation import get_rotation_matrix, rotate_vector

import numpy as np


# ── Helpers ──────────────────────────────────────────────────────────

def cs(*xy, **kwargs) -> CoordSet:
    return CoordSet(set(xy), **kwargs)


# ── Geometry ─────────────────────────────────────────────────────────

class TestGeometry:

    def test_extents_and_size(self):
        shape = cs((0, 0), (2, 1), (1, -1))
        assert shape.extents() == ((0, 2), (-1, 1))
        assert shape.size() == (3, 3)
        assert shape.count() == 3

    def test_empty_extents(self):
        assert CoordSet().extents() == ((0, 0), (0, 0))
        assert CoordSet().count() == 0

    def test_contains_accepts_vec_and_tuple(self):
        shape = cs((1, 2))
        assert shape.contains(Vec2(1, 2))
        assert shape.contains((1, 2))
        assert shape.contains_xy(1, 2)
        assert (1, 2) in shape
        assert not shape.contains((2, 1))

    def test_touches_is_four_connected(self):
        assert cs((0, 0)).touches(cs((1, 0)))
        assert cs((0, 0)).touches(cs((0, -1)))
        assert not cs((0, 0)).touches(cs((1, 1)))

    def test_overlaps(self):
        assert cs((0, 0), (1, 0)).overlaps(cs((1, 0)))
        assert not cs((0, 0)).overlaps(cs((1, 0)))

    def test_equals_ignores_texture(self):
        a = cs((0, 0), turns=1, texture_offset=Vec2(3, 4))
        b = cs((0, 0))
        assert a.equals(b)

    def test_components_and_connectivity(self):
        shape = cs((0, 0), (1, 0), (5, 5))
        parts = shape.components()
        assert [p.count() for p in parts] == [2, 1]
        assert not shape.is_connected()
        assert cs((0, 0), (0, 1)).is_connected()

    def test_merge(self):
        merged = CoordSet.merge([cs((0, 0)), cs((1, 0)), cs((0, 0))])
        assert merged.cells == {(0, 0), (1, 0)}

    def test_str_draws_rows(self):
        assert str(cs((0, 0), (1, 0))) == "[0,1]|--|\n|##|\n|--|\n"


# ── Rotation ─────────────────────────────────────────────────────────

class TestRotation:

    def test_rotation_matrices_form_a_cycle(self):
        assert np.array_equal(get_rotation_matrix(4), np.eye(2, dtype=int))
        assert np.array_equal(get_rotation_matrix(-1), get_rotation_matrix(3))

    def test_quarter_turn(self):
        shape = cs((1, 0))
        shape.rotate()
        assert shape.cells == {(0, 1)}
        assert shape.turns == 1

    def test_four_turns_restore(self):
        original = {(0, 0), (1, 0), (1, 1), (3, 2)}
        shape = CoordSet(set(original))
        for _ in range(4):
            shape.rotate()
        assert shape.cells == original
        assert shape.turns == 0

    def test_rotate_vector_clockwise(self):
        assert rotate_vector((1, 0), -1) == (0, -1)


# ── Shift and normalize ──────────────────────────────────────────────

class TestShift:

    def test_shift_moves_cells_and_counters_texture(self):
        shape = cs((0, 0), (1, 0))
        shape.shift((3, 4))
        assert shape.cells == {(3, 4), (4, 4)}
        assert shape.texture_offset == Vec2(-3, -4)

    def test_shift_with_turns_unrotates_texture(self):
        shape = cs((0, 0), turns=1)
        shape.shift((1, 0))
        assert shape.texture_offset == Vec2(0, 1)

    def test_shift_inverse_restores_state(self):
        shape = cs((0, 0), (0, 1), turns=3, texture_offset=Vec2(7, 9))
        shape.shift(Vec2(2, -5))
        shape.shift(Vec2(-2, 5))
        assert shape.cells == {(0, 0), (0, 1)}
        assert shape.texture_offset == Vec2(7, 9)

    def test_normalize(self):
        shape = cs((2, 3), (3, 3), turns=2)
        assert shape.normalize() is shape
        assert shape.cells == {(0, 0), (1, 0)}
        assert shape.turns == 0

    def test_copy_is_independent(self):
        shape = cs((0, 0))
        clone = shape.copy()
        clone.cells.add((1, 0))
        assert shape.cells == {(0, 0)}


class TestHoles:

    def test_find_match(self):
        holes = Holes([cs((0, 0)), cs((3, 3), (4, 3))])
        assert holes.find_match(cs((4, 3), (3, 3))) == 1
        assert holes.find_match(cs((3, 3))) is None
        assert holes.total_cells() == 3
        assert len(holes) == 2
