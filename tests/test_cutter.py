"""Cut splitting and the cutter's step state machine."""

import pytest

from measureonce.core.base import NEIGHBOURS, CutStep, Vec2
from measureonce.game.coordset import CoordSet
from measureonce.game.level import CLASSIC_LEVELS
from measureonce.game.cutter import (
    Cut,
    CutSession,
    affected_cells,
    cells_around,
    edge_key,
    find_cut_start,
)


# ── Helpers ──────────────────────────────────────────────────────────

def bar(length: int = 4, **kwargs) -> CoordSet:
    return CoordSet({(x, 0) for x in range(length)}, **kwargs)


def square() -> CoordSet:
    return CoordSet({(0, 0), (1, 0), (0, 1), (1, 1)})


def peel(plank: CoordSet, target: int):
    """Grow a connected region from the plank whose remainder stays connected."""
    region, rest = set(), set(plank.cells)
    while len(region) < target:
        for cell in sorted(rest):
            x, y = cell
            if region and not any((x + dx, y + dy) in region for dx, dy in NEIGHBOURS):
                continue
            if CoordSet(rest - {cell}).is_connected():
                region.add(cell)
                rest.discard(cell)
                break
        else:
            break
    return region, rest


def boundary(region, rest):
    return {
        edge_key((x, y), (x + dx, y + dy))
        for x, y in region
        for dx, dy in NEIGHBOURS
        if (x + dx, y + dy) in rest
    }


@pytest.fixture
def bar_session() -> CutSession:
    session = CutSession.begin(bar(), Vec2(0, 0), Vec2(1, 0))
    assert session is not None
    return session


# ── Edges and lattice points ─────────────────────────────────────────

class TestEdges:

    def test_edge_key_is_order_independent(self):
        assert edge_key((2, 0), (1, 0)) == edge_key((1, 0), (2, 0)) == ((1, 0), (2, 0))

    def test_cells_around_lattice_point(self):
        assert sorted(cells_around(Vec2(1, 1))) == [(0, 0), (0, 1), (1, 0), (1, 1)]

    @pytest.mark.parametrize("direction,expected", [
        (Vec2(1, 0), (Vec2(2, 2), Vec2(2, 3))),
        (Vec2(-1, 0), (Vec2(1, 2), Vec2(1, 3))),
        (Vec2(0, -1), (Vec2(1, 2), Vec2(2, 2))),
        (Vec2(0, 1), (Vec2(1, 3), Vec2(2, 3))),
    ])
    def test_affected_cells(self, direction, expected):
        assert affected_cells(Vec2(2, 3), direction) == expected

    def test_affected_cells_rejects_diagonal(self):
        assert affected_cells(Vec2(0, 0), Vec2(1, 1)) is None


# ── Split ────────────────────────────────────────────────────────────

class TestSplit:

    def test_bar_split_in_half(self):
        cut = Cut(separated={edge_key((1, 0), (2, 0))})
        pieces = cut.split(bar())
        assert pieces is not None
        assert {frozenset(p.cells) for p in pieces} == {
            frozenset({(0, 0), (1, 0)}),
            frozenset({(2, 0), (3, 0)}),
        }

    def test_no_edges_is_not_a_split(self):
        assert Cut().split(bar()) is None
        assert not Cut().is_finished(bar())

    def test_partial_cut_is_not_a_split(self):
        cut = Cut(separated={edge_key((0, 0), (1, 0))})
        assert cut.split(square()) is None

    @pytest.mark.parametrize("level_def", CLASSIC_LEVELS[2:10])
    def test_generated_plank_splits_exactly(self, level_def):
        plank = level_def.build().planks[0][0]
        region, rest = peel(plank, plank.count() // 2)
        assert region and rest

        pieces = Cut(separated=boundary(region, rest)).split(plank)
        assert pieces is not None
        first, second = pieces
        assert first.cells | second.cells == plank.cells
        assert not first.overlaps(second)
        assert first.is_connected()
        assert second.is_connected()
        assert {frozenset(first.cells), frozenset(second.cells)} == {frozenset(region), frozenset(rest)}

    def test_pieces_inherit_texture_state(self):
        plank = bar(turns=2, texture_offset=Vec2(5, 6))
        pieces = Cut(separated={edge_key((0, 0), (1, 0))}).split(plank)
        for piece in pieces:
            assert piece.turns == 2
            assert piece.texture_offset == Vec2(5, 6)


# ── Starting a cut ───────────────────────────────────────────────────

class TestFindCutStart:

    def test_start_on_bar(self):
        assert find_cut_start(bar(), Vec2(0, 0), Vec2(1, 0)) == Vec2(1, 0)

    def test_start_respects_plank_position(self):
        assert find_cut_start(bar(), Vec2(0, -2), Vec2(1, -2)) == Vec2(1, -2)

    def test_cursor_off_plank(self):
        assert find_cut_start(bar(), Vec2(0, 0), Vec2(0, 1)) is None

    def test_single_cell_has_no_start(self):
        assert find_cut_start(CoordSet({(0, 0)}), Vec2(0, 0), Vec2(0, 0)) is None


# ── Cutter steps ─────────────────────────────────────────────────────

class TestCutSession:

    def test_slide_then_finish(self, bar_session):
        assert bar_session.move(Vec2(1, 0)) == CutStep.SLIDE
        assert bar_session.position == Vec2(2, 0)
        assert bar_session.move(Vec2(0, 1)) == CutStep.FINISHED
        assert bar_session.finished

    def test_air_move_snaps_back(self, bar_session):
        assert bar_session.move(Vec2(0, -1)) == CutStep.AIR
        assert bar_session.position == Vec2(1, 0)

    def test_weird_move_snaps_back(self, bar_session):
        assert bar_session.step(Vec2(3, 3)) == CutStep.WEIRD
        assert bar_session.position == Vec2(1, 0)

    def test_staying_put_is_a_slide(self, bar_session):
        assert bar_session.step(Vec2(1, 0)) == CutStep.SLIDE

    def test_retrace_uncuts(self, bar_session):
        bar_session.move(Vec2(1, 0))
        bar_session.move(Vec2(0, 1))
        assert bar_session.move(Vec2(0, -1)) == CutStep.UNCUT
        assert not bar_session.finished
        assert bar_session.cut.separated == set()

    def test_uncut_keeps_finished_while_another_edge_splits(self):
        e12 = edge_key((1, 0), (2, 0))
        e23 = edge_key((2, 0), (3, 0))
        session = CutSession(
            plank=bar(5),
            plank_pos=Vec2(0, 0),
            position=Vec2(3, 1),
            prev=Vec2(3, 1),
            cut=Cut(separated={e12, e23}, finished=True),
        )
        assert session.move(Vec2(0, -1)) == CutStep.UNCUT
        assert session.cut.separated == {e12}
        assert session.finished
        assert len(session.commit()) == 2

    def test_finished_cut_blocks_new_edges(self, bar_session):
        bar_session.move(Vec2(1, 0))
        bar_session.move(Vec2(0, 1))
        assert bar_session.move(Vec2(1, 0)) == CutStep.BLOCKED
        assert bar_session.position == Vec2(2, 1)

    def test_square_needs_two_edges(self):
        session = CutSession.begin(square(), Vec2(0, 0), Vec2(0, 0))
        assert session.position == Vec2(1, 0)
        assert session.move(Vec2(0, 1)) == CutStep.CUT
        assert not session.finished
        assert session.move(Vec2(0, 1)) == CutStep.FINISHED

    def test_commit_before_finish(self, bar_session):
        assert bar_session.commit() is None

    def test_commit_normalizes_and_compensates(self):
        session = CutSession.begin(bar(), Vec2(10, 20), Vec2(11, 20))
        session.move(Vec2(1, 0))
        session.move(Vec2(0, 1))
        result = session.commit()
        assert len(result) == 2
        world = set()
        for piece, pos in result:
            (min_x, _), (min_y, _) = piece.extents()
            assert (min_x, min_y) == (0, 0)
            world |= {(x + pos.x, y + pos.y) for x, y in piece.cells}
        assert world == {(10, 20), (11, 20), (12, 20), (13, 20)}
        assert sorted(pos.to_tuple() for _, pos in result) == [(10, 20), (12, 20)]

    def test_sawn_segments(self, bar_session):
        bar_session.move(Vec2(1, 0))
        bar_session.move(Vec2(0, 1))
        assert bar_session.sawn_segments() == [(Vec2(2, 0), Vec2(2, 1))]
