"""Tests for LineEditor: pointer gestures end to end, without pygame."""

import unittest

from hexmetro.editor import Button, LineEditor, PointerDown, PointerMove, PointerUp
from hexmetro.hexmath import AxialCoord, HexLayout
from hexmetro.palette import DEFAULT_PALETTE
from hexmetro.rng import new_rng
from hexmetro.state.grid import GridModel, Orientation, RadiusBounds, StationKind
from hexmetro.state.lines import LineStore

A = AxialCoord
HELD = frozenset({Button.PRIMARY})
HELD_SECONDARY = frozenset({Button.SECONDARY})


class EditorTestCase(unittest.TestCase):

    radius = 6

    def setUp(self):
        self.layout = HexLayout(size=10.0)
        self.grid = GridModel(RadiusBounds(self.radius), new_rng(0))
        self.grid.place_station(StationKind.START, Orientation.EAST, A(0, 0))
        self.grid.place_station(StationKind.END, Orientation.WEST, A(4, 0))
        self.store = LineStore(default_width=8)
        self.logged = []
        self.editor = LineEditor(
            self.grid, self.store, self.layout, DEFAULT_PALETTE, log=self.logged.append
        )
        self.redraws = []
        self.editor.redraw.connect(lambda: self.redraws.append(1))

    def px(self, q, r):
        return self.layout.to_pixel(A(q, r))

    def drag(self, cells, button=Button.PRIMARY):
        """Press on cells[0], move through the rest, release on the last."""
        held = frozenset({button})
        self.editor.handle(PointerDown(self.px(*cells[0]), button))
        for c in cells[1:]:
            self.editor.handle(PointerMove(self.px(*c), held))
        self.editor.handle(PointerUp(self.px(*cells[-1]), button))


# ===================================================================
# 1. DRAWING
# ===================================================================
class TestDrawing(EditorTestCase):

    def test_new_line_from_station(self):
        self.drag([(0, 0), (1, 0), (2, 0)])
        (line,) = self.store.all_lines()
        self.assertEqual(line.points, [A(0, 0), A(1, 0), A(2, 0)])
        self.assertEqual(line.color, DEFAULT_PALETTE[0].rgb)
        self.assertEqual(line.width, 8)
        self.assertFalse(self.editor.is_drawing)

    def test_extension_scenario(self):
        self.drag([(0, 0), (1, 0), (2, 0)])
        self.drag([(2, 0), (3, 0), (4, 0)])
        (line,) = self.store.all_lines()
        self.assertEqual(line.points, [A(q, 0) for q in range(5)])
        self.assertEqual(self.editor.connections, 1)

    def test_press_on_empty_cell_does_nothing(self):
        self.editor.handle(PointerDown(self.px(1, 2), Button.PRIMARY))
        self.assertFalse(self.editor.is_drawing)
        self.assertEqual(self.redraws, [])
        self.assertTrue(any("no station" in m for m in self.logged))

    def test_short_release_creates_nothing(self):
        self.editor.handle(PointerDown(self.px(0, 0), Button.PRIMARY))
        self.assertTrue(self.editor.is_drawing)
        self.editor.handle(PointerUp(self.px(0, 0), Button.PRIMARY))
        self.assertEqual(len(self.store), 0)
        self.assertFalse(self.editor.is_drawing)

    def test_secondary_cancels_drawing(self):
        self.editor.handle(PointerDown(self.px(0, 0), Button.PRIMARY))
        self.editor.handle(PointerMove(self.px(1, 0), HELD))
        self.editor.handle(PointerDown(self.px(1, 0), Button.SECONDARY))
        self.assertFalse(self.editor.is_drawing)
        self.assertFalse(self.editor.deleting)
        self.editor.handle(PointerUp(self.px(1, 0), Button.PRIMARY))
        self.assertEqual(len(self.store), 0)

    def test_backtrack_while_dragging(self):
        self.editor.handle(PointerDown(self.px(0, 0), Button.PRIMARY))
        for c in ((1, 0), (2, 0), (1, 0)):
            self.editor.handle(PointerMove(self.px(*c), HELD))
        self.assertEqual(self.editor.session.path, [A(0, 0), A(1, 0)])
        self.editor.handle(PointerUp(self.px(1, 0), Button.PRIMARY))
        self.assertEqual(self.store.all_lines()[0].points, [A(0, 0), A(1, 0)])

    def test_preview_follows_pointer(self):
        self.editor.handle(PointerDown(self.px(0, 0), Button.PRIMARY))
        self.editor.handle(PointerMove((12.0, 3.0), HELD))
        pts = self.editor.preview_points()
        self.assertEqual(pts[-1], (12.0, 3.0))
        self.assertEqual(pts[0], self.px(0, 0))

    def test_one_redraw_per_move(self):
        self.editor.handle(PointerDown(self.px(0, 0), Button.PRIMARY))
        self.redraws.clear()
        self.editor.handle(PointerMove(self.px(1, 0), HELD))
        self.assertEqual(self.redraws, [1])
        self.editor.handle(PointerMove(self.px(1, 0), HELD))
        self.assertEqual(self.redraws, [1, 1])

    def test_hover_tracks_cell(self):
        self.editor.handle(PointerMove(self.px(2, -1)))
        self.assertEqual(self.editor.hover, A(2, -1))
        self.editor.handle(PointerMove(self.px(30, 0)))
        self.assertIsNone(self.editor.hover)


class TestSmallGrid(EditorTestCase):

    radius = 2

    def test_out_of_bounds_cells_are_rejected(self):
        self.editor.handle(PointerDown(self.px(0, 0), Button.PRIMARY))
        for c in ((1, 0), (2, 0), (3, 0)):
            self.editor.handle(PointerMove(self.px(*c), HELD))
        self.assertEqual(self.editor.session.path, [A(0, 0), A(1, 0), A(2, 0)])


# ===================================================================
# 2. DELETION
# ===================================================================
class TestDeletion(EditorTestCase):

    def test_drag_deletes_each_new_cell(self):
        self.store.commit_new([A(q, 0) for q in range(5)], (1, 1, 1))
        self.editor.handle(PointerDown(self.px(2, 0), Button.SECONDARY))
        self.assertTrue(self.editor.deleting)
        self.assertEqual(len(self.store), 2)
        self.editor.handle(PointerMove(self.px(3, 0), HELD_SECONDARY))
        self.assertEqual(len(self.store), 3)
        # Jitter inside the same cell is not reprocessed.
        x, y = self.px(3, 0)
        self.editor.handle(PointerMove((x + 1.0, y), HELD_SECONDARY))
        self.assertEqual(len(self.store), 3)
        self.editor.handle(PointerUp(self.px(3, 0), Button.SECONDARY))
        self.assertFalse(self.editor.deleting)
        # Moving after release deletes nothing.
        self.editor.handle(PointerMove(self.px(1, 0)))
        self.assertEqual(len(self.store), 3)

    def test_hover_without_secondary_held_does_not_delete(self):
        line = self.store.commit_new([A(q, 0) for q in range(5)], (1, 1, 1))
        # Secondary press on an empty cell, then the release never arrives.
        self.editor.handle(PointerDown(self.px(0, 3), Button.SECONDARY))
        self.assertTrue(self.editor.deleting)
        self.editor.handle(PointerMove(self.px(2, 0), frozenset()))
        self.assertEqual(len(self.store), 1)
        self.assertEqual(line.points, [A(q, 0) for q in range(5)])
        self.assertFalse(self.editor.deleting)
        # Pressing again afterwards still deletes normally.
        self.editor.handle(PointerMove(self.px(3, 0), HELD_SECONDARY))
        self.assertEqual(len(self.store), 1)
        self.editor.handle(PointerDown(self.px(2, 0), Button.SECONDARY))
        self.assertEqual(len(self.store), 2)

    def test_delete_disconnects(self):
        self.drag([(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)])
        self.assertEqual(self.editor.connections, 1)
        self.editor.handle(PointerDown(self.px(2, 0), Button.SECONDARY))
        self.editor.handle(PointerUp(self.px(2, 0), Button.SECONDARY))
        self.assertEqual(self.editor.connections, 0)


# ===================================================================
# 3. COLOURS AND COUNTS
# ===================================================================
class TestColorAndCount(EditorTestCase):

    def test_select_color(self):
        self.assertTrue(self.editor.select_color(2))
        self.assertEqual(self.editor.selected_color, DEFAULT_PALETTE[2].rgb)
        self.assertFalse(self.editor.select_color(len(DEFAULT_PALETTE)))
        self.assertFalse(self.editor.select_color(-1))
        self.assertEqual(self.editor.selected_index, 2)

    def test_click_on_body_recolors(self):
        line = self.store.commit_new([A(0, 0), A(1, 0), A(2, 0)], DEFAULT_PALETTE[0].rgb)
        self.editor.select_color(2)
        self.editor.handle(PointerDown(self.px(1, 0), Button.PRIMARY))
        self.assertFalse(self.editor.is_drawing)
        self.assertEqual(line.color, DEFAULT_PALETTE[2].rgb)
        self.assertEqual(line.points, [A(0, 0), A(1, 0), A(2, 0)])

    def test_drawn_line_uses_selected_color(self):
        self.editor.select_color(4)
        self.drag([(0, 0), (0, 1)])
        self.assertEqual(self.store.all_lines()[0].color, DEFAULT_PALETTE[4].rgb)

    def test_connection_updates_published(self):
        counts = []
        self.editor.counter.updated.connect(counts.append)
        self.drag([(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)])
        self.assertEqual(counts, [1])
        self.assertEqual(self.editor.connections, 1)
        # A line that only touches one station does not count.
        self.grid.place_station(StationKind.NORMAL, Orientation.CENTER, A(0, -2))
        self.drag([(0, -2), (1, -2), (2, -2)])
        self.assertEqual(len(self.store), 2)
        self.assertEqual(counts, [1])


if __name__ == "__main__":
    unittest.main()
