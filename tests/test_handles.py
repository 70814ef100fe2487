"""
Tests for axis handles and the drag state machine.
"""

import numpy as np
import pytest

from volbrush import AxisEdge, AxisHandleSet


@pytest.fixture
def handles():
    return AxisHandleSet(axis_count=4)


class TestLayout:
    """Test default handle placement."""

    def test_default_handles(self, handles):
        assert len(handles) == 8
        for handle_id, handle in enumerate(handles):
            assert handle.handle_id == handle_id
            assert handle.axis_index == handle_id // 2
            assert handle.edge is (AxisEdge.LOWER if handle_id % 2 == 0 else AxisEdge.UPPER)

    def test_axis_positions(self, handles):
        np.testing.assert_allclose(handles.axis_positions(), [-1.0, -1 / 3, 1 / 3, 1.0], atol=1e-6)

    def test_full_range_bounds(self, handles):
        lower, upper = handles.bounds()

        np.testing.assert_array_equal(lower, -1.0)
        np.testing.assert_array_equal(upper, 1.0)

    def test_partner_id(self):
        assert AxisHandleSet.partner_id(0) == 1
        assert AxisHandleSet.partner_id(1) == 0
        assert AxisHandleSet.partner_id(6) == 7

    def test_axis_count_limits(self):
        with pytest.raises(ValueError, match="at least 2"):
            AxisHandleSet(axis_count=1)
        with pytest.raises(ValueError, match="pick encoding"):
            AxisHandleSet(axis_count=128)

        assert len(AxisHandleSet(axis_count=127)) == 254


class TestDragStateMachine:
    """Test Idle/Dragging transitions."""

    def test_idle_by_default(self, handles):
        assert not handles.is_dragging
        assert handles.captured == -1
        assert handles.drag_to(0.3) is None

    def test_capture_and_release(self, handles):
        assert handles.begin_drag(3)
        assert handles.is_dragging
        assert handles.captured == 3

        handles.end_drag()
        assert not handles.is_dragging
        assert handles.captured == -1

    def test_single_capture(self, handles):
        assert handles.begin_drag(2)
        assert not handles.begin_drag(5)
        assert handles.captured == 2

    def test_invalid_ids_are_ignored(self, handles):
        assert not handles.begin_drag(-1)
        assert not handles.begin_drag(8)
        assert not handles.is_dragging

    def test_drag_moves_vertically_only(self, handles):
        handles.begin_drag(2)
        x_before = handles.handle(2).position[0]

        assert handles.drag_to(-0.25) == pytest.approx(-0.25)
        assert handles.handle(2).position == (x_before, pytest.approx(-0.25))


class TestClamping:
    """Test that Lower never passes Upper."""

    def test_lower_clamped_to_upper(self, handles):
        handles.set_range(1, -0.5, 0.2)
        handles.begin_drag(2)

        assert handles.drag_to(0.9) == pytest.approx(0.2)
        assert handles.lower(1) == handles.upper(1)

    def test_upper_clamped_to_lower(self, handles):
        handles.set_range(0, -0.1, 0.5)
        handles.begin_drag(1)

        assert handles.drag_to(-0.8) == pytest.approx(-0.1)

    def test_clamped_to_viewport(self, handles):
        handles.begin_drag(7)

        assert handles.drag_to(4.0) == 1.0

    def test_random_drag_sequence_keeps_order(self, handles):
        rng = np.random.default_rng(3)
        for _ in range(500):
            handles.begin_drag(int(rng.integers(0, 8)))
            for y in rng.uniform(-1.5, 1.5, size=3):
                handles.drag_to(float(y))
                lower, upper = handles.bounds()
                assert np.all(lower <= upper)
            handles.end_drag()


class TestProgrammaticRanges:
    """Test set_range and reset."""

    def test_set_range(self, handles):
        handles.set_range(2, -0.3, 0.4)

        assert handles.lower(2) == pytest.approx(-0.3)
        assert handles.upper(2) == pytest.approx(0.4)

    def test_set_range_rejects_inverted(self, handles):
        with pytest.raises(ValueError, match="must not exceed"):
            handles.set_range(0, 0.5, 0.1)

    def test_set_range_rejects_bad_axis(self, handles):
        with pytest.raises(ValueError, match="axis_index"):
            handles.set_range(4, 0.0, 0.1)

    def test_reset(self, handles):
        handles.set_range(0, -0.2, 0.2)
        handles.begin_drag(0)
        handles.reset()

        assert not handles.is_dragging
        lower, upper = handles.bounds()
        np.testing.assert_array_equal(lower, -1.0)
        np.testing.assert_array_equal(upper, 1.0)
