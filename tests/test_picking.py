"""
Tests for pick encoding and CPU render targets.
"""

import numpy as np
import pytest

from volbrush.constants import MAX_LINE_ID
from volbrush.filter import PickResult, RenderTarget, decode_texel, encode_handle, encode_lines
from volbrush.filter.picking import decode_handle, decode_line


# ============================================================================
# Encoding Tests
# ============================================================================


class TestHandleEncoding:
    """Test the red-channel handle encoding."""

    @pytest.mark.parametrize("handle_id", [0, 1, 7, 100, 253])
    def test_handle_decodes_to_itself(self, handle_id):
        color = np.asarray(encode_handle(handle_id), dtype=np.float32)

        assert decode_handle(color[0]) == handle_id
        assert decode_texel(color) == PickResult(handle_id=handle_id)

    def test_zero_red_is_no_handle(self):
        assert decode_handle(0.0) == -1

    def test_out_of_range_handle(self):
        with pytest.raises(ValueError, match="handle_id"):
            encode_handle(254)


class TestLineEncoding:
    """Test the green/blue/alpha line encoding."""

    def test_lines_decode_to_element_index(self):
        indices = np.array([0, 1, 65534, 65535, 65536, 2**32 + 5, 2**40 + 12345], dtype=np.uint64)
        colors = encode_lines(indices)

        assert colors.dtype == np.float32
        np.testing.assert_array_equal(colors[:, 0], 0.0)
        for index, color in zip(indices, colors):
            assert decode_texel(color) == PickResult(line_id=int(index))

    def test_largest_encodable_index(self):
        colors = encode_lines(np.array([MAX_LINE_ID - 1], dtype=np.uint64))

        assert decode_line(colors[0, 1], colors[0, 2], colors[0, 3]) == MAX_LINE_ID - 1

    def test_index_beyond_encoding_limit(self):
        with pytest.raises(ValueError, match="pick encoding limit"):
            encode_lines(np.array([MAX_LINE_ID], dtype=np.uint64))

    def test_empty_texel_is_nothing(self):
        result = decode_texel(np.zeros(4, dtype=np.float32))

        assert result == PickResult()
        assert not result.hit_handle
        assert not result.hit_line

    def test_handle_takes_precedence(self):
        texel = np.array([3 / 255, 12.0, 0.0, 0.0], dtype=np.float32)

        assert decode_texel(texel) == PickResult(handle_id=2)


# ============================================================================
# RenderTarget Tests
# ============================================================================


class TestRenderTarget:
    """Test surface orientation, readback and rasterization."""

    def test_size_and_clear(self):
        target = RenderTarget(32, 16)
        target.clear((0.1, 0.2, 0.3, 0.4))

        assert target.size == (32, 16)
        assert target.pixels.shape == (16, 32, 4)
        np.testing.assert_allclose(target.texel(5, 5), [0.1, 0.2, 0.3, 0.4])

    def test_invalid_size(self):
        with pytest.raises(ValueError, match="positive"):
            RenderTarget(0, 10)

    def test_pointer_y_is_flipped(self):
        target = RenderTarget(8, 8)
        target.pixels[0, 0] = (1.0, 0.0, 0.0, 1.0)  # bottom-left texel

        np.testing.assert_array_equal(target.texel(0, 7), [1.0, 0.0, 0.0, 1.0])
        np.testing.assert_array_equal(target.texel(0, 0), [0.0, 0.0, 0.0, 0.0])

    def test_out_of_bounds_pointer_is_clamped(self):
        target = RenderTarget(8, 8)

        assert target.screen_to_texel(-3, 20) == (0, 0)
        assert target.screen_to_texel(20, -3) == (7, 7)

    def test_ndc_roundtrip_stays_in_pixel(self):
        target = RenderTarget(64, 48)
        x, y = target.screen_to_ndc(10, 30)

        assert target.ndc_to_screen(x, y) == (10, 30)

    def test_screen_to_ndc_range(self):
        target = RenderTarget(100, 100)
        x_low, y_top = target.screen_to_ndc(0, 0)
        x_high, y_bottom = target.screen_to_ndc(99, 99)

        assert -1.0 < x_low < -0.98
        assert 0.98 < y_top < 1.0
        assert 0.98 < x_high < 1.0
        assert -1.0 < y_bottom < -0.98

    def test_draw_triangle(self):
        target = RenderTarget(64, 64)
        vertices = np.array([[[0.0, 0.5], [-0.5, -0.5], [0.5, -0.5]]], dtype=np.float32)
        target.draw_triangles(vertices, np.array([[0.0, 1.0, 0.0, 1.0]], dtype=np.float32))

        np.testing.assert_array_equal(target.texel(*target.ndc_to_screen(0.0, 0.0)), [0, 1, 0, 1])
        np.testing.assert_array_equal(target.texel(*target.ndc_to_screen(0.9, 0.9)), [0, 0, 0, 0])

    def test_triangle_winding_does_not_matter(self):
        target = RenderTarget(64, 64)
        vertices = np.array([[[0.0, 0.5], [0.5, -0.5], [-0.5, -0.5]]], dtype=np.float32)
        target.draw_triangles(vertices, np.array([[1.0, 0.0, 0.0, 1.0]], dtype=np.float32))

        np.testing.assert_array_equal(target.texel(*target.ndc_to_screen(0.0, 0.0)), [1, 0, 0, 1])

    def test_draw_horizontal_polyline(self):
        target = RenderTarget(64, 64)
        xs = np.array([-1.0, 0.0, 1.0], dtype=np.float32)
        ys = np.array([[0.0, 0.0, 0.0]], dtype=np.float32)
        target.draw_polylines(xs, ys, np.array([True]), np.array([[1.0, 1.0, 1.0, 1.0]]))

        row = target.pixels[32]
        np.testing.assert_array_equal(row[:, 0], 1.0)
        assert target.pixels[:, :, 0].sum() == 64

    def test_steep_polyline_is_connected(self):
        target = RenderTarget(64, 64)
        xs = np.array([-1.0, -0.9], dtype=np.float32)
        ys = np.array([[-0.9, 0.9]], dtype=np.float32)
        target.draw_polylines(xs, ys, np.array([True]), np.array([[1.0, 1.0, 1.0, 1.0]]))

        covered_rows = np.flatnonzero(target.pixels[:, :, 0].any(axis=1))
        np.testing.assert_array_equal(np.diff(covered_rows), 1)
        assert len(covered_rows) >= 57

    def test_masked_polyline_is_skipped(self):
        target = RenderTarget(16, 16)
        xs = np.array([-1.0, 1.0], dtype=np.float32)
        ys = np.array([[0.0, 0.0]], dtype=np.float32)
        target.draw_polylines(xs, ys, np.array([False]), np.array([[1.0, 1.0, 1.0, 1.0]]))

        assert not target.pixels.any()

    def test_offscreen_polyline_is_clipped(self):
        target = RenderTarget(16, 16)
        xs = np.array([-1.0, 1.0], dtype=np.float32)
        ys = np.array([[5000.0, 9000.0]], dtype=np.float32)
        target.draw_polylines(xs, ys, np.array([True]), np.array([[1.0, 1.0, 1.0, 1.0]]))

        assert not target.pixels.any()

    def test_contains(self):
        target = RenderTarget(8, 4)

        assert target.contains(0, 0)
        assert target.contains(7, 3)
        assert not target.contains(8, 0)
        assert not target.contains(0, 4)
        assert not target.contains(-1, 2)
