"""
Tests for transform handles and resize math
"""
from dataclasses import FrozenInstanceError

import pytest
from PyQt5.QtCore import Qt

from components.transform_widgets import (
    CornerHandle, EdgeHandle, CenterHandle, DragContext,
    create_handles, get_handle_at_pos, resize_rect
)
from models.transform import Rect, Vec2


RECT = Rect(100, 100, 200, 100)


class TestResizeRect:

    @pytest.mark.parametrize("direction,dx,dy,expected", [
        ('e', 30, 0, Rect(100, 100, 230, 100)),
        ('w', 30, 0, Rect(130, 100, 170, 100)),
        ('s', 0, 25, Rect(100, 100, 200, 125)),
        ('n', 0, 25, Rect(100, 125, 200, 75)),
        ('se', 10, 10, Rect(100, 100, 210, 110)),
        ('nw', -10, -10, Rect(90, 90, 210, 110)),
    ])
    def test_directions(self, direction, dx, dy, expected):
        assert resize_rect(RECT, direction, dx, dy) == expected

    def test_min_size_keeps_opposite_edge(self):
        rect = resize_rect(RECT, 'w', 1000, 0, min_size=20)
        assert rect.width == 20
        assert rect.right == RECT.right


class TestHandles:

    def test_create_handles_order(self):
        handles = create_handles()
        assert [h.direction for h in handles] == ['nw', 'ne', 'sw', 'se', 'n', 's', 'e', 'w', 'move']

    def test_resize_handles_win_over_center(self):
        handles = create_handles()
        handle = get_handle_at_pos(handles, 300, 150, RECT)
        assert handle.direction == 'e'
        assert get_handle_at_pos(handles, 200, 150, RECT).direction == 'move'
        assert get_handle_at_pos(handles, 10, 10, RECT) is None

    def test_corner_hit_is_round(self):
        handle = CornerHandle('se', handle_size=8, hit_tolerance=4)
        assert handle.hit_test(308, 200, RECT)
        assert not handle.hit_test(310, 210, RECT)

    def test_invalid_directions(self):
        with pytest.raises(ValueError):
            CornerHandle('n')
        with pytest.raises(ValueError):
            EdgeHandle('ne')

    def test_cursors(self):
        assert CornerHandle('nw').get_cursor() == Qt.SizeFDiagCursor
        assert CornerHandle('ne').get_cursor() == Qt.SizeBDiagCursor
        assert EdgeHandle('e').get_cursor() == Qt.SizeHorCursor
        assert EdgeHandle('n').get_cursor() == Qt.SizeVerCursor
        assert CenterHandle().get_cursor() == Qt.SizeAllCursor

    def test_drag(self):
        assert CenterHandle().drag(5, -5, RECT) == Rect(105, 95, 200, 100)
        assert EdgeHandle('s').drag(0, -500, RECT, min_size=10).height == 10

    def test_draw(self, qtbot):
        from PyQt5.QtGui import QImage, QPainter
        image = QImage(400, 300, QImage.Format_ARGB32)
        image.fill(0)
        painter = QPainter(image)
        for handle in create_handles():
            handle.draw(painter, RECT)
        painter.end()
        assert image.pixel(100, 100) != 0


class TestDragContext:

    def test_delta_uses_scale(self):
        context = DragContext('drag', 'a', Vec2(10, 10), RECT, active_scale=2.0)
        assert context.delta(Vec2(30, 50)) == Vec2(10, 20)
        assert not context.is_resize

    def test_frozen(self):
        context = DragContext('resize', 'a', Vec2(0, 0), RECT, direction='e')
        assert context.is_resize
        with pytest.raises(FrozenInstanceError):
            context.element_id = 'b'
