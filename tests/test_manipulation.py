"""
Tests for the drag/resize/hover state machine
"""
import pytest

from models.element import create_element
from models.transform import Rect, Vec2
from services.manipulation import (
    ManipulationController, STATE_IDLE, STATE_DRAGGING, STATE_RESIZING
)


@pytest.fixture
def scene_with_box(fresh_scene):
    fresh_scene.insert_standalone(create_element('text', x=10, y=10, width=100, height=50, element_id='box'))
    return fresh_scene


class TestDrag:

    def test_drag_commits_on_pointer_up(self, scene_with_box):
        controller = ManipulationController(scene_with_box)
        assert controller.pointer_down('box', Vec2(20, 20))
        assert controller.state == STATE_DRAGGING

        preview = controller.pointer_move(Vec2(50, 60))
        assert preview == Rect(40, 50, 100, 50)
        # Scene untouched until the gesture ends
        assert scene_with_box.get_element('box').geometry == Rect(10, 10, 100, 50)

        committed = controller.pointer_up()
        assert committed == Rect(40, 50, 100, 50)
        assert scene_with_box.get_element('box').geometry == committed
        assert controller.state == STATE_IDLE

    def test_moves_are_relative_to_start(self, scene_with_box):
        controller = ManipulationController(scene_with_box)
        controller.pointer_down('box', Vec2(0, 0))
        controller.pointer_move(Vec2(100, 100))
        controller.pointer_move(Vec2(5, 0))
        assert controller.pointer_up() == Rect(15, 10, 100, 50)

    def test_zoom_divides_delta(self, scene_with_box):
        controller = ManipulationController(scene_with_box, zoom=2.0, nested_scale=0.5)
        assert controller.active_scale == 1.0
        controller.zoom = 4.0
        controller.pointer_down('box', Vec2(0, 0))
        assert controller.pointer_move(Vec2(40, 20)) == Rect(30, 20, 100, 50)

    def test_invalid_scale_rejected(self, scene_with_box):
        with pytest.raises(ValueError):
            ManipulationController(scene_with_box, zoom=0)
        controller = ManipulationController(scene_with_box)
        with pytest.raises(ValueError):
            controller.nested_scale = -1

    def test_cancel_leaves_scene_untouched(self, scene_with_box):
        controller = ManipulationController(scene_with_box)
        controller.pointer_down('box', Vec2(0, 0))
        controller.pointer_move(Vec2(30, 30))
        assert controller.cancel()
        assert scene_with_box.get_element('box').geometry == Rect(10, 10, 100, 50)
        assert not controller.cancel()
        assert controller.pointer_up() is None

    def test_snap_to_grid(self, scene_with_box):
        controller = ManipulationController(scene_with_box, snap=True)
        controller.pointer_down('box', Vec2(0, 0))
        assert controller.pointer_move(Vec2(13, 27)) == Rect(20, 40, 100, 50)

    def test_snap_drag_keeps_size(self, fresh_scene):
        fresh_scene.insert_standalone(create_element('text', x=3, y=3, width=47, height=33, element_id='odd'))
        controller = ManipulationController(fresh_scene, snap=True)
        controller.pointer_down('odd', Vec2(0, 0))
        assert controller.pointer_move(Vec2(8, 8)) == Rect(10, 10, 47, 33)


class TestResize:

    def test_resize_east(self, scene_with_box):
        controller = ManipulationController(scene_with_box)
        assert controller.pointer_down('box', Vec2(110, 35), handle='e')
        assert controller.state == STATE_RESIZING
        assert controller.pointer_move(Vec2(140, 35)) == Rect(10, 10, 130, 50)

    def test_resize_west_keeps_right_edge(self, scene_with_box):
        controller = ManipulationController(scene_with_box)
        controller.pointer_down('box', Vec2(10, 35), handle='w')
        rect = controller.pointer_move(Vec2(-10, 35))
        assert rect == Rect(-10, 10, 120, 50)
        assert rect.right == 110

    def test_resize_clamps_to_min_size(self, scene_with_box):
        controller = ManipulationController(scene_with_box)
        controller.pointer_down('box', Vec2(10, 10), handle='nw')
        rect = controller.pointer_move(Vec2(500, 500))
        assert (rect.width, rect.height) == (20, 20)
        assert (rect.right, rect.bottom) == (110, 60)

    def test_snap_resize_east_keeps_left_edge(self, fresh_scene):
        fresh_scene.insert_standalone(create_element('text', x=3, y=3, width=47, height=33, element_id='odd'))
        controller = ManipulationController(fresh_scene, snap=True)
        controller.pointer_down('odd', Vec2(50, 20), handle='e')
        # Right edge 50 + 19 = 69 snaps to 70
        assert controller.pointer_move(Vec2(69, 20)) == Rect(3, 3, 67, 33)

    def test_snap_resize_west_keeps_right_edge(self, fresh_scene):
        fresh_scene.insert_standalone(create_element('text', x=3, y=3, width=47, height=33, element_id='odd'))
        controller = ManipulationController(fresh_scene, snap=True)
        controller.pointer_down('odd', Vec2(3, 20), handle='sw')
        rect = controller.pointer_move(Vec2(-9, 25))
        # Left edge -9 snaps to -10, bottom 36 + 5 = 41 snaps to 40
        assert rect == Rect(-10, 3, 60, 37)
        assert rect.right == 50

    def test_unknown_handle(self, scene_with_box):
        controller = ManipulationController(scene_with_box)
        assert not controller.pointer_down('box', Vec2(0, 0), handle='middle')
        assert controller.state == STATE_IDLE


class TestGuards:

    def test_reentrancy_guard(self, scene_with_box):
        scene_with_box.insert_standalone(create_element('text', element_id='other'))
        controller = ManipulationController(scene_with_box)
        assert controller.pointer_down('box', Vec2(0, 0))
        context = controller.context
        assert not controller.pointer_down('other', Vec2(40, 40))
        assert not controller.pointer_down('box', Vec2(40, 40), handle='e')
        assert controller.active_element_id == 'box'
        assert controller.context is context
        assert controller.context.start_pointer == Vec2(0, 0)
        assert controller.context.start_geometry == Rect(10, 10, 100, 50)
        assert controller.state == STATE_DRAGGING

    def test_unknown_element(self, scene_with_box):
        controller = ManipulationController(scene_with_box)
        assert not controller.pointer_down('missing', Vec2(0, 0))
        assert not controller.is_active

    def test_element_removed_mid_gesture(self, scene_with_box):
        controller = ManipulationController(scene_with_box)
        controller.pointer_down('box', Vec2(0, 0))
        scene_with_box.remove('box')
        assert controller.pointer_move(Vec2(10, 10)) is None
        assert controller.pointer_up() is None
        assert controller.state == STATE_IDLE

    def test_idle_move_is_noop(self, scene_with_box):
        controller = ManipulationController(scene_with_box)
        assert controller.pointer_move(Vec2(10, 10)) is None


class TestHover:

    def test_hovered_container(self, container_scene):
        controller = ManipulationController(container_scene)
        controller.pointer_down('solo', Vec2(300, 300))
        controller.pointer_move(Vec2(100, 100))
        assert controller.hovered_container_id == 'c1'

        controller.pointer_move(Vec2(600, 600))
        assert controller.hovered_container_id is None

    def test_hover_uses_artboard_origin_and_zoom(self, container_scene):
        controller = ManipulationController(container_scene, zoom=2.0)
        controller.artboard_origin = Vec2(1000, 0)
        controller.pointer_down('solo', Vec2(0, 0))
        # (1200 - 1000) / 2 = 100 local, inside c1 (50..250)
        controller.pointer_move(Vec2(1200, 200))
        assert controller.hovered_container_id == 'c1'
        controller.pointer_move(Vec2(200, 200))
        assert controller.hovered_container_id is None

    def test_dragged_container_never_hovers_itself(self, container_scene):
        controller = ManipulationController(container_scene)
        controller.pointer_down('c1', Vec2(60, 60))
        controller.pointer_move(Vec2(61, 61))
        assert controller.hovered_container_id is None

    def test_hover_cleared_and_no_reparent_on_drop(self, container_scene):
        controller = ManipulationController(container_scene)
        controller.pointer_down('solo', Vec2(300, 300))
        controller.pointer_move(Vec2(100, 100))
        controller.pointer_up()
        assert controller.hovered_container_id is None
        assert container_scene.get_parent('solo') is None

    def test_to_local(self, fresh_scene):
        controller = ManipulationController(fresh_scene, zoom=0.5)
        assert controller.to_local(Vec2(60, 40), Vec2(10, 20)) == Vec2(100, 40)


class TestBounds:

    def test_drop_off_artboard_is_constrained(self, scene_with_box, square_format):
        controller = ManipulationController(scene_with_box, artboard_size=square_format)
        controller.pointer_down('box', Vec2(0, 0))
        controller.pointer_move(Vec2(-5000, -5000))
        assert controller.preview_geometry == Rect(-4990, -4990, 100, 50)
        committed = controller.pointer_up()
        assert committed == Rect(0, 0, 100, 50)
        assert scene_with_box.get_element('box').geometry == committed

    def test_drop_far_right_keeps_part_visible(self, scene_with_box, square_format):
        controller = ManipulationController(scene_with_box, artboard_size=square_format)
        controller.pointer_down('box', Vec2(0, 0))
        controller.pointer_move(Vec2(500, 0))
        # 20 px of the box stays on the 100 x 100 artboard
        assert controller.pointer_up() == Rect(80, 10, 100, 50)

    def test_partly_visible_drop_is_kept(self, scene_with_box, square_format):
        controller = ManipulationController(scene_with_box, artboard_size=square_format)
        controller.pointer_down('box', Vec2(0, 0))
        controller.pointer_move(Vec2(-60, 0))
        assert controller.pointer_up() == Rect(-50, 10, 100, 50)

    def test_children_are_not_constrained(self, container_scene, square_format):
        controller = ManipulationController(container_scene, artboard_size=square_format)
        controller.pointer_down('child1', Vec2(0, 0))
        controller.pointer_move(Vec2(-500, 0))
        assert controller.pointer_up().x == -500

    def test_no_artboard_size_no_constraint(self, scene_with_box):
        controller = ManipulationController(scene_with_box)
        controller.pointer_down('box', Vec2(0, 0))
        controller.pointer_move(Vec2(-5000, -5000))
        assert controller.pointer_up() == Rect(-4990, -4990, 100, 50)
