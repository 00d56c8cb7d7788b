"""
Tests for CanvasInteraction - Qt mouse events driving the state machine
"""
import pytest
from PyQt5.QtCore import QEvent, QPointF, Qt
from PyQt5.QtGui import QKeyEvent, QMouseEvent

from components.canvas_interaction import CanvasInteraction
from models.element import create_element
from models.transform import Rect


def _mouse(event_type, x, y, button=Qt.LeftButton):
    buttons = button if event_type != QEvent.MouseButtonRelease else Qt.NoButton
    return QMouseEvent(event_type, QPointF(x, y), button, buttons, Qt.NoModifier)


@pytest.fixture
def interaction(qtbot, container_scene):
    return CanvasInteraction(container_scene)


class TestHitTesting:

    def test_child_above_container(self, interaction):
        interaction.scene.update_geometry('child1', Rect(10, 10, 50, 20))
        # child1 sits at absolute (60, 60)
        assert interaction.element_at(70, 70).id == 'child1'
        assert interaction.element_at(200, 180).id == 'c1'
        assert interaction.element_at(5, 5) is None

    def test_zoom_and_origin(self, interaction):
        interaction.set_zoom(2.0)
        interaction.set_artboard_origin(100, 0)
        rect = interaction.screen_rect(interaction.scene.get_element('solo'))
        assert rect == Rect(700, 600, 200, 100)

    def test_zoom_is_clamped(self, interaction):
        interaction.set_zoom(100)
        assert interaction.controller.zoom == 5.0
        interaction.set_zoom(0)
        assert interaction.controller.zoom == 0.1

    def test_artboard_filter(self, qtbot, fresh_scene):
        fresh_scene.insert_standalone(create_element('text', element_id='mine', size_id='300x250'))
        fresh_scene.insert_standalone(create_element('text', element_id='other', size_id='728x90'))
        fresh_scene.insert_standalone(create_element('logo', element_id='g', size_id='global', x=500))
        interaction = CanvasInteraction(fresh_scene, artboard_id='300x250')
        assert interaction.element_at(10, 10).id == 'mine'
        assert interaction.element_at(510, 10).id == 'g'


class TestGestures:

    def test_press_drag_release(self, qtbot, interaction):
        finished = []
        interaction.gesture_finished.connect(lambda eid, rect: finished.append((eid, rect)))

        with qtbot.waitSignal(interaction.selection_changed):
            assert interaction.mouse_press(_mouse(QEvent.MouseButtonPress, 310, 310))
        assert interaction.selected_id == 'solo'

        with qtbot.waitSignal(interaction.geometry_changed) as blocker:
            interaction.mouse_move(_mouse(QEvent.MouseMove, 330, 320))
        assert blocker.args == ['solo', Rect(320, 310, 100, 50)]

        assert interaction.mouse_release(_mouse(QEvent.MouseButtonRelease, 330, 320))
        assert finished == [('solo', Rect(320, 310, 100, 50))]
        assert interaction.scene.get_element('solo').geometry == Rect(320, 310, 100, 50)

    def test_resize_from_handle(self, interaction):
        interaction.select('solo')
        # East edge of solo at (400, 325)
        assert interaction.mouse_press(_mouse(QEvent.MouseButtonPress, 400, 325))
        assert interaction.controller.state == 'resizing'
        interaction.mouse_move(_mouse(QEvent.MouseMove, 420, 325))
        interaction.mouse_release(_mouse(QEvent.MouseButtonRelease, 420, 325))
        assert interaction.scene.get_element('solo').geometry == Rect(300, 300, 120, 50)

    def test_hover_signal(self, qtbot, interaction):
        interaction.mouse_press(_mouse(QEvent.MouseButtonPress, 310, 310))
        with qtbot.waitSignal(interaction.hover_changed) as blocker:
            interaction.mouse_move(_mouse(QEvent.MouseMove, 100, 100))
        assert blocker.args == ['c1']

    def test_right_button_ignored(self, interaction):
        assert not interaction.mouse_press(_mouse(QEvent.MouseButtonPress, 310, 310, Qt.RightButton))
        assert not interaction.controller.is_active

    def test_press_on_empty_clears_selection(self, interaction):
        interaction.select('solo')
        assert not interaction.mouse_press(_mouse(QEvent.MouseButtonPress, 5, 5))
        assert interaction.selected_id is None

    def test_escape_cancels(self, interaction):
        interaction.mouse_press(_mouse(QEvent.MouseButtonPress, 310, 310))
        interaction.mouse_move(_mouse(QEvent.MouseMove, 350, 350))
        escape = QKeyEvent(QEvent.KeyPress, Qt.Key_Escape, Qt.NoModifier)
        assert interaction.eventFilter(None, escape)
        assert interaction.scene.get_element('solo').geometry == Rect(300, 300, 100, 50)
        assert not interaction.controller.is_active

    def test_idle_move_sets_cursor(self, qtbot, interaction):
        interaction.select('solo')
        with qtbot.waitSignal(interaction.cursor_changed) as blocker:
            interaction.mouse_move(_mouse(QEvent.MouseMove, 400, 325, Qt.NoButton))
        assert blocker.args == [int(Qt.SizeHorCursor)]

    def test_drop_off_artboard_is_constrained(self, qtbot, container_scene):
        from models.banner_size import BannerSize
        interaction = CanvasInteraction(container_scene, artboard_size=BannerSize('Board', 500, 500))
        interaction.mouse_press(_mouse(QEvent.MouseButtonPress, 310, 310))
        interaction.mouse_move(_mouse(QEvent.MouseMove, -4000, 310))
        with qtbot.waitSignal(interaction.gesture_finished) as blocker:
            interaction.mouse_release(_mouse(QEvent.MouseButtonRelease, -4000, 310))
        assert blocker.args == ['solo', Rect(0, 300, 100, 50)]

    def test_select_unknown(self, interaction):
        interaction.select('missing')
        assert interaction.selected_id is None


class TestPainting:

    def test_paint_selection_uses_preview(self, interaction):
        from PyQt5.QtGui import QImage, QPainter
        image = QImage(500, 500, QImage.Format_ARGB32)
        image.fill(0)

        interaction.select('solo')
        interaction.mouse_press(_mouse(QEvent.MouseButtonPress, 310, 310))
        interaction.mouse_move(_mouse(QEvent.MouseMove, 360, 360))

        painter = QPainter(image)
        interaction.paint_selection(painter)
        painter.end()

        # Handles follow the preview (350, 350), not the committed (300, 300)
        assert image.pixel(350, 350) != 0
        assert image.pixel(300, 300) == 0
