"""Tests for pointer, keyboard and wheel handling."""

import math

import pytest
from PySide6.QtCore import Qt

from mindmap import NO_NODE, InteractionController, InteractionState, SceneModel, ScenePoint


@pytest.fixture
def controller(app):
    return InteractionController(SceneModel())


@pytest.fixture
def redraws(controller):
    calls = []
    controller.redrawRequested.connect(lambda: calls.append(1))
    return calls


def node_position(controller, node_id):
    node = controller.scene.get_node(node_id)
    return node.x, node.y


class TestDragging:
    def test_pointer_down_records_offset(self, controller):
        node_id = controller.scene.createNodeAt("N", 10.0, 10.0)
        assert controller.pointerDown(30.0, 35.0) is True
        assert controller.state is InteractionState.DRAGGING
        assert controller.dragging is True
        assert controller.draggedNodeId == node_id
        assert controller.drag_session.offset == ScenePoint(20.0, 25.0)
        assert controller.scene.selected_id == node_id

    def test_pointer_move_applies_offset(self, controller):
        node_id = controller.scene.createNodeAt("N", 10.0, 10.0)
        controller.pointerDown(30.0, 35.0)
        assert controller.pointerMove(200.0, 150.0) is True
        assert node_position(controller, node_id) == (180.0, 125.0)

    def test_repeated_moves_do_not_accumulate(self, controller):
        node_id = controller.scene.createNodeAt("N", 10.0, 10.0)
        controller.pointerDown(30.0, 35.0)
        for _ in range(5):
            controller.pointerMove(200.0, 150.0)
        assert node_position(controller, node_id) == (180.0, 125.0)

    def test_drag_under_zoom_tracks_pointer(self, controller):
        node_id = controller.scene.createNodeAt("N", 10.0, 10.0)
        controller.setZoomLevel(2.0)
        controller.pointerDown(40.0, 40.0)
        assert controller.drag_session.offset == ScenePoint(10.0, 10.0)
        controller.pointerMove(100.0, 60.0)
        assert node_position(controller, node_id) == (40.0, 20.0)

    def test_pointer_down_on_empty_space_stays_idle(self, controller):
        controller.scene.createNodeAt("N", 10.0, 10.0)
        assert controller.pointerDown(500.0, 500.0) is False
        assert controller.state is InteractionState.IDLE
        assert controller.draggedNodeId == NO_NODE

    def test_pointer_move_without_drag_is_noop(self, controller, redraws):
        node_id = controller.scene.createNodeAt("N", 10.0, 10.0)
        redraws.clear()
        assert controller.pointerMove(300.0, 300.0) is False
        assert node_position(controller, node_id) == (10.0, 10.0)
        assert redraws == []

    def test_pointer_up_is_idempotent(self, controller):
        controller.scene.createNodeAt("N", 10.0, 10.0)
        controller.pointerDown(30.0, 35.0)
        controller.pointerUp()
        controller.pointerUp()
        assert controller.state is InteractionState.IDLE
        assert controller.pointerMove(300.0, 300.0) is False

    def test_drag_picks_topmost_node(self, controller):
        controller.scene.createNodeAt("Bottom", 0.0, 0.0)
        top = controller.scene.createNodeAt("Top", 50.0, 20.0)
        controller.pointerDown(75.0, 30.0)
        assert controller.draggedNodeId == top

    def test_drag_ends_when_node_disappears(self, controller):
        controller.scene.createNodeAt("N", 10.0, 10.0)
        controller.pointerDown(30.0, 35.0)
        controller.scene.deleteSelectedNode()
        assert controller.pointerMove(100.0, 100.0) is False
        assert controller.dragging is False


class TestClickSelection:
    def test_click_on_node_selects_it(self, controller):
        node_id = controller.scene.createNodeAt("N", 10.0, 10.0)
        assert controller.click(30.0, 35.0) is True
        assert controller.scene.selected_id == node_id

    def test_click_on_empty_space_clears_selection(self, controller):
        node_id = controller.scene.createNodeAt("N", 10.0, 10.0)
        controller.scene.selectNode(node_id)
        controller.pointerDown(500.0, 500.0)
        # Pointer-down on empty space leaves selection alone.
        assert controller.scene.selected_id == node_id
        controller.pointerUp()
        assert controller.click(500.0, 500.0) is False
        assert controller.scene.selected_id is None

    def test_click_after_drag_keeps_dragged_node_selected(self, controller):
        node_id = controller.scene.createNodeAt("N", 10.0, 10.0)
        controller.pointerDown(30.0, 35.0)
        controller.pointerMove(300.0, 300.0)
        controller.pointerUp()
        assert controller.click(300.0, 300.0) is True
        assert controller.scene.selected_id == node_id

    def test_click_uses_pointer_down_result(self, controller):
        first = controller.scene.createNodeAt("First", 10.0, 10.0)
        controller.scene.createNodeAt("Second", 400.0, 400.0)
        controller.pointerDown(30.0, 35.0)
        controller.pointerUp()
        controller.click(420.0, 420.0)
        assert controller.scene.selected_id == first

    def test_click_on_deleted_target_clears_selection(self, controller):
        controller.scene.createNodeAt("N", 10.0, 10.0)
        controller.pointerDown(30.0, 35.0)
        controller.pointerUp()
        controller.scene.deleteSelectedNode()
        assert controller.click(30.0, 35.0) is False
        assert controller.scene.selected_id is None

    def test_click_under_zoom(self, controller):
        node_id = controller.scene.createNodeAt("N", 100.0, 100.0)
        controller.setZoomLevel(0.5)
        assert controller.click(60.0, 60.0) is True
        assert controller.scene.selected_id == node_id

    def test_click_outside_canvas_clears_selection(self, controller, redraws):
        node_id = controller.scene.createNodeAt("N", 10.0, 10.0)
        controller.scene.selectNode(node_id)
        redraws.clear()
        assert controller.clickOutside() is True
        assert controller.scene.selected_id is None
        assert redraws == [1]
        assert controller.clickOutside() is False

    def test_click_outside_discards_pending_gesture(self, controller):
        node_id = controller.scene.createNodeAt("N", 10.0, 10.0)
        controller.pointerDown(20.0, 20.0)
        controller.pointerUp()
        controller.clickOutside()
        assert controller.click(300.0, 300.0) is False
        assert controller.scene.selected_id is None
        assert controller.scene.get_node(node_id) is not None


class TestKeyboard:
    @pytest.mark.parametrize(
        "key, expected",
        [
            (Qt.Key_Up, (10.0, 5.0)),
            (Qt.Key_Down, (10.0, 15.0)),
            (Qt.Key_Left, (5.0, 10.0)),
            (Qt.Key_Right, (15.0, 10.0)),
        ],
    )
    def test_arrow_keys_nudge_selected_node(self, controller, redraws, key, expected):
        node_id = controller.scene.createNodeAt("N", 10.0, 10.0)
        controller.scene.selectNode(node_id)
        redraws.clear()
        assert controller.keyPress(key) is True
        assert node_position(controller, node_id) == expected
        assert redraws == [1]

    def test_arrow_keys_without_selection_are_noop(self, controller, redraws):
        node_id = controller.scene.createNodeAt("N", 10.0, 10.0)
        redraws.clear()
        assert controller.keyPress(Qt.Key_Up) is False
        assert node_position(controller, node_id) == (10.0, 10.0)
        assert redraws == []

    def test_other_keys_are_ignored(self, controller):
        node_id = controller.scene.createNodeAt("N", 10.0, 10.0)
        controller.scene.selectNode(node_id)
        assert controller.keyPress(Qt.Key_A) is False
        assert node_position(controller, node_id) == (10.0, 10.0)

    def test_nudges_may_leave_the_canvas(self, controller):
        node_id = controller.scene.createNodeAt("N", 0.0, 0.0)
        controller.scene.selectNode(node_id)
        for _ in range(3):
            controller.keyPress(Qt.Key_Left)
        assert node_position(controller, node_id) == (-15.0, 0.0)


class TestZoom:
    def test_wheel_zooms_in_and_out(self, controller, redraws):
        assert controller.wheel(120) is True
        assert math.isclose(controller.zoomLevel, 1.1)
        assert controller.wheel(-120) is True
        assert math.isclose(controller.zoomLevel, 0.99)
        assert redraws == [1, 1]

    def test_wheel_without_vertical_delta_is_ignored(self, controller):
        assert controller.wheel(0) is False
        assert controller.zoomLevel == 1.0

    def test_zoom_does_not_move_nodes(self, controller):
        node_id = controller.scene.createNodeAt("N", 12.345, 67.891)
        before = node_position(controller, node_id)
        controller.wheel(120)
        controller.wheel(120)
        controller.wheel(-120)
        assert node_position(controller, node_id) == before

    def test_invalid_zoom_level_is_rejected(self, controller):
        assert controller.setZoomLevel(0.0) is False
        assert controller.zoomBy(-2.0) is False
        assert controller.zoomLevel == 1.0

    def test_zoom_changed_signal(self, controller):
        changes = []
        controller.zoomChanged.connect(lambda: changes.append(controller.zoomLevel))
        controller.setZoomLevel(2.0)
        assert changes == [2.0]


class TestRedraw:
    def test_scene_mutations_request_redraw(self, controller, redraws):
        node_id = controller.scene.createNode("N")
        controller.scene.selectNode(node_id)
        controller.scene.moveNode(node_id, 1.0, 1.0)
        controller.scene.deleteSelectedNode()
        controller.scene.clear()
        assert len(redraws) == 5
