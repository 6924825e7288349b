"""Tests for the bullet point panel model."""

import pytest

from mindmap import BulletListModel, SceneModel


@pytest.fixture
def bullets(app):
    return BulletListModel()


class TestBulletListModel:
    def test_add_bullet_point(self, bullets):
        assert bullets.addBulletPoint("First") is True
        assert bullets.addBulletPoint("Second") is True
        assert bullets.count == 2
        assert bullets.points() == ["First", "Second"]
        assert bullets.data(bullets.index(1, 0), bullets.TextRole) == "Second"

    def test_empty_text_is_ignored(self, bullets):
        assert bullets.addBulletPoint("") is False
        assert bullets.count == 0

    def test_select_bullet_point(self, bullets):
        bullets.addBulletPoint("First")
        bullets.addBulletPoint("Second")
        assert bullets.selectBulletPoint(1) is True
        assert bullets.selectedIndex == 1
        assert bullets.data(bullets.index(1, 0), bullets.SelectedRole) is True
        assert bullets.data(bullets.index(0, 0), bullets.SelectedRole) is False

    def test_select_out_of_range(self, bullets):
        bullets.addBulletPoint("First")
        assert bullets.selectBulletPoint(3) is False
        assert bullets.selectBulletPoint(-1) is False
        assert bullets.selectedIndex == -1

    def test_delete_selected_bullet_point(self, bullets):
        for text in ("a", "b", "c"):
            bullets.addBulletPoint(text)
        bullets.selectBulletPoint(1)
        assert bullets.deleteSelectedBulletPoint() is True
        assert bullets.points() == ["a", "c"]
        assert bullets.selectedIndex == -1

    def test_delete_without_selection(self, bullets):
        bullets.addBulletPoint("a")
        assert bullets.deleteSelectedBulletPoint() is False
        assert bullets.points() == ["a"]

    def test_role_names(self, bullets):
        roles = bullets.roleNames()
        assert roles[bullets.TextRole] == b"text"
        assert roles[bullets.SelectedRole] == b"selected"

    def test_independent_of_scene_clear(self, app, bullets):
        scene = SceneModel()
        bullets.addBulletPoint("keep me")
        scene.createNode("Node")
        scene.clear()
        assert bullets.points() == ["keep me"]
