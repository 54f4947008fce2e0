from PySide6 import QtCore

from TDS_pieMenu.menuNode import NodeState
from TDS_pieMenu.pieMenu_main import PieMenuController
from TDS_pieMenu.pieWidget import PieBackground, QtDisplayGeometry

from conftest import FakeDisplay, FakeInput, make_structure


class _Event(object):
    def __init__(self, x, y, button=QtCore.Qt.LeftButton):
        self._pos = QtCore.QPointF(x, y)
        self._button = button
        self.accepted = None

    def globalPosition(self):
        return self._pos

    def button(self):
        return self._button

    def accept(self):
        self.accepted = True

    def ignore(self):
        self.accepted = False


def _setup(settings, events=None):
    background = PieBackground(settings)
    c = PieMenuController(FakeInput(), FakeDisplay(), settings,
                          on_select=(lambda m, n: events.append((m, n))) if events is not None else None)
    background.controller = c
    c.show(1, make_structure())
    background.sync_wedges()
    return background, c


def test_display_geometry(qapp):
    left, top, width, height = QtDisplayGeometry().monitor_bounds()
    assert width > 0 and height > 0
    assert len(QtDisplayGeometry().pointer_position()) == 2


def test_motion_hovers_children(qapp, settings):
    background, c = _setup(settings)
    # root sits at (500, 400), children at 0/90/180/270
    background.mouseMoveEvent(_Event(650, 402))
    assert c.root.active_child_index == 1
    assert c.root.children[1].state == NodeState.CHILD_HOVERED

    background.mouseMoveEvent(_Event(501, 401))
    assert c.root.state == NodeState.CENTER_HOVERED


def test_release_navigates(qapp, settings):
    selected = []
    background, c = _setup(settings, selected)

    background.mouseReleaseEvent(_Event(500, 250))
    assert c.chain[0].id == "/0"
    assert background.wedges.parent_angle == 180.0

    # new ring is anchored at the pointer of the fake display
    background.mouseReleaseEvent(_Event(500, 550))
    assert c.chain[0].id == "/"

    background.mouseReleaseEvent(_Event(650, 400))
    assert selected == [(1, "/1")]
    assert not c.is_active


def test_right_click_cancels(qapp, settings):
    background, c = _setup(settings)
    e = _Event(0, 0, QtCore.Qt.RightButton)
    background.mouseReleaseEvent(e)
    assert e.accepted
    assert not c.is_active


def test_paint_does_not_fail(qapp, settings):
    background, c = _setup(settings)
    c.select_child(0)
    c.hover_child(1)
    background.resize(800, 600)
    image = background.grab()
    assert not image.isNull()
