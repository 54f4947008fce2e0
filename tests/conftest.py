import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6 import QtWidgets  # noqa: E402

from TDS_pieMenu.pieSettings import PieSettings  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    return app


class FakeInput(object):
    def __init__(self, grab_ok=True, grab_raises=False):
        self.grab_ok = grab_ok
        self.grab_raises = grab_raises
        self.grabbed = False
        self.grab_calls = 0
        self.release_calls = 0
        self.warps = []

    def grab_input(self, edit_mode=False):
        self.grab_calls += 1
        if self.grab_raises:
            raise RuntimeError("no input for you")
        self.grabbed = self.grab_ok
        return self.grab_ok

    def release_input(self):
        self.release_calls += 1
        self.grabbed = False

    def warp_pointer(self, x, y):
        self.warps.append((x, y))


class FakeDisplay(object):
    def __init__(self, pointer=(500, 400), bounds=(0, 0, 1920, 1080)):
        self.pointer = pointer
        self.bounds = bounds

    def pointer_position(self):
        return self.pointer

    def monitor_bounds(self):
        return self.bounds


@pytest.fixture
def settings():
    return PieSettings.from_dict()


@pytest.fixture
def fake_input():
    return FakeInput()


@pytest.fixture
def fake_display():
    return FakeDisplay()


@pytest.fixture
def events():
    return {"hover": [], "select": [], "cancel": []}


@pytest.fixture
def controller(qapp, fake_input, fake_display, settings, events):
    from TDS_pieMenu.pieMenu_main import PieMenuController
    return PieMenuController(
        fake_input, fake_display, settings,
        on_hover=lambda menu_id, node_id: events["hover"].append((menu_id, node_id)),
        on_select=lambda menu_id, node_id: events["select"].append((menu_id, node_id)),
        on_cancel=lambda menu_id: events["cancel"].append(menu_id),
    )


def make_structure():
    return {
        "name": "Root",
        "icon": "root",
        "children": [
            {"name": "A", "icon": "a", "children": [
                {"name": "A0", "icon": "a0"},
                {"name": "A1", "icon": "a1", "children": [
                    {"name": "A1x", "icon": "x"},
                ]},
                {"name": "A2", "icon": "a2"},
            ]},
            {"name": "B", "icon": "b"},
            {"name": "C", "icon": "c", "id": "custom-c", "children": [
                {"name": "C0", "icon": "c0"},
            ]},
            {"name": "D", "icon": "d"},
        ],
    }
