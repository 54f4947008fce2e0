import logging

from PySide6 import QtWidgets, QtCore, QtGui

from .defaultMenu import default_menu
from .menuNode import NodeState
from .pieMenu_main import PieMenuController
from .pieSettings import PieSettings
from .renderParams import render_parameters
from .selectionWedges import CENTER_HIT, PARENT_HIT, SelectionWedges

logger = logging.getLogger(__name__)

_ANCHORED = (NodeState.CENTER, NodeState.CENTER_HOVERED, NodeState.PARENT, NodeState.PARENT_HOVERED)


class QtDisplayGeometry(object):
    def pointer_position(self):
        p = QtGui.QCursor.pos()
        return p.x(), p.y()

    def monitor_bounds(self):
        screen = QtGui.QGuiApplication.screenAt(QtGui.QCursor.pos())
        if screen is None:
            screen = QtGui.QGuiApplication.primaryScreen()
        r = screen.geometry()
        return r.x(), r.y(), r.width(), r.height()


class PieBackground(QtWidgets.QWidget):
    """Full-screen transparent overlay catching all input while a menu is open."""

    def __init__(self, settings, parent=None):
        super().__init__(parent, QtCore.Qt.Tool)
        self.setWindowFlags(QtCore.Qt.FramelessWindowHint | QtCore.Qt.WindowStaysOnTopHint | QtCore.Qt.Tool)
        self.setAttribute(QtCore.Qt.WA_TranslucentBackground, True)
        self.setMouseTracking(True)
        self.setFocusPolicy(QtCore.Qt.StrongFocus)

        self.settings = settings
        self.controller = None
        self.wedges = SelectionWedges(
            settings.get("wedge_inner_radius") * settings.get("global_scale"))

        self.node_colour = QtGui.QColor("#5285a6")
        self.center_colour = QtGui.QColor("#454545")
        self.text_colour = QtGui.QColor("#FFFFFF")

    # ---------- INPUT MANIPULATOR ----------
    def grab_input(self, edit_mode=False) -> bool:
        screen = QtGui.QGuiApplication.screenAt(QtGui.QCursor.pos()) or QtGui.QGuiApplication.primaryScreen()
        if screen is None:
            logger.warning("[PieMenu] No screen to show the menu on.")
            return False
        self.setGeometry(screen.geometry())
        self.show()
        self.activateWindow()
        self.raise_()
        self.grabMouse()
        self.grabKeyboard()
        return self.isVisible()

    def release_input(self):
        self.releaseMouse()
        self.releaseKeyboard()
        self.hide()

    def warp_pointer(self, x, y):
        QtGui.QCursor.setPos(int(x), int(y))

    # ---------- EVENTS ----------
    def sync_wedges(self):
        if self.controller is None or not self.controller.is_active:
            return
        self.wedges.set_item_angles(self.controller.ring_angles, self.controller.ring_back_link)
        self.update()

    def _global_pos(self, event):
        p = event.globalPosition().toPoint()
        return p.x(), p.y()

    def mouseMoveEvent(self, event):
        c = self.controller
        if c is None or not c.is_active:
            return
        hit = self.wedges.on_motion(c.ring_anchor, self._global_pos(event))
        if hit is None:
            return
        if hit == CENTER_HIT:
            c.hover_center()
        elif hit == PARENT_HIT:
            c.hover_parent()
        else:
            c.hover_child(hit)
        self.update()

    def mouseReleaseEvent(self, event):
        c = self.controller
        if c is None or not c.is_active:
            return
        if event.button() in (QtCore.Qt.RightButton, QtCore.Qt.MiddleButton):
            c.cancel()
            event.accept()
            return
        if event.button() != QtCore.Qt.LeftButton:
            event.ignore()
            return

        hit = self.wedges.on_release(c.ring_anchor, self._global_pos(event))
        if hit == PARENT_HIT:
            c.select_parent()
        elif hit is not None:
            c.select_child(hit)
        self.sync_wedges()
        event.accept()

    def keyPressEvent(self, event):
        if event.key() == QtCore.Qt.Key_Escape and self.controller is not None:
            self.controller.cancel()
            return
        super().keyPressEvent(event)

    def closeEvent(self, e):
        if self.controller is not None:
            self.controller.cancel()
        super().closeEvent(e)

    # ---------- PAINT ----------
    def paintEvent(self, event):
        c = self.controller
        if c is None or c.root is None:
            return

        params = render_parameters(self.settings, c.root)
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.Antialiasing)
        painter.setPen(QtCore.Qt.NoPen)
        caption_option = QtGui.QTextOption(QtCore.Qt.AlignCenter)
        caption_option.setWrapMode(QtGui.QTextOption.WordWrap)

        def pt(xy):
            return QtCore.QPointF(self.mapFromGlobal(QtCore.QPoint(int(xy[0]), int(xy[1]))))

        def draw(node, parent_pos):
            p = params.get(node.id)
            pos = parent_pos
            if p is not None:
                if node.state in _ANCHORED and node.anchor is not None:
                    pos = pt(node.anchor)
                elif p.translation is not None and parent_pos is not None:
                    pos = parent_pos + QtCore.QPointF(*p.translation)

                if pos is not None and p.size > 0:
                    tier_center = p.visual_state in (NodeState.CENTER, NodeState.CENTER_HOVERED)
                    painter.setBrush(self.center_colour if tier_center else self.node_colour)
                    painter.drawEllipse(pos, p.size / 2, p.size / 2)
                    if p.caption:
                        painter.setPen(self.text_colour)
                        painter.drawText(QtCore.QRectF(pos.x() - p.size / 2, pos.y() - p.size / 2, p.size, p.size),
                                         p.caption, caption_option)
                        painter.setPen(QtCore.Qt.NoPen)
            for child in node.children:
                draw(child, pos)

        draw(c.root, None)
        painter.end()


# ==== ENTRY HELPERS ====
_PIE = {"controller": None, "background": None, "next_id": 1}


def _log_select(menu_id, node_id):
    logger.info("[PieMenu] Menu %s: selected '%s'.", menu_id, node_id)


def _log_cancel(menu_id):
    logger.info("[PieMenu] Menu %s: cancelled.", menu_id)


def launch_pie_menu(structure=None, edit_mode=False, on_hover=None, on_select=None, on_cancel=None,
                    settings=None):
    """Open a pie menu at the pointer. Returns the menu id or an ErrorCode.

    The overlay and controller are created on first use and reused afterwards.
    """
    if QtWidgets.QApplication.instance() is None:
        raise RuntimeError("launch_pie_menu needs a running QApplication")

    if _PIE["controller"] is None:
        settings = settings or PieSettings()
        background = PieBackground(settings)
        controller = PieMenuController(background, QtDisplayGeometry(), settings,
                                       on_hover=on_hover,
                                       on_select=on_select or _log_select,
                                       on_cancel=on_cancel or _log_cancel,
                                       parent=background)
        controller.hovered.connect(lambda *_: background.update())
        background.controller = controller
        _PIE["controller"] = controller
        _PIE["background"] = background

    menu_id = _PIE["next_id"]
    result = _PIE["controller"].show(menu_id, structure or default_menu(), edit_mode)
    if result == menu_id:
        _PIE["next_id"] += 1
        _PIE["background"].sync_wedges()
    return result


def close_pie_menu():
    if _PIE["controller"] is not None:
        _PIE["controller"].cancel()
