import logging
from enum import IntEnum

from PySide6 import QtCore

from . import angleAllocator
from .angleAllocator import LayoutError, back_link_of
from .menuNode import NodeState, PieMenuError, StructureError, build_tree, children_of
from .nodeState import refresh_chain_states
from .pieSettings import clamp_to_monitor
from .selectionChain import SelectionChain

logger = logging.getLogger(__name__)


class ErrorCode(IntEnum):
    # negative so they never clash with a caller's menu id
    eUnknownError = -1
    eAlreadyActive = -2
    ePropertyMissing = -3
    eInvalidAngles = -4


class PieMenuController(QtCore.QObject):
    """Owns the tree and selection chain of the one open menu.

    ``input_manipulator`` needs grab_input(edit_mode) -> bool, release_input()
    and warp_pointer(x, y). ``display`` needs pointer_position() -> (x, y) and
    monitor_bounds() -> (left, top, width, height).
    """
    hovered = QtCore.Signal(object, str)
    selected = QtCore.Signal(object, str)
    cancelled = QtCore.Signal(object)

    def __init__(self, input_manipulator, display, settings,
                 on_hover=None, on_select=None, on_cancel=None, parent=None):
        super().__init__(parent)
        self._input = input_manipulator
        self._display = display
        self._settings = settings

        self._menu_id = None
        self._root = None
        self._edit_mode = False
        self._chain = SelectionChain()
        self._grabbed = False

        # the ring the pointer currently chooses from
        self._ring_angles = []
        self._ring_back_link = None
        self._ring_anchor = None

        if on_hover is not None:
            self.hovered.connect(on_hover)
        if on_select is not None:
            self.selected.connect(on_select)
        if on_cancel is not None:
            self.cancelled.connect(on_cancel)

    # ---------- STATE ----------
    @property
    def is_active(self) -> bool:
        return self._menu_id is not None

    @property
    def menu_id(self):
        return self._menu_id

    @property
    def root(self):
        return self._root

    @property
    def chain(self):
        return self._chain.nodes()

    @property
    def edit_mode(self) -> bool:
        return self._edit_mode

    @property
    def ring_angles(self):
        return list(self._ring_angles)

    @property
    def ring_back_link(self):
        return self._ring_back_link

    @property
    def ring_anchor(self):
        return self._ring_anchor

    @property
    def settings(self):
        return self._settings

    # ---------- SHOW / HIDE ----------
    def show(self, menu_id, structure, edit_mode=False):
        """Open a menu. Returns ``menu_id`` or an ErrorCode, never raises."""
        if self.is_active:
            logger.warning("[PieMenu] Menu %s is still open, rejecting %s.", self._menu_id, menu_id)
            return ErrorCode.eAlreadyActive

        try:
            if not isinstance(structure, dict) or not children_of(structure):
                logger.warning("[PieMenu] Menu %s has no items.", menu_id)
                return ErrorCode.ePropertyMissing
            root = build_tree(structure)
        except StructureError as e:
            logger.warning("[PieMenu] Malformed menu %s: %s", menu_id, e)
            return ErrorCode.ePropertyMissing

        try:
            root.angle = 0.0
            angleAllocator.allocate(root.children, threshold=self._collision_threshold())
        except LayoutError:
            return ErrorCode.eInvalidAngles

        try:
            grabbed = self._input.grab_input(edit_mode)
        except Exception:
            logger.exception("[PieMenu] Grabbing the input failed.")
            grabbed = False
        if not grabbed:
            self._rollback()
            return ErrorCode.eUnknownError
        self._grabbed = True

        try:
            self._open(menu_id, root, edit_mode)
        except Exception:
            logger.exception("[PieMenu] Opening menu %s failed.", menu_id)
            self._rollback()
            return ErrorCode.eUnknownError

        logger.debug("[PieMenu] Opened menu %s with %d items.", menu_id, len(root.children))
        return menu_id

    def _open(self, menu_id, root, edit_mode):
        self._menu_id = menu_id
        self._root = root
        self._edit_mode = bool(edit_mode)
        self._chain = SelectionChain(root)

        refresh_chain_states(self._chain, NodeState.CENTER_HOVERED, -1)

        if self._edit_mode:
            left, top, width, height = self._display.monitor_bounds()
            x, y = int(left + width / 2), int(top + height / 2)
        else:
            x, y = self._clamped_pointer()
            self._input.warp_pointer(x, y)

        root.anchor = (x, y)
        self._set_ring(root, None, (x, y))

    def _rollback(self):
        if self._grabbed:
            try:
                self._input.release_input()
            except Exception:
                logger.exception("[PieMenu] Releasing the input failed.")
        self._grabbed = False
        self._menu_id = None
        self._root = None
        self._chain.clear()
        self._ring_angles = []
        self._ring_back_link = None
        self._ring_anchor = None

    def hide(self):
        if not self.is_active:
            return
        logger.debug("[PieMenu] Hiding menu %s.", self._menu_id)
        self._rollback()

    def cancel(self):
        """Close the menu without a selection. Does nothing when idle."""
        if not self.is_active:
            return
        menu_id = self._menu_id
        self.hide()
        self.cancelled.emit(menu_id)

    # ---------- HOVER ----------
    def hover_child(self, index) -> bool:
        """Hover the child at ``index`` of the center; -1 hovers the center itself."""
        if not self._check_active("hover"):
            return False
        if index == -1:
            return self.hover_center()

        center = self._chain.center
        if not 0 <= index < len(center.children):
            logger.warning("[PieMenu] '%s' has no child %s.", center.id, index)
            return False

        refresh_chain_states(self._chain, NodeState.CENTER, index)
        self.hovered.emit(self._menu_id, center.children[index].id)
        return True

    def hover_center(self) -> bool:
        if not self._check_active("hover"):
            return False
        refresh_chain_states(self._chain, NodeState.CENTER_HOVERED, -1)
        self.hovered.emit(self._menu_id, self._chain.center.id)
        return True

    def hover_parent(self) -> bool:
        if not self._check_active("hover"):
            return False
        if len(self._chain) < 2:
            logger.warning("[PieMenu] The root item has no parent to hover.")
            return False
        refresh_chain_states(self._chain, NodeState.CENTER_HOVERED, -1, NodeState.PARENT_HOVERED)
        self.hovered.emit(self._menu_id, self._chain.parent.id)
        return True

    # ---------- SELECT ----------
    def select_child(self, index) -> bool:
        if not self._check_active("select"):
            return False
        parent = self._chain.center
        if not 0 <= index < len(parent.children):
            logger.warning("[PieMenu] '%s' has no child %s.", parent.id, index)
            return False

        child = parent.children[index]
        parent.active_child_index = index
        self._chain.push(child)
        refresh_chain_states(self._chain, NodeState.CENTER_HOVERED, -1)

        x, y = self._clamped_pointer()
        child.anchor = (x, y)

        if child.is_leaf:
            # terminal selection, the menu closes
            self._warp(x, y)
            menu_id = self._menu_id
            logger.debug("[PieMenu] Selected '%s' in menu %s.", child.id, menu_id)
            self.hide()
            self.selected.emit(menu_id, child.id)
            return True

        self._set_ring(child, back_link_of(child.angle), (x, y))
        self._warp(x, y)
        return True

    def select_parent(self) -> bool:
        if not self._check_active("select"):
            return False
        if len(self._chain) < 2:
            logger.warning("[PieMenu] The root item has no parent to select.")
            return False

        self._chain.pop()
        center = self._chain.center
        refresh_chain_states(self._chain, NodeState.CENTER_HOVERED, -1)

        back_link = back_link_of(center.angle) if len(self._chain) > 1 else None

        x, y = self._clamped_pointer()
        center.anchor = (x, y)
        self._set_ring(center, back_link, (x, y))
        self._warp(x, y)
        return True

    # ---------- HELPERS ----------
    def _warp(self, x, y):
        # non-fatal, the ring stays anchored at (x, y)
        try:
            self._input.warp_pointer(x, y)
        except Exception:
            logger.exception("[PieMenu] Moving the pointer to (%s, %s) failed.", x, y)

    def _set_ring(self, center, back_link, anchor):
        """Lay out the children of the new center again and make them the active ring."""
        angles = angleAllocator.compute_item_angles(
            [c.fixed_angle for c in center.children], back_link, self._collision_threshold())
        for child, angle in zip(center.children, angles):
            child.angle = angle
        self._ring_angles = angles
        self._ring_back_link = back_link
        self._ring_anchor = anchor

    def _clamped_pointer(self):
        x, y = self._display.pointer_position()
        return clamp_to_monitor(x, y, self._display.monitor_bounds(), self._settings)

    def _collision_threshold(self):
        try:
            return self._settings.get("angle_collision_threshold")
        except KeyError:
            return angleAllocator.DEFAULT_COLLISION_THRESHOLD

    def _check_active(self, what) -> bool:
        if self.is_active:
            return True
        logger.warning("[PieMenu] Ignoring %s, no menu is open.", what)
        return False


__all__ = ["ErrorCode", "PieMenuController", "PieMenuError"]
