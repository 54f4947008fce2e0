from .menuNode import MenuNode, NodeState, PieMenuError, StructureError, build_tree
from .angleAllocator import LayoutError, allocate, compute_item_angles
from .selectionChain import SelectionChain
from .nodeState import set_state
from .pieSettings import PieSettings, SettingsError
from .pieMenu_main import ErrorCode, PieMenuController


def show_menu(structure=None, edit_mode=False, **callbacks):
    from . import pieWidget
    return pieWidget.launch_pie_menu(structure, edit_mode, **callbacks)


def close_menu():
    from . import pieWidget
    pieWidget.close_pie_menu()
