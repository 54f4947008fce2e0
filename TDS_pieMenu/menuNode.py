from enum import IntEnum
from typing import Optional


class PieMenuError(Exception):
    """Base class for everything the pie menu raises internally."""


class StructureError(PieMenuError):
    pass


class NodeState(IntEnum):
    # default, also used for everything below the grandchild tier
    INVISIBLE = 0
    # active item while one of its children is hovered
    CENTER = 1
    # active item with the pointer in the middle of the menu
    CENTER_HOVERED = 2
    CHILD = 3
    CHILD_HOVERED = 4
    GRANDCHILD = 5
    GRANDCHILD_HOVERED = 6
    # back-link to the previous center, drawn like a child
    PARENT = 7
    PARENT_HOVERED = 8


_VISUAL = {
    NodeState.PARENT: NodeState.CHILD,
    NodeState.PARENT_HOVERED: NodeState.CHILD_HOVERED,
}


def visual_state(state: NodeState) -> NodeState:
    return _VISUAL.get(state, state)


# keys of a structure dict that are consumed by the tree itself
_KNOWN_KEYS = ("name", "icon", "id", "angle", "children", "items")


class MenuNode(object):
    def __init__(self, name="", icon="", node_id=None, fixed_angle=None, data=None):
        self.id = node_id
        self.name = name
        self.icon = icon
        self.fixed_angle = fixed_angle
        self.angle = fixed_angle
        self.children = []
        self.state = NodeState.INVISIBLE
        self.active_child_index = -1
        self.anchor = None
        self.data = data or {}

    def __repr__(self):
        return f"MenuNode(id={self.id!r}, name={self.name!r}, angle={self.angle!r})"

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def active_child(self) -> Optional["MenuNode"]:
        if 0 <= self.active_child_index < len(self.children):
            return self.children[self.active_child_index]
        return None


def children_of(structure):
    """The item list of a structure dict, under "children" or "items"."""
    kids = structure.get("children")
    if kids is None:
        kids = structure.get("items")
    if kids is None:
        return []
    if not isinstance(kids, (list, tuple)):
        raise StructureError(f"children of '{structure.get('name', '')}' must be a list")
    return kids


def _make_node(structure, node_id):
    if not isinstance(structure, dict):
        raise StructureError(f"menu item must be a mapping, got {type(structure).__name__}")

    angle = structure.get("angle")
    if angle is not None:
        try:
            angle = float(angle)
        except (TypeError, ValueError):
            raise StructureError(f"angle of '{structure.get('name', '')}' is not a number: {angle!r}")

    extra = {k: v for k, v in structure.items() if k not in _KNOWN_KEYS}
    return MenuNode(
        name=str(structure.get("name", "")),
        icon=str(structure.get("icon", "")),
        node_id=node_id,
        fixed_angle=angle,
        data=extra,
    )


def _caller_id(structure):
    raw = structure.get("id")
    if raw is None or raw == "":
        return None
    return str(raw)


def build_tree(structure) -> MenuNode:
    """Turn a caller structure dict into a MenuNode tree.

    Items without an id get ``parent_id + '/' + index`` (``'/' + index`` on the
    first level). Ids the caller supplied are kept as they are. Every id has to
    be unique in the tree, a clash raises StructureError.
    """
    if not isinstance(structure, dict):
        raise StructureError("menu structure must be a mapping")

    root = _make_node(structure, _caller_id(structure) or "/")
    _build_children(root, structure, parent_id=None, used={root.id})
    return root


def _build_children(node, structure, parent_id, used):
    for index, child_struct in enumerate(children_of(structure)):
        child = _make_node(child_struct, None)
        child.id = _caller_id(child_struct)
        if child.id is None:
            child.id = f"{parent_id}/{index}" if parent_id else f"/{index}"
        if child.id in used:
            raise StructureError(f"duplicate item id '{child.id}'")
        used.add(child.id)
        node.children.append(child)
        _build_children(child, child_struct, child.id, used)


def iter_nodes(root):
    """Depth-first, pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_node(root, node_id) -> Optional[MenuNode]:
    for node in iter_nodes(root):
        if node.id == node_id:
            return node
    return None
