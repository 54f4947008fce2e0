import math
from collections import OrderedDict, namedtuple

from .menuNode import NodeState, visual_state

NodeRenderParams = namedtuple(
    "NodeRenderParams",
    ["state", "visual_state", "size", "offset", "icon_size", "icon_opacity",
     "translation", "draw_children_above", "caption"],
)

_CENTER_TIER = (NodeState.CENTER, NodeState.CENTER_HOVERED)
_PARENT_TIER = (NodeState.PARENT, NodeState.PARENT_HOVERED)


def state_table(settings):
    """Per visual state sizing, all lengths already multiplied by global_scale."""
    g = settings.get
    scale = g("global_scale")

    def entry(size, offset=0.0, icon_scale=0.0, icon_opacity=0.0, above=False):
        return {
            "size": size * scale,
            "offset": offset * scale,
            "icon_size": size * scale * icon_scale,
            "icon_opacity": icon_opacity * 255,
            "draw_children_above": above,
        }

    return {
        NodeState.INVISIBLE: entry(0.0),
        NodeState.CENTER: entry(
            g("center_size"), 0.0, g("center_icon_scale"), g("center_icon_opacity"),
            g("child_draw_above")),
        NodeState.CENTER_HOVERED: entry(
            g("center_size_hover"), 0.0, g("center_icon_scale_hover"),
            g("center_icon_opacity_hover"), g("child_draw_above")),
        NodeState.CHILD: entry(
            g("child_size"), g("child_offset"), g("child_icon_scale"),
            g("child_icon_opacity"), g("grandchild_draw_above")),
        NodeState.CHILD_HOVERED: entry(
            g("child_size_hover"), g("child_offset_hover"), g("child_icon_scale_hover"),
            g("child_icon_opacity_hover"), g("grandchild_draw_above")),
        # grandchildren never show an icon
        NodeState.GRANDCHILD: entry(g("grandchild_size"), g("grandchild_offset")),
        NodeState.GRANDCHILD_HOVERED: entry(
            g("grandchild_size_hover"), g("grandchild_offset_hover")),
    }


def _translation(node, offset):
    a = math.radians(node.angle or 0.0)
    return (math.floor(math.sin(a) * offset), -math.floor(math.cos(a) * offset))


def render_parameters(settings, root):
    """What has to be drawn for the current states of the tree below ``root``.

    Returns an OrderedDict node id -> NodeRenderParams in drawing order (parents
    before their children). Invisible nodes are left out, visible nodes below
    them (the selection chain) are still reported.
    Translations are relative to the parent node; center and parent nodes are
    placed by their anchor instead and get None.
    """
    table = state_table(settings)
    out = OrderedDict()

    def visit(node):
        if node.state == NodeState.INVISIBLE:
            # the root stays INVISIBLE once it became an ancestor of the parent
            for child in node.children:
                visit(child)
            return

        vis = visual_state(node.state)
        params = table[vis]

        translation = None
        if node.state not in _CENTER_TIER and node.state not in _PARENT_TIER:
            translation = _translation(node, params["offset"])

        caption = None
        if node.state == NodeState.CENTER and node.active_child is not None:
            caption = node.active_child.name

        out[node.id] = NodeRenderParams(
            state=node.state,
            visual_state=vis,
            size=params["size"],
            offset=params["offset"],
            icon_size=params["icon_size"],
            icon_opacity=params["icon_opacity"],
            translation=translation,
            draw_children_above=params["draw_children_above"],
            caption=caption,
        )
        for child in node.children:
            visit(child)

    visit(root)
    return out
