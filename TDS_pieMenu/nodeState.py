from .menuNode import NodeState


def set_state(node, state, active_child_index=None):
    """Set ``state`` on ``node`` and push the matching states down its subtree.

    Children of a PARENT / PARENT_HOVERED node are only touched if they are not
    the active child, as the active child is the current center and manages
    its own subtree.
    """
    node.state = state
    if active_child_index is not None:
        node.active_child_index = active_child_index

    for index, child in enumerate(node.children):
        if state == NodeState.CENTER_HOVERED:
            set_state(child, NodeState.CHILD, -1)
        elif state == NodeState.CENTER:
            if index == node.active_child_index:
                set_state(child, NodeState.CHILD_HOVERED, -1)
            else:
                set_state(child, NodeState.CHILD, -1)
        elif state == NodeState.CHILD:
            set_state(child, NodeState.GRANDCHILD, -1)
        elif state == NodeState.CHILD_HOVERED:
            set_state(child, NodeState.GRANDCHILD_HOVERED, -1)
        elif state == NodeState.PARENT:
            if index != node.active_child_index:
                set_state(child, NodeState.GRANDCHILD, -1)
        elif state == NodeState.PARENT_HOVERED:
            if index != node.active_child_index:
                set_state(child, NodeState.GRANDCHILD_HOVERED, -1)
        else:
            set_state(child, NodeState.INVISIBLE, -1)


def refresh_chain_states(chain, center_state, center_index=None, parent_state=NodeState.PARENT):
    # back to front: every node's own call settles its subtree last
    nodes = chain.nodes()
    for node in reversed(nodes[2:]):
        set_state(node, NodeState.INVISIBLE)
    if len(nodes) > 1:
        set_state(nodes[1], parent_state)
    if nodes:
        set_state(nodes[0], center_state, center_index)
