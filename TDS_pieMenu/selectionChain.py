class SelectionChain(object):
    """Path from the current center (index 0) back to the root (last)."""

    def __init__(self, root=None):
        self._nodes = [root] if root is not None else []

    def __len__(self):
        return len(self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    def __getitem__(self, index):
        return self._nodes[index]

    def __bool__(self):
        return bool(self._nodes)

    @property
    def center(self):
        return self._nodes[0] if self._nodes else None

    @property
    def parent(self):
        return self._nodes[1] if len(self._nodes) > 1 else None

    @property
    def root(self):
        return self._nodes[-1] if self._nodes else None

    def push(self, node):
        self._nodes.insert(0, node)

    def pop(self):
        # the root never leaves the chain while the menu is open
        if len(self._nodes) < 2:
            raise IndexError("cannot pop the root of the selection chain")
        return self._nodes.pop(0)

    def clear(self):
        self._nodes = []

    def nodes(self):
        return list(self._nodes)
