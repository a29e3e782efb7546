class ExpansionSet:
    """
    Ids of the tree nodes currently shown in detail.

    Keys are taken as given: callers that track several levels in one set must
    pass ids that are already unique across those levels.
    """

    def __init__(self):
        self._expanded: set[str] = set()

    def toggle(self, node_id: str) -> bool:
        """Flip membership of `node_id` and return whether it is now expanded"""
        if node_id in self._expanded:
            self._expanded.discard(node_id)
            return False
        self._expanded.add(node_id)
        return True

    def is_expanded(self, node_id: str) -> bool:
        return node_id in self._expanded

    def clear(self) -> None:
        self._expanded.clear()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._expanded

    def __len__(self) -> int:
        return len(self._expanded)

    def __repr__(self) -> str:
        return f'ExpansionSet({sorted(self._expanded)!r})'
