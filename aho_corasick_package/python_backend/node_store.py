'''Node table for the Aho-Corasick trie / automaton.

Nodes live in a flat arena (`NodeStore`) and refer to each other by integer
handle (their position in the arena) rather than by object reference. Failure
links always point "backward" to shallower nodes, so handles keep the
parent/child/fail relations free of reference cycles.

Classes:
    ACNode: One trie node (one distinct prefix across all patterns).
    NodeStore: The arena of nodes. Handle `ROOT` (0) is always the root.
'''

ROOT = 0


class ACNode:
    """A single node of the trie.

    Attributes:
        transitions (dict[str, int]): Maps a character to the handle of the child
                                      reached by it. Keys are unique.
        fail (int): Handle of the node spelling the longest proper suffix of this
                    node's string that is also a node's string. The root fails to itself.
        output (list[int]): 0-based indices of every pattern that is a suffix of
                            this node's string (own patterns first, then merged ones).
        depth (int): Length of the string spelled from the root to this node.
    """
    __slots__ = ('transitions', 'fail', 'output', 'depth') # Optimizes memory usage

    def __init__(self, depth: int = 0):
        self.transitions: dict[str, int] = {}
        self.fail: int = ROOT
        self.output: list[int] = []
        self.depth: int = depth

    def __repr__(self) -> str:
        return (f"ACNode(depth={self.depth}, fail={self.fail}, "
                f"transitions={list(self.transitions.keys())}, output={self.output})")


class NodeStore:
    """Arena of `ACNode` objects addressed by integer handles.

    The store only grows; nodes are never removed. Once the owning automaton
    finishes building, nothing writes to it again.
    """
    __slots__ = ('nodes',)

    def __init__(self):
        self.nodes: list[ACNode] = [ACNode(depth=0)] # Handle 0 is the root

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, handle: int) -> ACNode:
        return self.nodes[handle]

    def __iter__(self):
        return iter(self.nodes)

    def add_child(self, parent: int, ch: str) -> int:
        """Creates a child of `parent` on `ch` and returns its handle.

        The caller is expected to have checked that no transition on `ch` exists yet.
        """
        child = len(self.nodes)
        self.nodes.append(ACNode(depth=self.nodes[parent].depth + 1))
        self.nodes[parent].transitions[ch] = child
        return child

    def child(self, handle: int, ch: str) -> int | None:
        """Returns the handle reached from `handle` on `ch`, or None."""
        return self.nodes[handle].transitions.get(ch)
