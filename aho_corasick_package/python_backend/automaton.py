'''Pure Python Aho-Corasick automaton for multi-pattern string matching.

This module defines `ACAutomaton`, built in two phases from a fixed, ordered
list of patterns:

1. **Trie insertion**: every pattern is walked from the root, following or
   creating one transition per character. The pattern's index is appended to
   the output of the node where it ends. Patterns sharing a prefix share nodes,
   and duplicate patterns put their distinct indices on the same node.
2. **Failure links (BFS)**: nodes are visited in increasing depth. Each node's
   failure link points to the node spelling the longest proper suffix of its
   string that is also in the trie, and the output of that node is merged into
   its own. After this pass every node knows *all* patterns ending at it, so a
   search never has to walk failure links to collect output.

The single-character transition (`ACAutomaton.step`) is shared by the batch and
streaming matchers in `matcher.py`. Characters are Unicode scalar values, i.e.
single elements of a Python `str`.

Once `__init__` returns the automaton is never modified again, so one instance
can be searched from several threads at once without locking.
'''
import logging
import sys
from collections import deque
from typing import Iterable, Iterator, List, Optional

from .node_store import ROOT, NodeStore
from .matcher import ACMatch, ACMatchIterator, search as _batch_search

logger = logging.getLogger(__name__)

EMPTY_PATTERN_POLICIES = ("error", "ignore")


class ACAutomaton:
    """An immutable Aho-Corasick automaton over an ordered list of patterns.

    Both `ACMatch.pattern_index` and the `start`/`stop` positions reported by
    searches use `index_base`. With the default of 1, the first pattern has
    index 1 and the first character of the text is position 1.

    Attributes:
        index_base (int): 0 or 1, the indexing convention for reported matches.
        empty_patterns (str): Policy applied to zero-length patterns at build time.
    """
    def __init__(self, patterns: Iterable[str], index_base: int = 1, empty_patterns: str = "error"):
        """Builds the automaton.

        Args:
            patterns: The patterns to search for. Their order defines pattern indices.
            index_base (int, optional): 0 or 1. Defaults to 1.
            empty_patterns (str, optional): What to do with zero-length patterns.
                "error" raises ValueError. "ignore" keeps the pattern's index reserved
                but never reports it. Defaults to "error".

        Raises:
            TypeError: If `patterns` is a single string or contains a non-string.
            ValueError: If an option is invalid, or an empty pattern is found
                        under the "error" policy.
        """
        if isinstance(patterns, str):
            raise TypeError("patterns must be a sequence of strings, not a single str.")
        if index_base not in (0, 1):
            raise ValueError(f"index_base must be 0 or 1, got {index_base!r}.")
        if empty_patterns not in EMPTY_PATTERN_POLICIES:
            raise ValueError(f"Unknown empty_patterns policy: {empty_patterns!r}. "
                             f"Choose one of {EMPTY_PATTERN_POLICIES}.")

        self.index_base = index_base
        self.empty_patterns = empty_patterns
        self._patterns: tuple[str, ...] = tuple(patterns)
        self._store = NodeStore()

        for i, pattern in enumerate(self._patterns):
            if not isinstance(pattern, str):
                raise TypeError(f"All patterns must be str, got {type(pattern)} at index {i}")
            if not pattern:
                if empty_patterns == "error":
                    raise ValueError(f"Pattern at index {i} is empty; zero-length patterns "
                                     f"are rejected (pass empty_patterns='ignore' to skip them).")
                continue
            self._insert(pattern, i)

        self._build_failure_links()
        logger.debug("Built Aho-Corasick automaton: %d patterns, %d nodes",
                     len(self._patterns), len(self._store))

    # --- construction ---

    def _insert(self, pattern: str, pattern_idx: int) -> None:
        """Phase 1: adds one pattern to the trie and records it at its terminal node."""
        store = self._store
        current = ROOT
        for ch in pattern:
            nxt = store.child(current, ch)
            if nxt is None:
                nxt = store.add_child(current, ch)
            current = nxt
        store[current].output.append(pattern_idx)

    def _build_failure_links(self) -> None:
        """Phase 2: computes failure links and merges outputs breadth-first."""
        nodes = self._store.nodes
        queue: deque[int] = deque()

        # Children of the root fail to the root.
        for child in nodes[ROOT].transitions.values():
            nodes[child].fail = ROOT
            queue.append(child)

        while queue:
            current = queue.popleft()
            for ch, child in nodes[current].transitions.items():
                queue.append(child)

                f = nodes[current].fail
                while True:
                    target = nodes[f].transitions.get(ch)
                    if target is not None:
                        break
                    if f == ROOT:
                        target = ROOT
                        break
                    f = nodes[f].fail

                nodes[child].fail = target
                if target != child:
                    nodes[child].output.extend(nodes[target].output)

    # --- traversal ---

    def step(self, state: int, ch: str) -> int:
        """Returns the state reached from `state` after reading `ch`.

        Follows failure links until a node with a transition on `ch` is found
        (or the root is reached), then takes that transition if it exists.
        Amortized O(1) per character over a whole scan.
        """
        nodes = self._store.nodes
        while state != ROOT and ch not in nodes[state].transitions:
            state = nodes[state].fail
        return nodes[state].transitions.get(ch, ROOT)

    def output(self, state: int) -> tuple[int, ...]:
        """0-based indices of all patterns ending at `state`."""
        return tuple(self._store[state].output)

    def fail(self, state: int) -> int:
        return self._store[state].fail

    def depth(self, state: int) -> int:
        return self._store[state].depth

    def transitions(self, state: int) -> dict[str, int]:
        return dict(self._store[state].transitions)

    # --- read-only views ---

    @property
    def root(self) -> int:
        return ROOT

    @property
    def patterns(self) -> tuple[str, ...]:
        return self._patterns

    @property
    def num_nodes(self) -> int:
        return len(self._store)

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return (f"ACAutomaton(patterns={len(self._patterns)}, nodes={len(self._store)}, "
                f"index_base={self.index_base})")

    # --- searching ---

    def search(self, text: str) -> List[ACMatch]:
        """All matches in `text`, sorted by (start, pattern_index). See `matcher.search`."""
        return _batch_search(self, text)

    def finditer(self, text: str) -> Iterator[ACMatch]:
        """Lazily yields matches in discovery order. See `matcher.ACMatchIterator`."""
        return ACMatchIterator(self, text)

    # --- diagnostics ---

    def _node_labels(self) -> list[str]:
        """Strings spelled by each node, indexed by handle."""
        labels = [""] * len(self._store)
        queue = deque([ROOT])
        while queue:
            handle = queue.popleft()
            for ch, child in self._store[handle].transitions.items():
                labels[child] = labels[handle] + ch
                queue.append(child)
        return labels

    def display(self, node: Optional[int] = None, prefix: str = "", _labels: Optional[list] = None) -> None:
        """Prints a text representation of the trie with fail links and outputs.

        Args:
            node (int, optional): Handle to start from. Defaults to the root.
            prefix (str, optional): Prefix string for child branches.
        """
        if _labels is None:
            _labels = self._node_labels()
        if node is None:
            node = ROOT
            print(f"Aho-Corasick Trie (Root, {len(self._store)} nodes):")

        children_items = sorted(self._store[node].transitions.items())
        for i, (ch, child) in enumerate(children_items):
            is_last_child = (i == len(children_items) - 1)
            connector = "└── " if is_last_child else "├── "
            child_node = self._store[child]
            outputs = [self._patterns[p] for p in child_node.output]
            output_info = f" out={outputs}" if outputs else ""
            print(f"{prefix}{connector}'{ch}' #{child} (fail->'{_labels[child_node.fail]}'){output_info}")

            new_prefix = prefix + ("    " if is_last_child else "│   ")
            self.display(child, new_prefix, _labels)

    def display_status(self) -> None:
        """Prints a summary of the automaton."""
        nodes = self._store.nodes
        print("---- Aho-Corasick Automaton Status ----")
        print(f"Patterns: {len(self._patterns)}")
        print(f"Nodes (including root): {len(nodes)}")
        print(f"Max depth: {max(n.depth for n in nodes)}")
        print(f"Nodes with output: {sum(1 for n in nodes if n.output)}")
        print(f"Index base: {self.index_base}")
        print(f"Empty pattern policy: {self.empty_patterns}")
        print("---------------------------------------")

    def display_graphviz(self, highlight_text: Optional[str] = None, show_fail_links: bool = True,
                         view_now: bool = False) -> object | None:
        """Generates a Graphviz Digraph of the trie, its fail links and outputs.

        Requires the `graphviz` Python library to be installed.

        Args:
            highlight_text (str, optional): If given, the states visited while
                                            scanning this text are highlighted.
            show_fail_links (bool): Draw failure links as dashed grey edges. Defaults to True.
            view_now (bool): If True, attempts to render and view the graph immediately.

        Returns:
            graphviz.Digraph object if successful, None otherwise (e.g., if graphviz
            is not installed).
        """
        try:
            import graphviz # type: ignore
        except ImportError:
            print("Graphviz library not found. Please install it to use display_graphviz: pip install graphviz", file=sys.stderr)
            return None

        highlighted = set()
        if highlight_text:
            state = ROOT
            highlighted.add(state)
            for ch in highlight_text:
                state = self.step(state, ch)
                highlighted.add(state)

        labels = self._node_labels()
        dot = graphviz.Digraph(comment='Aho-Corasick Automaton')
        dot.attr(rankdir='TB')

        for handle, node in enumerate(self._store):
            is_hit = handle in highlighted
            caption = "R" if handle == ROOT else labels[handle]
            if node.output:
                caption += "\n{" + ", ".join(str(p + self.index_base) for p in node.output) + "}"
            dot.node(str(handle), caption,
                     shape='doublecircle' if node.output else 'circle',
                     color='red' if is_hit else 'black',
                     style='filled' if is_hit else '',
                     fillcolor='lightcoral' if is_hit else 'white')

        for handle, node in enumerate(self._store):
            for ch, child in sorted(node.transitions.items()):
                dot.edge(str(handle), str(child), label=ch)
            if show_fail_links and handle != ROOT and node.fail != ROOT:
                dot.edge(str(handle), str(node.fail), style='dashed', arrowhead='empty', color='grey')

        if view_now:
            try:
                dot.view()
            except Exception as e_gv_view:
                print(f"Could not automatically view graph: {e_gv_view}. You might need to install Graphviz executables or a viewer.", file=sys.stderr)
        return dot


def construct(patterns: Iterable[str], **options) -> ACAutomaton:
    """Builds an `ACAutomaton` from `patterns`. Keyword options go to `ACAutomaton`."""
    return ACAutomaton(patterns, **options)


# Example usage:
if __name__ == "__main__":
    print("--- ACAutomaton (Python) Example ---")
    automaton = ACAutomaton(["he", "she", "his", "hers"])
    automaton.display_status()
    automaton.display()

    text = "ushers"
    print(f"\nSearching '{text}':")
    for match in automaton.search(text):
        print(f"  {match}")

    print(f"\nStreaming '{text}':")
    for match in automaton.finditer(text):
        print(f"  {match}")
