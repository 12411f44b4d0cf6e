'''Batch and streaming matchers driven by `ACAutomaton.step`.

Two ways to consume an automaton:

- `search(automaton, text)` scans the whole text, collects every match and
  returns them sorted by `(start, pattern_index)`. The ordering is part of the
  contract, so repeated calls give identical lists.
- `ACMatchIterator` (via `eachmatch` / `matches_of`) yields one match per pull.
  Its state is an explicit, immutable `ACMatchState`; `advance(state)` produces
  the next match and the following state, or None when the text is exhausted.
  Matches come out in discovery order (all matches ending at a position, in
  the node's output order, before any match ending later). They are the same
  set `search` returns but are not start-sorted.

Neither matcher writes to the automaton, so any number of searches may run on
one automaton at the same time.
'''
from typing import Iterator, List, NamedTuple, Optional, Tuple


class ACMatch(NamedTuple):
    """One occurrence of a pattern in a searched text.

    Attributes:
        pattern (str): The matched pattern.
        pattern_index (int): Position of the pattern in the automaton's pattern list.
        start (int): Position of the first matched character (inclusive).
        stop (int): Position of the last matched character (inclusive).

    `pattern_index`, `start` and `stop` use the automaton's `index_base`.
    `stop - start + 1 == len(pattern)` always holds.
    """
    pattern: str
    pattern_index: int
    start: int
    stop: int

    def __repr__(self) -> str:
        return f"ACMatch({self.pattern!r}, {self.start}:{self.stop})"


class ACMatchState(NamedTuple):
    """Resumable state of a streaming search.

    Attributes:
        text_pos (int): 0-based index of the next character to read.
        current_node (int): Automaton state after reading text[:text_pos].
        pending_outputs (tuple[int, ...]): Output captured at the last node with output.
        pending_idx (int): Index of the next unread entry in `pending_outputs`.
    """
    text_pos: int
    current_node: int
    pending_outputs: Tuple[int, ...]
    pending_idx: int


def _check_text(text) -> None:
    if not isinstance(text, str):
        raise TypeError(f"Text to search must be str, got {type(text)}")


def search(automaton, text: str) -> List[ACMatch]:
    """Finds all occurrences of all patterns in `text`.

    Args:
        automaton (ACAutomaton): The automaton to search with.
        text (str): The text to search in.

    Returns:
        list[ACMatch]: All matches, sorted by (start, pattern_index) ascending.

    Raises:
        TypeError: If `text` is not a string.
    """
    _check_text(text)
    nodes = automaton._store.nodes
    patterns = automaton.patterns
    base = automaton.index_base
    step = automaton.step

    matches: List[ACMatch] = []
    state = automaton.root
    for pos, ch in enumerate(text):
        state = step(state, ch)
        outputs = nodes[state].output
        if outputs:
            stop = pos + base
            for pattern_idx in outputs:
                pattern = patterns[pattern_idx]
                matches.append(ACMatch(pattern, pattern_idx + base, stop - len(pattern) + 1, stop))

    # Sort by start position, then by pattern index for consistent ordering
    matches.sort(key=lambda m: (m.start, m.pattern_index))
    return matches


class ACMatchIterator:
    """Lazy, pull-based producer of matches with explicit resumable state.

    The iterator is finite and not restartable: once exhausted it stays
    exhausted. To replay a search, create a new iterator. A caller that wants
    to stop early simply stops pulling.

    Attributes:
        automaton (ACAutomaton): The automaton being searched with.
        text (str): The text being searched.
        state (ACMatchState): State to resume from on the next pull.
    """
    __slots__ = ('automaton', 'text', 'state')

    def __init__(self, automaton, text: str):
        _check_text(text)
        self.automaton = automaton
        self.text = text
        self.state = self.initial_state()

    def initial_state(self) -> ACMatchState:
        return ACMatchState(0, self.automaton.root, (), 0)

    def _make_match(self, pattern_idx: int, text_pos: int) -> ACMatch:
        # Pending outputs belong to the character just before text_pos.
        base = self.automaton.index_base
        pattern = self.automaton.patterns[pattern_idx]
        stop = text_pos - 1 + base
        return ACMatch(pattern, pattern_idx + base, stop - len(pattern) + 1, stop)

    def advance(self, state: ACMatchState) -> Optional[Tuple[ACMatch, ACMatchState]]:
        """Produces the match following `state`.

        Does not modify `state` or the iterator.

        Returns:
            A `(match, next_state)` tuple, or None if no match remains.
        """
        text_pos, current, pending, pending_idx = state

        # Drain output captured at the previous node first.
        if pending_idx < len(pending):
            match = self._make_match(pending[pending_idx], text_pos)
            return match, ACMatchState(text_pos, current, pending, pending_idx + 1)

        nodes = self.automaton._store.nodes
        step = self.automaton.step
        text = self.text
        while text_pos < len(text):
            current = step(current, text[text_pos])
            text_pos += 1
            outputs = nodes[current].output
            if outputs:
                captured = tuple(outputs)
                match = self._make_match(captured[0], text_pos)
                return match, ACMatchState(text_pos, current, captured, 1)

        return None

    def __iter__(self) -> "ACMatchIterator":
        return self

    def __next__(self) -> ACMatch:
        result = self.advance(self.state)
        if result is None:
            self.state = ACMatchState(len(self.text), self.state.current_node, (), 0)
            raise StopIteration
        match, self.state = result
        return match


def eachmatch(automaton, text: str) -> Iterator[ACMatch]:
    """Returns a lazy iterator over the matches of `automaton` in `text`.

    More memory-efficient than `search` for large texts, since matches are
    produced one at a time. Order is discovery order, not start-sorted.
    """
    return ACMatchIterator(automaton, text)


matches_of = eachmatch
