'''Tests for the streaming matcher (`ACMatchIterator`, `eachmatch`, `matches_of`).

The streaming matcher must find the same set of matches as `search`, in
discovery order, and expose its resumable state explicitly.
'''
import os
import sys

import numpy as np
import pytest

# --- Path Setup ---
# Add the project root to sys.path to allow importing from aho_corasick_package
_project_root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if _project_root_dir not in sys.path:
    sys.path.insert(0, _project_root_dir)

from aho_corasick_package import (
    ACAutomaton, ACMatch, ACMatchIterator, ACMatchState, eachmatch, matches_of, search
)
from aho_corasick_package.python_backend.naive import generate_random_string, generate_random_patterns


def by_start(matches):
    return sorted(matches, key=lambda m: (m.start, m.pattern_index))


def test_discovery_order():
    automaton = ACAutomaton(["he", "she", "his", "hers"])
    assert list(eachmatch(automaton, "ushers")) == [
        ACMatch("she", 2, 2, 4),
        ACMatch("he", 1, 3, 4),
        ACMatch("hers", 4, 3, 6),
    ]


def test_discovery_order_differs_from_sorted_order():
    # "b" is completed first, although "abcd" starts earlier.
    automaton = ACAutomaton(["abcd", "b"])
    streamed = list(eachmatch(automaton, "abcd"))
    assert [m.pattern for m in streamed] == ["b", "abcd"]
    assert [m.pattern for m in search(automaton, "abcd")] == ["abcd", "b"]
    assert by_start(streamed) == search(automaton, "abcd")


def test_same_set_as_batch():
    automaton = ACAutomaton(["a", "aa", "aaa"])
    streamed = list(matches_of(automaton, "aaaa"))
    assert len(streamed) == 9
    assert set(streamed) == set(search(automaton, "aaaa"))


def test_pending_outputs_use_captured_position():
    automaton = ACAutomaton(["he", "she", "his", "hers"])
    it = eachmatch(automaton, "ushers")
    assert isinstance(it, ACMatchIterator)
    assert it.state == ACMatchState(0, automaton.root, (), 0)

    assert next(it) == ACMatch("she", 2, 2, 4)
    assert it.state.text_pos == 4
    assert it.state.pending_outputs == (1, 0)
    assert it.state.pending_idx == 1

    # Second entry is reported at the position where the output was captured
    assert next(it) == ACMatch("he", 1, 3, 4)
    assert it.state.pending_idx == 2


def test_advance_is_pure():
    automaton = ACAutomaton(["he", "she", "his", "hers"])
    it = ACMatchIterator(automaton, "ushers")
    state = it.initial_state()
    first = it.advance(state)
    assert first == it.advance(state)
    assert it.state == state

    collected = []
    result = first
    while result is not None:
        match, state = result
        collected.append(match)
        result = it.advance(state)
    assert collected == list(eachmatch(automaton, "ushers"))


def test_exhausted_iterator_stays_exhausted():
    automaton = ACAutomaton(["b"])
    it = eachmatch(automaton, "abc")
    assert next(it) == ACMatch("b", 1, 2, 2)
    with pytest.raises(StopIteration):
        next(it)
    with pytest.raises(StopIteration):
        next(it)
    assert list(it) == []


def test_each_call_is_independent():
    automaton = ACAutomaton(["na"])
    first = eachmatch(automaton, "banana")
    next(first)
    assert [m.start for m in eachmatch(automaton, "banana")] == [3, 5]
    assert [m.start for m in first] == [5]


def test_stopping_early():
    automaton = ACAutomaton(["x"])
    it = automaton.finditer("x" * 1000)
    taken = [next(it) for _ in range(3)]
    assert [m.start for m in taken] == [1, 2, 3]
    assert it.state.text_pos == 3


def test_empty_inputs():
    assert list(eachmatch(ACAutomaton([]), "abc")) == []
    assert list(eachmatch(ACAutomaton(["abc"]), "")) == []


def test_zero_based_indexing():
    automaton = ACAutomaton(["he", "she"], index_base=0)
    assert list(eachmatch(automaton, "she")) == [ACMatch("she", 1, 0, 2), ACMatch("he", 0, 1, 2)]


def test_non_string_text_rejected():
    with pytest.raises(TypeError):
        eachmatch(ACAutomaton(["a"]), ["a"])


def test_random_same_set_as_batch():
    np.random.seed(7)
    for _ in range(200):
        patterns = generate_random_patterns(np.random.randint(0, 8), 1, 4, ['a', 'b'])
        text = generate_random_string(np.random.randint(0, 30), ['a', 'b'])
        automaton = ACAutomaton(patterns)
        streamed = list(eachmatch(automaton, text))
        assert by_start(streamed) == search(automaton, text)
        # discovery order never goes backwards in end position
        stops = [m.stop for m in streamed]
        assert stops == sorted(stops)
