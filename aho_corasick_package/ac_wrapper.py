'''High-level batch processing of many texts against one pattern set.

This module provides the `ACProcessor` class, which builds a single
`ACAutomaton` and runs searches over lists of texts. Because the automaton is
immutable once built, the texts are searched concurrently from a thread pool
that shares it without locking. Aggregated results (match counts, per-pattern
occurrence counts, match tables) are returned as numpy arrays.
'''
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

import numpy as np

from .python_backend.automaton import ACAutomaton
from .python_backend.matcher import ACMatch, eachmatch, search

logger = logging.getLogger(__name__)

MATCH_DTYPE = np.dtype([('pattern_index', np.int64), ('start', np.int64), ('stop', np.int64)])


def matches_to_array(matches: Iterable[ACMatch]) -> np.ndarray:
    """Converts matches to a numpy structured array with fields
    `pattern_index`, `start` and `stop` (all int64), in input order."""
    rows = [(m.pattern_index, m.start, m.stop) for m in matches]
    return np.array(rows, dtype=MATCH_DTYPE)


class ACProcessor:
    '''Searches lists of texts for a fixed set of patterns.

    Attributes:
        automaton (ACAutomaton): The shared automaton built from the patterns.
        n_threads (int): The number of threads used for batch searches.
                         Defaults to the number of CPU cores available.
    '''
    def __init__(self, patterns: Iterable[str], n_threads: Optional[int] = None,
                 index_base: int = 1, empty_patterns: str = "error"):
        """Initializes the ACProcessor.

        Args:
            patterns: The patterns to search for.
            n_threads: The number of threads to use for batch searches.
                       If None, defaults to the number of CPU cores detected by os.cpu_count().
            index_base: 0 or 1, passed to `ACAutomaton`.
            empty_patterns: Zero-length pattern policy, passed to `ACAutomaton`.

        Raises:
            ValueError: If n_threads is not positive, or the automaton rejects its options.
        """
        if n_threads is not None and n_threads <= 0:
            raise ValueError("n_threads must be a positive integer.")
        self.n_threads = n_threads if n_threads is not None else os.cpu_count()
        if self.n_threads is None: # Fallback if os.cpu_count() returns None
            self.n_threads = 1
        self.automaton = ACAutomaton(patterns, index_base=index_base, empty_patterns=empty_patterns)

    @property
    def patterns(self) -> tuple[str, ...]:
        return self.automaton.patterns

    def _map(self, func, texts: List[str]) -> list:
        for i, text in enumerate(texts):
            if not isinstance(text, str):
                raise TypeError(f"All items in texts list must be str, got {type(text)} at index {i}")
        if self.n_threads == 1 or len(texts) < 2:
            return [func(text) for text in texts]
        workers = min(self.n_threads, len(texts))
        logger.debug("Searching %d texts with %d threads", len(texts), workers)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(func, texts))

    def search(self, text: str) -> List[ACMatch]:
        """All matches in one text, sorted by (start, pattern_index)."""
        return search(self.automaton, text)

    def search_many(self, texts: List[str]) -> List[List[ACMatch]]:
        """Runs `search` on every text. Result order follows `texts`."""
        if not texts:
            return []
        return self._map(self.search, texts)

    def count_matches(self, texts: List[str]) -> np.ndarray:
        """Returns the total number of matches in each text as an int64 array."""
        if not texts:
            return np.array([], dtype=np.int64)
        counts = self._map(lambda t: sum(1 for _ in eachmatch(self.automaton, t)), texts)
        return np.array(counts, dtype=np.int64)

    def pattern_counts(self, text: str) -> np.ndarray:
        """Occurrences of each pattern in `text`.

        Returns:
            An int64 array of length `len(patterns)`; entry k counts the pattern at
            (0-based) position k of the pattern list, regardless of `index_base`.
        """
        base = self.automaton.index_base
        indices = [m.pattern_index - base for m in eachmatch(self.automaton, text)]
        return np.bincount(np.array(indices, dtype=np.int64),
                           minlength=len(self.automaton)).astype(np.int64)

    def pattern_count_matrix(self, texts: List[str]) -> np.ndarray:
        """Stacks `pattern_counts` for every text into a (len(texts), len(patterns)) array."""
        if not texts:
            return np.zeros((0, len(self.automaton)), dtype=np.int64)
        rows = self._map(self.pattern_counts, texts)
        return np.vstack(rows)

    def contains_any(self, text: str) -> bool:
        """True if any pattern occurs in `text`. Stops scanning at the first match."""
        for _ in eachmatch(self.automaton, text):
            return True
        return False


# --- Example Usage ---
if __name__ == '__main__':
    print("Running ACProcessor examples...")

    processor = ACProcessor(["he", "she", "his", "hers"], n_threads=4)
    test_texts = [
        "ushers",
        "this history is hers",
        "nothing here",
        "" # Empty text test
    ]

    print("\n--- search_many ---")
    for t, found in zip(test_texts, processor.search_many(test_texts)):
        print(f"'{t if t else '<empty>'}': {found}")

    print("\n--- count_matches ---")
    for t, c in zip(test_texts, processor.count_matches(test_texts)):
        print(f"'{t if t else '<empty>'}': {c}")

    print("\n--- pattern_count_matrix ---")
    print(processor.patterns)
    print(processor.pattern_count_matrix(test_texts))

    print("\n--- matches_to_array ---")
    print(matches_to_array(processor.search("ushers")))
