'''Brute-force multi-pattern search and random input generators.

`naive_search` scans the text once per pattern with `str.find`, costing
O(n * m) instead of the automaton's O(n + m + z). It is kept as a simple,
obviously-correct reference for verifying `ACAutomaton` and as a baseline
for benchmarks. Numpy is used for generating random test inputs.
'''
import numpy as np

from .matcher import ACMatch


def naive_search(patterns: list[str], text: str, index_base: int = 1) -> list[ACMatch]:
    """Finds every (possibly overlapping) occurrence of every pattern in `text`.

    Empty patterns are skipped.

    Args:
        patterns: Patterns to look for; their order defines pattern indices.
        text: The text to search in.
        index_base (int, optional): 0 or 1, applied to pattern indices and positions.

    Returns:
        list[ACMatch]: Matches sorted by (start, pattern_index).
    """
    matches = []
    for pattern_idx, pattern in enumerate(patterns):
        if not pattern:
            continue
        i = text.find(pattern)
        while i != -1:
            start = i + index_base
            matches.append(ACMatch(pattern, pattern_idx + index_base, start, start + len(pattern) - 1))
            i = text.find(pattern, i + 1)
    matches.sort(key=lambda m: (m.start, m.pattern_index))
    return matches


def generate_random_string(length: int, alphabet: list = ['a', 'b']) -> str:
    """Generates a random string of a given length from an alphabet.

    Args:
        length: The desired length of the string.
        alphabet (list, optional): Characters to draw from. Defaults to ['a', 'b'].

    Returns:
        str: The random string.
    """
    if not alphabet:
        raise ValueError("Alphabet cannot be empty for generating random string.")
    if length <= 0:
        return ""
    return ''.join(np.random.choice(alphabet, length))


def generate_random_patterns(num_patterns: int, min_len: int = 1, max_len: int = 4,
                             alphabet: list = ['a', 'b']) -> list[str]:
    """Generates random non-empty patterns; duplicates are allowed and likely for small alphabets."""
    if min_len < 1 or max_len < min_len:
        raise ValueError("Pattern lengths must satisfy 1 <= min_len <= max_len.")
    lengths = np.random.randint(min_len, max_len + 1, size=num_patterns)
    return [generate_random_string(int(n), alphabet) for n in lengths]


if __name__ == '__main__':
    patterns = ["he", "she", "his", "hers"]
    text = "ushers"
    print(f"naive_search({patterns}, '{text}'):")
    for m in naive_search(patterns, text):
        print(f"  {m}")

    random_patterns = generate_random_patterns(5)
    random_text = generate_random_string(20)
    print(f"\nRandom patterns: {random_patterns}")
    print(f"Random text: '{random_text}'")
    print(f"Matches: {naive_search(random_patterns, random_text)}")
