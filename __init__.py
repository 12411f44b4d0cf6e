from .aho_corasick_package import (
    ACAutomaton, construct,
    ACMatch, ACMatchIterator,
    search, eachmatch, matches_of,
    ACProcessor, matches_to_array
)

__all__ = [
    'ACAutomaton', 'construct',
    'ACMatch', 'ACMatchIterator',
    'search', 'eachmatch', 'matches_of',
    'ACProcessor', 'matches_to_array'
]
