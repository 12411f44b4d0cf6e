'''Initialize the aho_corasick_package, exposing the automaton, matchers and batch processor.'''

from .python_backend.automaton import ACAutomaton, construct
from .python_backend.matcher import ACMatch, ACMatchState, ACMatchIterator, search, eachmatch, matches_of
from .ac_wrapper import ACProcessor, matches_to_array

__all__ = [
    'ACAutomaton', 'construct',
    'ACMatch', 'ACMatchState', 'ACMatchIterator',
    'search', 'eachmatch', 'matches_of',
    'ACProcessor', 'matches_to_array'
]
