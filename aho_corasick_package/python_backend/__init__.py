'''Pure Python implementation of the Aho-Corasick automaton and its matchers.'''

from .node_store import ACNode, NodeStore, ROOT
from .matcher import ACMatch, ACMatchState, ACMatchIterator, search, eachmatch, matches_of
from .automaton import ACAutomaton, construct
from .naive import naive_search

__all__ = [
    'ACNode', 'NodeStore', 'ROOT',
    'ACMatch', 'ACMatchState', 'ACMatchIterator',
    'search', 'eachmatch', 'matches_of',
    'ACAutomaton', 'construct',
    'naive_search'
]
