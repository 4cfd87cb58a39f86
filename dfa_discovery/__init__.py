"""DFA Discovery System - Evolve deterministic finite automata that reproduce a boolean predicate."""

from .automaton import ALPHABET, DFA, InvalidDFAError, run, state_name
from .metrics import EmptyCorpusError, accuracy, all_bitstrings, bitstrings
from .mutation import ACTIONS, STANDARD_WEIGHTS, WeightConfigurationError, mutate
from .search import DFASearch, evolve, search

__all__ = [
    "ALPHABET",
    "DFA",
    "InvalidDFAError",
    "run",
    "state_name",
    "EmptyCorpusError",
    "accuracy",
    "all_bitstrings",
    "bitstrings",
    "ACTIONS",
    "STANDARD_WEIGHTS",
    "WeightConfigurationError",
    "mutate",
    "DFASearch",
    "evolve",
    "search",
]
