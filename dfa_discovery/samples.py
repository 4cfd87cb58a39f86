"""Hand-written sample DFAs and the predicates they implement."""

from typing import Dict

from .automaton import DFA
from .metrics import Predicate

# Accepts only bitstrings representing even numbers
EVEN_ODD_DFA = DFA(
    transitions={
        "q0": {"0": "q0", "1": "q1"},
        "q1": {"0": "q0", "1": "q1"},
    },
    accepting={"q0": True, "q1": False},
    initial="q0",
)

# Accepts only bitstrings with at least two 0's and at most one 1
BIT_COUNTING_DFA = DFA(
    transitions={
        "q0": {"0": "q1", "1": "q3"},
        "q1": {"0": "q2", "1": "q4"},
        "q2": {"0": "q2", "1": "q5"},
        "q3": {"0": "q4", "1": "q6"},
        "q4": {"0": "q5", "1": "q6"},
        "q5": {"0": "q5", "1": "q6"},
        "q6": {"0": "q6", "1": "q6"},
    },
    accepting={
        "q0": False,
        "q1": False,
        "q2": True,
        "q3": False,
        "q4": False,
        "q5": True,
        "q6": False,
    },
    initial="q0",
)


def even_odd_predicate(bitstring: str) -> bool:
    """True for bitstrings representing even numbers (the empty string counts as zero)."""
    return len(bitstring) == 0 or bitstring[-1] == "0"


def bit_counting_predicate(bitstring: str) -> bool:
    """True for bitstrings with at least two 0's and at most one 1."""
    return bitstring.count("0") >= 2 and bitstring.count("1") <= 1


def double_zero_predicate(bitstring: str) -> bool:
    """True for bitstrings ending in two 0's."""
    return bitstring.endswith("00")


PREDICATES: Dict[str, Predicate] = {
    "even-odd": even_odd_predicate,
    "bit-counting": bit_counting_predicate,
    "double-zero": double_zero_predicate,
}

SAMPLE_DFAS: Dict[str, DFA] = {
    "even-odd": EVEN_ODD_DFA,
    "bit-counting": BIT_COUNTING_DFA,
    "trivial": DFA.trivial(),
}
