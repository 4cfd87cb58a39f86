"""Fitness metrics for scoring a DFA against a reference predicate."""

import numpy as np
from itertools import product
from typing import Callable, Dict, List, Optional, Sequence
from dataclasses import dataclass, field

from .automaton import ALPHABET, DFA

Predicate = Callable[[str], bool]

# Weight of the encoded size in the adjusted fitness used to pick the best DFA
COMPLEXITY_PENALTY = 1_000_000.0


class EmptyCorpusError(ValueError):
    """Raised when a DFA is scored against an empty set of inputs."""


@dataclass
class EvaluationResult:
    """Detailed outcome of scoring one DFA."""
    accuracy: float
    correct: int
    total: int
    num_states: int
    encoded_size: int
    mismatches: List[str] = field(default_factory=list)  # inputs the DFA gets wrong

    def to_dict(self) -> Dict:
        return {
            "accuracy": self.accuracy,
            "correct": self.correct,
            "total": self.total,
            "num_states": self.num_states,
            "encoded_size": self.encoded_size,
            "mismatches": list(self.mismatches),
        }


def bitstrings(length: int) -> List[str]:
    """All bitstrings of exactly the given length, in lexicographic order."""
    if length < 0:
        raise ValueError(f"length must be >= 0, got {length}")
    return ["".join(bits) for bits in product(ALPHABET, repeat=length)]


def all_bitstrings(max_length: int) -> List[str]:
    """All bitstrings up to max_length, sorted by length then lexicographically."""
    if max_length < 0:
        raise ValueError(f"max_length must be >= 0, got {max_length}")
    corpus: List[str] = []
    for length in range(max_length + 1):
        corpus.extend(bitstrings(length))
    return corpus


def sample_bitstrings(
    max_length: int,
    n: int,
    rng: Optional[np.random.Generator] = None,
) -> List[str]:
    """
    Sample n distinct bitstrings of length <= max_length.

    The sample keeps the corpus order of all_bitstrings. When n covers the
    whole corpus the full corpus is returned.
    """
    if n <= 0:
        raise ValueError(f"n must be > 0, got {n}")
    corpus = all_bitstrings(max_length)
    if n >= len(corpus):
        return corpus
    if rng is None:
        rng = np.random.default_rng()
    chosen = np.sort(rng.choice(len(corpus), size=n, replace=False))
    return [corpus[i] for i in chosen]


def _check_inputs(inputs: Sequence[str]):
    if len(inputs) == 0:
        raise EmptyCorpusError("Cannot measure accuracy on an empty set of inputs")


def accuracy(dfa: DFA, predicate: Predicate, inputs: Sequence[str]) -> float:
    """
    Fraction of inputs on which the DFA agrees with the predicate.

    Every input is checked; there is no sampling here. Pass a sampled corpus
    (see sample_bitstrings) to trade exactness for speed.
    """
    _check_inputs(inputs)
    matches = [dfa.run(x) == bool(predicate(x)) for x in inputs]
    return float(np.mean(matches))


def encoded_size(dfa: DFA) -> int:
    """Length of the canonical encoding, used as a complexity measure."""
    return len(dfa.to_string())


def adjusted_fitness(dfa: DFA, fitness: float) -> float:
    """Fitness minus a negligible size penalty that favours smaller automata on near-ties."""
    return fitness - encoded_size(dfa) / COMPLEXITY_PENALTY


def evaluate_dfa(dfa: DFA, predicate: Predicate, inputs: Sequence[str]) -> EvaluationResult:
    """Score a DFA and collect the inputs it gets wrong."""
    _check_inputs(inputs)
    mismatches = [x for x in inputs if dfa.run(x) != bool(predicate(x))]
    correct = len(inputs) - len(mismatches)
    return EvaluationResult(
        accuracy=correct / len(inputs),
        correct=correct,
        total=len(inputs),
        num_states=dfa.num_states,
        encoded_size=encoded_size(dfa),
        mismatches=mismatches,
    )
