"""Structural mutation operators for DFAs and weighted operator selection."""

import numpy as np
from typing import Dict, List, Mapping, Optional, Sequence, TypeVar, Union

from .automaton import ALPHABET, DFA, state_name

T = TypeVar("T")

CHANGE_TRANSITION = "change-transition"
CHANGE_ACCEPTING = "change-accepting"
CHANGE_INITIAL = "change-initial"
ADD_STATE = "add-state"
REMOVE_STATE = "remove-state"

# Possible actions for mutating a DFA; these are the keys of weight maps
ACTIONS: List[str] = [
    CHANGE_TRANSITION,
    CHANGE_ACCEPTING,
    CHANGE_INITIAL,
    ADD_STATE,
    REMOVE_STATE,
]

STANDARD_WEIGHTS: Dict[str, float] = {
    CHANGE_TRANSITION: 100,
    CHANGE_ACCEPTING: 10,
    CHANGE_INITIAL: 1,
    ADD_STATE: 1,
    REMOVE_STATE: 2,
}


class WeightConfigurationError(ValueError):
    """Raised when mutation weights cannot select any operator."""


def _pick(items: Sequence[T], rng) -> T:
    return items[int(rng.integers(len(items)))]


def _coin(rng) -> bool:
    return bool(rng.integers(2))


def weighted_choice(items: Sequence[T], weights: Sequence[float], rng=None) -> T:
    """
    Choose an item at random, with probability proportional to its weight.

    Draws a value in [0, total) and returns the first item whose cumulative
    weight exceeds it, so zero-weight items are never chosen.
    """
    if len(items) != len(weights):
        raise WeightConfigurationError(
            f"Got {len(items)} items but {len(weights)} weights"
        )
    if not all(np.isfinite(w) for w in weights):
        raise WeightConfigurationError(f"Weights must be finite, got {list(weights)}")
    if any(w < 0 for w in weights):
        raise WeightConfigurationError(f"Weights must be non-negative, got {list(weights)}")
    total = float(sum(weights))
    if total <= 0:
        raise WeightConfigurationError("Weights must sum to a positive number")

    if rng is None:
        rng = np.random.default_rng()
    choice = rng.random() * total

    cumulative = 0.0
    for item, weight in zip(items, weights):
        cumulative += weight
        if choice < cumulative:
            return item
    # Floating point rounding can leave choice at the very top of the range
    return [item for item, weight in zip(items, weights) if weight > 0][-1]


def validate_weights(weights: Mapping[str, float]) -> Dict[str, float]:
    """Check a weight map and return it with every action filled in (missing = 0)."""
    unknown = set(weights) - set(ACTIONS)
    if unknown:
        raise WeightConfigurationError(f"Unknown mutation actions: {sorted(unknown)}")
    full = {action: float(weights.get(action, 0)) for action in ACTIONS}
    if not all(np.isfinite(w) for w in full.values()):
        raise WeightConfigurationError(f"Weights must be finite, got {full}")
    if any(w < 0 for w in full.values()):
        raise WeightConfigurationError(f"Weights must be non-negative, got {full}")
    if sum(full.values()) <= 0:
        raise WeightConfigurationError("At least one mutation action needs a positive weight")
    return full


def change_transition(dfa: DFA, rng) -> DFA:
    """Point one random transition at a random state (possibly the same one)."""
    states = dfa.states
    transitions = {s: dict(edges) for s, edges in dfa.transitions.items()}
    state = _pick(states, rng)
    symbol = _pick(ALPHABET, rng)
    transitions[state][symbol] = _pick(states, rng)
    return DFA(transitions=transitions, accepting=dict(dfa.accepting), initial=dfa.initial)


def change_accepting(dfa: DFA, rng) -> DFA:
    """Set the accepting flag of a random state to a random value."""
    accepting = dict(dfa.accepting)
    state = _pick(dfa.states, rng)
    accepting[state] = _coin(rng)
    return DFA(
        transitions={s: dict(edges) for s, edges in dfa.transitions.items()},
        accepting=accepting,
        initial=dfa.initial,
    )


def change_initial(dfa: DFA, rng) -> DFA:
    """Make a random state the initial state."""
    return DFA(
        transitions={s: dict(edges) for s, edges in dfa.transitions.items()},
        accepting=dict(dfa.accepting),
        initial=_pick(dfa.states, rng),
    )


def add_state(dfa: DFA, rng) -> DFA:
    """Add a fresh state with random outgoing transitions and a random flag."""
    new_state = state_name(dfa.states)
    # The new state is a valid target for its own transitions
    targets = dfa.states + [new_state]

    transitions = {s: dict(edges) for s, edges in dfa.transitions.items()}
    transitions[new_state] = {symbol: _pick(targets, rng) for symbol in ALPHABET}
    accepting = dict(dfa.accepting)
    accepting[new_state] = _coin(rng)
    return DFA(transitions=transitions, accepting=accepting, initial=dfa.initial)


def remove_state(dfa: DFA, rng) -> DFA:
    """
    Delete a random state. A single-state DFA is returned unchanged.

    Transitions that pointed at the removed state are redirected, one by one,
    to random remaining states. If the initial state was removed a new one is
    picked with change_initial.
    """
    if dfa.num_states <= 1:
        return dfa

    removed = _pick(dfa.states, rng)
    remaining = [s for s in dfa.states if s != removed]

    transitions = {}
    for state in remaining:
        edges = {}
        for symbol in ALPHABET:
            target = dfa.transitions[state][symbol]
            edges[symbol] = _pick(remaining, rng) if target == removed else target
        transitions[state] = edges
    accepting = {s: dfa.accepting[s] for s in remaining}

    if dfa.initial == removed:
        # Any remaining state will do as a placeholder before re-picking
        shrunk = DFA(transitions=transitions, accepting=accepting, initial=remaining[0])
        return change_initial(shrunk, rng)
    return DFA(transitions=transitions, accepting=accepting, initial=dfa.initial)


OPERATORS = {
    CHANGE_TRANSITION: change_transition,
    CHANGE_ACCEPTING: change_accepting,
    CHANGE_INITIAL: change_initial,
    ADD_STATE: add_state,
    REMOVE_STATE: remove_state,
}


def mutate(
    dfa: DFA,
    weights_or_action: Union[str, Mapping[str, float]],
    rng: Optional[np.random.Generator] = None,
) -> DFA:
    """
    Mutate the DFA in some way and return the new DFA.

    If weights_or_action is a string it must be one of ACTIONS. Otherwise it
    is a map from actions to weights and an action is drawn with
    weighted_choice. The result may equal the input, since several operators
    can pick the value that is already there.
    """
    if rng is None:
        rng = np.random.default_rng()

    if isinstance(weights_or_action, str):
        operator = OPERATORS.get(weights_or_action)
        if operator is None:
            raise ValueError(f"Unknown mutation action: {weights_or_action!r}")
        return operator(dfa, rng)

    weights = validate_weights(weights_or_action)
    action = weighted_choice(ACTIONS, [weights[a] for a in ACTIONS], rng)
    return OPERATORS[action](dfa, rng)


def mutate_until_different(
    dfa: DFA,
    weights: Mapping[str, float],
    rng: Optional[np.random.Generator] = None,
    max_attempts: int = 1000,
) -> DFA:
    """
    Mutate repeatedly until the result is structurally different from dfa.

    After max_attempts no-op mutations, falls back to add_state, which always
    produces a different automaton.
    """
    if rng is None:
        rng = np.random.default_rng()
    weights = validate_weights(weights)

    for _ in range(max_attempts):
        candidate = mutate(dfa, weights, rng)
        if candidate != dfa:
            return candidate
    return add_state(dfa, rng)
