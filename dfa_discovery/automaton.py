"""Deterministic finite automata over the binary alphabet."""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

ALPHABET: Tuple[str, ...] = ("0", "1")

_STATE_PATTERN = re.compile(r"^(>?)([A-Za-z_]\w*)([+-])$")


class InvalidDFAError(ValueError):
    """Raised when a DFA breaks its structural invariants."""


def state_sort_key(state: str) -> Tuple[int, int, str]:
    """Order 'qN' names numerically, everything else after them by name."""
    if state.startswith("q") and state[1:].isdigit():
        return (0, int(state[1:]), state)
    return (1, 0, state)


def state_name(states: Iterable[str]) -> str:
    """Return the lowest-indexed name q0, q1, ... not already in states."""
    used = set(states)
    i = 0
    while f"q{i}" in used:
        i += 1
    return f"q{i}"


@dataclass(frozen=True, eq=False)
class DFA:
    """DFA as a transitions map, an accepting map and an initial state.

    Both maps share the same keys, which are the states of the automaton.
    Each value of `transitions` maps every alphabet symbol to a state.
    Both maps are copied into read-only views on construction, so instances
    are immutable values. Equality and hashing are structural, so they can
    be used directly as population keys.
    """
    transitions: Mapping[str, Mapping[str, str]]
    accepting: Mapping[str, bool]
    initial: str

    def __post_init__(self):
        """Validate totality of the transition function."""
        if not self.transitions:
            raise InvalidDFAError("DFA must have at least one state")
        if set(self.transitions) != set(self.accepting):
            raise InvalidDFAError(
                f"transitions states {sorted(self.transitions)} differ from "
                f"accepting states {sorted(self.accepting)}"
            )
        if self.initial not in self.transitions:
            raise InvalidDFAError(f"initial state {self.initial!r} is not a state")
        for state, edges in self.transitions.items():
            if set(edges) != set(ALPHABET):
                raise InvalidDFAError(
                    f"state {state!r} must map exactly the symbols {ALPHABET}, got {sorted(edges)}"
                )
            for symbol, target in edges.items():
                if target not in self.transitions:
                    raise InvalidDFAError(
                        f"transition {state!r} --{symbol}--> {target!r} targets an unknown state"
                    )

        object.__setattr__(self, "transitions", MappingProxyType(
            {state: MappingProxyType(dict(edges)) for state, edges in self.transitions.items()}
        ))
        object.__setattr__(self, "accepting", MappingProxyType(dict(self.accepting)))

    @classmethod
    def trivial(cls) -> "DFA":
        """Single rejecting state that loops on every symbol."""
        return cls(
            transitions={"q0": {symbol: "q0" for symbol in ALPHABET}},
            accepting={"q0": False},
            initial="q0",
        )

    @classmethod
    def from_dict(cls, data: Dict) -> "DFA":
        """Create a DFA from a plain dictionary, copying the nested maps."""
        return cls(
            transitions={s: dict(edges) for s, edges in data["transitions"].items()},
            accepting={s: bool(flag) for s, flag in data["accepting"].items()},
            initial=data["initial"],
        )

    @classmethod
    def from_string(cls, text: str) -> "DFA":
        """Parse the encoding produced by to_string, e.g. '>q0+ 0:q0 1:q1; q1- 0:q0 1:q1'."""
        transitions: Dict[str, Dict[str, str]] = {}
        accepting: Dict[str, bool] = {}
        initial = None

        for chunk in text.split(";"):
            parts = chunk.split()
            if not parts:
                continue
            match = _STATE_PATTERN.match(parts[0])
            if match is None:
                raise InvalidDFAError(f"Cannot parse state header {parts[0]!r}")
            marker, state, flag = match.groups()
            if state in transitions:
                raise InvalidDFAError(f"State {state!r} is defined twice")
            if marker:
                if initial is not None:
                    raise InvalidDFAError("More than one initial state")
                initial = state

            edges = {}
            for edge in parts[1:]:
                symbol, sep, target = edge.partition(":")
                if not sep or not target:
                    raise InvalidDFAError(f"Cannot parse transition {edge!r}")
                edges[symbol] = target
            transitions[state] = edges
            accepting[state] = flag == "+"

        if initial is None:
            raise InvalidDFAError("No initial state marked with '>'")
        return cls(transitions=transitions, accepting=accepting, initial=initial)

    @property
    def states(self) -> List[str]:
        """States in canonical order."""
        return sorted(self.transitions, key=state_sort_key)

    @property
    def num_states(self) -> int:
        return len(self.transitions)

    def run(self, input_seq: Iterable[str]) -> bool:
        """Return True if the DFA accepts the input sequence."""
        state = self.initial
        for symbol in input_seq:
            if symbol not in ALPHABET:
                raise ValueError(f"Symbol {symbol!r} is not in the alphabet {ALPHABET}")
            state = self.transitions[state][symbol]
        return self.accepting[state]

    def to_string(self) -> str:
        """Canonical one-line encoding of the automaton."""
        chunks = []
        for state in self.states:
            marker = ">" if state == self.initial else ""
            flag = "+" if self.accepting[state] else "-"
            edges = " ".join(f"{symbol}:{self.transitions[state][symbol]}" for symbol in ALPHABET)
            chunks.append(f"{marker}{state}{flag} {edges}")
        return "; ".join(chunks)

    def to_dict(self) -> Dict:
        return {
            "transitions": {s: dict(edges) for s, edges in self.transitions.items()},
            "accepting": dict(self.accepting),
            "initial": self.initial,
        }

    def _key(self):
        return (
            frozenset((s, tuple(sorted(edges.items()))) for s, edges in self.transitions.items()),
            frozenset(self.accepting.items()),
            self.initial,
        )

    def __hash__(self):
        return hash(self._key())

    def __eq__(self, other):
        if not isinstance(other, DFA):
            return False
        return (
            self.initial == other.initial
            and self.accepting == other.accepting
            and self.transitions == other.transitions
        )

    def __repr__(self):
        return f"DFA({self.to_string()!r})"


def run(dfa: DFA, input_seq: Iterable[str]) -> bool:
    """Return True if the DFA accepts the input sequence, and False otherwise."""
    return dfa.run(input_seq)
