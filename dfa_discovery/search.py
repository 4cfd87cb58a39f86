"""Steady-state evolutionary search for DFAs that match a predicate."""

import numpy as np
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Sequence
from dataclasses import dataclass, field

from .automaton import DFA
from .metrics import Predicate, accuracy, adjusted_fitness, all_bitstrings
from .mutation import STANDARD_WEIGHTS, mutate_until_different, validate_weights

Population = Dict[DFA, float]


@dataclass
class Individual:
    """A DFA with its fitness, as reported by the search."""
    dfa: DFA
    fitness: float
    generation: int = 0


@dataclass
class SearchResult:
    """Results from a search run."""
    best_individual: Individual
    population: Population
    generation: int
    history: List[Individual] = field(default_factory=list)


def cull(population: Population) -> DFA:
    """
    Return the member to drop when the population is over its limit.

    This is a member with the minimum fitness. Among equally unfit members
    the one inserted first goes, so neutral variants can replace old ones.
    """
    return min(population, key=population.get)


def best_member(population: Population) -> DFA:
    """Member with the highest size-adjusted fitness; exact ties go to the smallest encoding."""
    return min(
        population,
        key=lambda dfa: (-adjusted_fitness(dfa, population[dfa]), dfa.to_string()),
    )


def evolve(
    population: Population,
    mutate: Callable[[DFA], DFA],
    fitness: Callable[[DFA], float],
    max_size: int,
    rng: Optional[np.random.Generator] = None,
) -> Population:
    """
    Run a population through one step of evolution.

    A uniformly random member is mutated (mutate must return a DFA that
    differs from its argument). If the result is already in the population
    nothing changes. Otherwise it is scored and added, and if the population
    is then larger than max_size its least fit member is removed.
    """
    if not population:
        raise ValueError("Cannot evolve an empty population")
    if max_size < 1:
        raise ValueError(f"max_size must be >= 1, got {max_size}")
    if rng is None:
        rng = np.random.default_rng()

    members = list(population)
    parent = members[int(rng.integers(len(members)))]
    child = mutate(parent)

    if child in population:
        return population

    evolved = dict(population)
    evolved[child] = fitness(child)
    if len(evolved) > max_size:
        del evolved[cull(evolved)]
    return evolved


class DFASearch:
    """Evolutionary search for a DFA reproducing a boolean predicate over bitstrings."""

    def __init__(
        self,
        predicate: Predicate,
        max_length: int = 4,
        weights: Optional[Mapping[str, float]] = None,
        max_size: int = 8,
        inputs: Optional[Sequence[str]] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")

        self.predicate = predicate
        self.max_length = max_length
        self.weights = validate_weights(STANDARD_WEIGHTS if weights is None else weights)
        self.max_size = max_size
        self.inputs = list(inputs) if inputs is not None else all_bitstrings(max_length)
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        initial = DFA.trivial()
        self.population: Population = {initial: self.fitness(initial)}
        self.generation = 0
        self.history: List[Individual] = []

    def fitness(self, dfa: DFA) -> float:
        return accuracy(dfa, self.predicate, self.inputs)

    def mutate(self, dfa: DFA) -> DFA:
        return mutate_until_different(dfa, self.weights, self.rng)

    def best(self) -> Individual:
        """Best member of the current population."""
        dfa = best_member(self.population)
        return Individual(dfa=dfa, fitness=self.population[dfa], generation=self.generation)

    def evolve_generation(self) -> Population:
        """Evolve the population by one generation."""
        self.population = evolve(self.population, self.mutate, self.fitness, self.max_size, self.rng)
        self.generation += 1
        return self.population

    def _report(self) -> Optional[Individual]:
        """Record the current best if it differs from the last one reported."""
        best = self.best()
        if self.history and self.history[-1].dfa == best.dfa:
            return None
        self.history.append(best)
        return best

    def snapshots(self) -> Iterator[Individual]:
        """
        Yield the best DFA so far, every time it changes.

        The first snapshot is the best of the seed population. The sequence
        never ends on its own; stop iterating to stop the search.
        """
        while True:
            snapshot = self._report()
            if snapshot is not None:
                yield snapshot
            self.evolve_generation()

    def run(
        self,
        generations: int,
        target_fitness: Optional[float] = None,
        callback: Optional[Callable[[int, Individual], None]] = None,
        verbose: bool = True,
    ) -> SearchResult:
        """Run the search for a number of generations, or until target_fitness is reached."""
        for gen in range(generations + 1):
            if gen > 0:
                self.evolve_generation()

            snapshot = self._report()
            if snapshot is not None:
                if callback:
                    callback(self.generation, snapshot)
                if verbose:
                    print(f"Gen {self.generation:5d}: Best={snapshot.fitness:.4f} "
                          f"States={snapshot.dfa.num_states:2d} {snapshot.dfa.to_string()}")

            if target_fitness is not None and self.history[-1].fitness >= target_fitness:
                break

        return SearchResult(
            best_individual=self.best(),
            population=self.population,
            generation=self.generation,
            history=self.history,
        )

    def get_top_dfas(self, n: int = 10) -> List[Individual]:
        """Get the top N DFAs from the current population."""
        ranked = sorted(self.population, key=lambda d: (-adjusted_fitness(d, self.population[d]), d.to_string()))
        return [Individual(dfa=d, fitness=self.population[d], generation=self.generation) for d in ranked[:n]]


def search(
    predicate: Predicate,
    max_length: int,
    weights: Mapping[str, float],
    max_size: int,
    rng: Optional[np.random.Generator] = None,
    inputs: Optional[Sequence[str]] = None,
) -> Iterator[Individual]:
    """Lazy, unbounded stream of distinct best-so-far snapshots."""
    return DFASearch(
        predicate,
        max_length=max_length,
        weights=weights,
        max_size=max_size,
        inputs=inputs,
        rng=rng,
    ).snapshots()
