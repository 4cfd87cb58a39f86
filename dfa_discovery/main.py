#!/usr/bin/env python3
"""CLI for the DFA Discovery System."""

import argparse
import sys

from .automaton import DFA
from .metrics import all_bitstrings, evaluate_dfa
from .mutation import ACTIONS, STANDARD_WEIGHTS, WeightConfigurationError
from .samples import PREDICATES, SAMPLE_DFAS
from .search import DFASearch


def _weights_from_args(args):
    return {action: getattr(args, action.replace("-", "_")) for action in ACTIONS}


def cmd_search(args):
    """Run the evolutionary search and print every new best DFA."""
    weights = _weights_from_args(args)

    print(f"Starting DFA search...")
    print(f"  Predicate: {args.predicate}")
    print(f"  Max length: {args.max_length}")
    print(f"  Population: {args.population}")
    print(f"  Generations: {args.generations}")
    print(f"  Weights: {', '.join(f'{a}={w:g}' for a, w in weights.items())}")
    print()

    try:
        search = DFASearch(
            PREDICATES[args.predicate],
            max_length=args.max_length,
            weights=weights,
            max_size=args.population,
            seed=args.seed,
        )
    except WeightConfigurationError as e:
        print(f"Error in mutation weights: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"Error in search settings: {e}")
        sys.exit(1)

    result = search.run(args.generations, target_fitness=args.target, verbose=True)

    best = result.best_individual
    print(f"\nBest DFA found after {result.generation} generations:")
    print(f"  {best.dfa.to_string()}")
    print(f"Fitness: {best.fitness:.4f} ({best.dfa.num_states} states)")


def cmd_evaluate(args):
    """Score a DFA against one of the sample predicates."""
    if args.dfa in SAMPLE_DFAS:
        dfa = SAMPLE_DFAS[args.dfa]
    else:
        try:
            dfa = DFA.from_string(args.dfa)
        except ValueError as e:
            print(f"Error parsing DFA '{args.dfa}': {e}")
            sys.exit(1)

    try:
        inputs = all_bitstrings(args.max_length)
    except ValueError as e:
        print(f"Error in evaluation settings: {e}")
        sys.exit(1)
    result = evaluate_dfa(dfa, PREDICATES[args.predicate], inputs)

    print(f"Evaluating DFA: {dfa.to_string()}")
    print(f"  Predicate: {args.predicate}")
    print(f"  Inputs: {result.total} bitstrings of length <= {args.max_length}")
    print()
    print(f"Accuracy: {result.accuracy:.4f} ({result.correct}/{result.total})")
    print(f"States:   {result.num_states}")
    if result.mismatches:
        shown = result.mismatches[:args.show]
        print(f"Mismatches ({len(result.mismatches)}): {', '.join(repr(x) for x in shown)}"
              + (" ..." if len(result.mismatches) > len(shown) else ""))


def cmd_samples(args):
    """List the built-in sample DFAs."""
    print(f"{'Name':<14}{'States':<8}DFA")
    print("-" * 60)
    for name, dfa in SAMPLE_DFAS.items():
        print(f"{name:<14}{dfa.num_states:<8}{dfa.to_string()}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="DFA Discovery System - Evolve finite automata that reproduce a predicate"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Search command
    search_parser = subparsers.add_parser("search", help="Run evolutionary search")
    search_parser.add_argument("predicate", choices=sorted(PREDICATES), help="Target predicate")
    search_parser.add_argument("-l", "--max-length", type=int, default=4, help="Longest bitstring in the corpus")
    search_parser.add_argument("-p", "--population", type=int, default=8, help="Maximum population size")
    search_parser.add_argument("-g", "--generations", type=int, default=5000, help="Number of generations")
    search_parser.add_argument("--target", type=float, default=1.0, help="Stop once this fitness is reached")
    search_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    for action in ACTIONS:
        search_parser.add_argument(
            f"--{action}", type=float, default=STANDARD_WEIGHTS[action],
            help=f"Weight of the {action} mutation",
        )
    search_parser.set_defaults(func=cmd_search)

    # Evaluate command
    eval_parser = subparsers.add_parser("evaluate", help="Evaluate a DFA against a predicate")
    eval_parser.add_argument("dfa", type=str, help="Sample name or encoded DFA (e.g. '>q0+ 0:q0 1:q1; q1- 0:q0 1:q1')")
    eval_parser.add_argument("predicate", choices=sorted(PREDICATES), help="Reference predicate")
    eval_parser.add_argument("-l", "--max-length", type=int, default=4, help="Longest bitstring in the corpus")
    eval_parser.add_argument("--show", type=int, default=10, help="Number of mismatches to print")
    eval_parser.set_defaults(func=cmd_evaluate)

    # Samples command
    samples_parser = subparsers.add_parser("samples", help="List sample DFAs")
    samples_parser.set_defaults(func=cmd_samples)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
