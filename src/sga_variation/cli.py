"""Command-line entry point for running crossover experiments.

Usage:
    sga-variation --function function3 --crossover three_parent
    sga-variation --function function2 --representation continuous --crossover blend --jobs -1
    python -m sga_variation --list-operators

Crossover operators accept their name, integer id or short alias (``spc``,
``dpcrs``, ``wac``, ...). An unknown operator falls back to the
representation's default with a warning.
"""

import argparse
import logging
import sys

from sga_variation.config import GAConfig
from sga_variation.exceptions import SGAVariationError
from sga_variation.experiment import REPRESENTATIONS, run_experiment
from sga_variation.functions import FunctionRegistry
from sga_variation.registry import CrossoverRegistry


def build_parser() -> argparse.ArgumentParser:
    defaults = GAConfig()
    parser = argparse.ArgumentParser(
        prog="sga-variation",
        description="Compare GA crossover operators on benchmark functions",
    )
    parser.add_argument("--function", choices=FunctionRegistry.list(), default="function1")
    parser.add_argument("--representation", choices=REPRESENTATIONS, default="binary")
    parser.add_argument("--crossover", default=None, help="operator name, id or alias (default: representation default)")
    parser.add_argument("--trials", type=int, default=defaults.n_trials)
    parser.add_argument("--generations", type=int, default=defaults.max_generations)
    parser.add_argument("--pop-size", type=int, default=defaults.pop_size)
    parser.add_argument("--crossover-prob", type=float, default=defaults.crossover_prob)
    parser.add_argument("--mutation-prob", type=float, default=defaults.mutation_prob)
    parser.add_argument("--max-retries", type=int, default=defaults.max_retries)
    parser.add_argument("--gray", action="store_true", help="decode binary chromosomes as gray code")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--jobs", type=int, default=1, help="parallel trial workers, -1 for all cores")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--list-operators", action="store_true", help="print the operator catalog and exit")
    return parser


def _operator_listing() -> str:
    lines = []
    for kind in CrossoverRegistry.list():
        lines.append(f"{type(kind).__name__:<20} {kind.value:>2}  {kind.name.lower()}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the experiment and print its report.

    Returns:
        Process exit code: 0 on success, 1 on a configuration or run error.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s - %(levelname)s - %(message)s")

    if args.list_operators:
        print(_operator_listing())
        return 0

    representation = args.representation
    crossover = args.crossover
    if crossover is None:
        crossover = "single_point" if representation == "binary" else "whole_arithmetic"

    try:
        config = GAConfig(
            pop_size=args.pop_size,
            max_generations=args.generations,
            crossover_prob=args.crossover_prob,
            mutation_prob=args.mutation_prob,
            n_trials=args.trials,
            is_gray=args.gray,
            max_retries=args.max_retries,
        )
        function = FunctionRegistry.get(args.function)
        result = run_experiment(
            function,
            crossover,
            config,
            seed=args.seed,
            representation=representation,
            n_jobs=args.jobs,
        )
    except SGAVariationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result.report())
    return 0


if __name__ == "__main__":
    sys.exit(main())
