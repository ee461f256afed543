"""Experiment driver: repeated independent trials of one operator on one function.

A trial builds a fresh population and runs ``max_generations`` select and
reproduce cycles. Before each cycle it records every member's objective value
and tracks the best and worst individuals seen. An experiment repeats the
trial ``n_trials`` times with independent generators spawned from one seed,
optionally in parallel, and aggregates the outcome.

Example:
    >>> from sga_variation.config import GAConfig
    >>> from sga_variation.functions import Function1
    >>> result = run_experiment(Function1(), "ring", GAConfig(n_trials=3), seed=0)
    >>> len(result)
    3
    >>> print(result.report())  # doctest: +SKIP
"""

import logging
from collections.abc import Callable

import numpy as np

from sga_variation.config import GAConfig
from sga_variation.exceptions import ConfigurationError
from sga_variation.population import BinaryPopulation, ContinuousPopulation, Population
from sga_variation.protocols import FitnessFunction
from sga_variation.registry import BinaryCrossover, ContinuousCrossover, resolve_crossover
from sga_variation.results import ExperimentResult, IndividualSnapshot, TrialResult, is_better

logger = logging.getLogger(__name__)

REPRESENTATIONS = ("binary", "continuous")

_CROSSOVER_KINDS = {
    "binary": BinaryCrossover,
    "continuous": ContinuousCrossover,
}


def _check_representation(representation: str) -> None:
    if representation not in _CROSSOVER_KINDS:
        raise ConfigurationError(
            f"representation must be one of {', '.join(REPRESENTATIONS)}, got {representation!r}"
        )


def make_population(
    function: FitnessFunction,
    crossover,
    config: GAConfig,
    rng: np.random.Generator | int | None = None,
    representation: str = "binary",
) -> Population:
    """Build the population type for ``representation`` from a run configuration.

    Raises:
        ConfigurationError: If the representation is unknown or the population
            rejects the configuration.
    """
    _check_representation(representation)
    if representation == "binary":
        return BinaryPopulation(
            function,
            crossover,
            config.pop_size,
            config.is_gray,
            rng=rng,
            crossover_prob=config.crossover_prob,
            mutation_prob=config.mutation_prob,
        )
    return ContinuousPopulation(
        function,
        crossover,
        config.pop_size,
        rng=rng,
        crossover_prob=config.crossover_prob,
        mutation_prob=config.mutation_prob,
        max_retries=config.max_retries,
    )


def run_trial(
    function: FitnessFunction,
    crossover,
    config: GAConfig | None = None,
    rng: np.random.Generator | int | None = None,
    representation: str = "binary",
    callback: Callable[[Population, int], bool] | None = None,
) -> TrialResult:
    """Run one trial and record best, worst and mean objective values.

    Args:
        function: Fitness function to optimize.
        crossover: Crossover kind, integer id or name for ``representation``.
        config: Run parameters. Defaults to ``GAConfig()``.
        rng: Generator or seed. If None, uses system entropy.
        representation: ``"binary"`` or ``"continuous"``.
        callback: Optional callback called at the start of each generation.
            Signature: (population, generation) -> bool
            If callback returns True, the trial stops before recording that
            generation.

    Returns:
        TrialResult with snapshots of the best and worst individuals over all
        recorded generations. The first member of the initial population is
        the starting point for both, so it is reported even when no
        generation runs.
    """
    if config is None:
        config = GAConfig()
    population = make_population(function, crossover, config, rng, representation)

    best = worst = population.members[0]
    objective_sum = 0.0
    evaluations = 0
    generations = 0

    for gen in range(config.max_generations):
        if callback is not None and callback(population, gen):
            logger.info("Callback requested stop at generation %d", gen)
            break

        gen_best, gen_worst = population.best(), population.worst()
        if is_better(gen_best.objective_value, best.objective_value, function.is_maximize):
            best = gen_best
        if is_better(worst.objective_value, gen_worst.objective_value, function.is_maximize):
            worst = gen_worst
        objective_sum += float(population.objective_values.sum())
        evaluations += len(population)

        population.select()
        population.reproduce()
        generations += 1

    return TrialResult(
        best=IndividualSnapshot.from_individual(best),
        worst=IndividualSnapshot.from_individual(worst),
        objective_sum=objective_sum,
        evaluations=evaluations,
        generations=generations,
    )


def run_experiment(
    function: FitnessFunction,
    crossover,
    config: GAConfig | None = None,
    seed: int | None = None,
    representation: str = "binary",
    n_jobs: int | None = None,
) -> ExperimentResult:
    """Run ``config.n_trials`` independent trials and aggregate them.

    Each trial gets its own generator spawned from ``SeedSequence(seed)``, so
    results for a given seed do not depend on ``n_jobs``.

    Args:
        function: Fitness function to optimize.
        crossover: Crossover kind, integer id or name. Unknown values fall
            back to the representation's default operator with a warning.
        config: Run parameters. Defaults to ``GAConfig()``.
        seed: Root seed. If None, uses system entropy.
        representation: ``"binary"`` or ``"continuous"``.
        n_jobs: Number of joblib workers. None or 1 runs trials sequentially;
            -1 uses all CPU cores.

    Returns:
        ExperimentResult over all trials.

    Raises:
        ConfigurationError: On an unknown representation or invalid run parameters.
        RetryLimitExceededError: If a bounded continuous crossover gives up in any trial.
    """
    if config is None:
        config = GAConfig()
    _check_representation(representation)
    kind = resolve_crossover(crossover, _CROSSOVER_KINDS[representation])

    seeds = np.random.SeedSequence(seed).spawn(config.n_trials)
    logger.info(
        "Running %d trials of %s on %s (%s, pop_size=%d, generations=%d)",
        config.n_trials,
        kind.name,
        type(function).__name__,
        representation,
        config.pop_size,
        config.max_generations,
    )

    if n_jobs is None or n_jobs == 1:
        trials = []
        for i, trial_seed in enumerate(seeds):
            trial = run_trial(function, kind, config, np.random.default_rng(trial_seed), representation)
            logger.info(
                "Trial %d/%d: best=%.6f worst=%.6f mean=%.6f",
                i + 1,
                config.n_trials,
                trial.best.objective_value,
                trial.worst.objective_value,
                trial.mean_objective,
            )
            trials.append(trial)
    else:
        from joblib import Parallel, delayed

        trials = Parallel(n_jobs=n_jobs)(  # type: ignore[assignment]
            delayed(run_trial)(function, kind, config, np.random.default_rng(s), representation) for s in seeds
        )
        logger.info("Completed %d trials with n_jobs=%d", len(trials), n_jobs)

    return ExperimentResult(function=function, crossover=kind, trials=tuple(trials))
