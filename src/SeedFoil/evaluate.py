"""
SeedFoil.evaluate

Parallel evaluation of a population of design vectors. Every dask worker
thread reconstructs airfoils with its own basis store, built on the first
candidate it receives and rebuilt when the seed or parameterization changes.
"""

import logging
import traceback

import numpy as np
from dask.distributed import Client, LocalCluster, as_completed
from rich.progress import Progress, MofNCompleteColumn, TextColumn, TimeRemainingColumn

logger = logging.getLogger(__name__)


def evaluate_design(parametrization, seed, x, evaluator, n_obj = 1):
    """
    Reconstruct one candidate and score it, returns (f, success).

    Self-intersecting airfoils are scored inf without calling the evaluator.
    """
    airfoil, split = parametrization.create_airfoil(seed, x)

    if not airfoil.is_valid():
        logger.warning(f"{airfoil.name}: perturbed surfaces intersect, skipping evaluation")
        return np.inf*np.ones(n_obj), 0

    try:
        f = np.atleast_1d(np.asarray(evaluator(airfoil, split), dtype=float))
        return f, 1
    except Exception:
        logger.error(f"Evaluation of {airfoil.name} failed\n{traceback.format_exc()}")
        return np.inf*np.ones(n_obj), 0


def evaluate_population(parametrization, seed, X, evaluator, n_obj = 1,
                        client = None, threads = None, progress = True):
    """
    Score every row of X with evaluator(airfoil, split).

    Without a client a threaded LocalCluster is started for the call and
    closed afterwards. Returns the objective array (one row per design, inf
    for failed evaluations) and the success flags, in the order of X.
    """
    X = np.atleast_2d(np.asarray(X, dtype=float))

    cluster = None
    if client is None:
        cluster = LocalCluster(n_workers = 1, threads_per_worker = threads, processes = False,
                               dashboard_address = None)
        client = Client(cluster)

    try:
        futures = [
            client.submit(evaluate_design, parametrization, seed, x, evaluator, n_obj, pure = False)
            for x in X
        ]

        if progress:
            with Progress(TextColumn("SEEDFOIL | {task.description}"), MofNCompleteColumn(),
                          TimeRemainingColumn(elapsed_when_finished = True)) as bar:
                task = bar.add_task("[red]Evaluating", total = len(futures))
                for _ in as_completed(futures):
                    bar.update(task, advance = 1)

        results = client.gather(futures)
    finally:
        if cluster is not None:
            client.close()
            cluster.close()

    F = np.vstack([f for f, _ in results])
    success = np.array([ok for _, ok in results], dtype=bool)
    logger.info(f"{success.sum()}/{len(success)} successful evaluations")

    return F, success
