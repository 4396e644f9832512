"""
SeedFoil.problem

Hands a parameterization over to pymoo: number of variables, bounds, an
initial population around the seed airfoil and the side constraint repair.
"""

import numpy as np

from pymoo.core.problem import Problem as pymoo_Problem
from pymoo.core.repair import Repair
from pymoo.core.population import Population

from SeedFoil.evaluate import evaluate_population


class ShapeProblem(pymoo_Problem):
    def __init__(self, parametrization, seed = None, evaluator = None, n_obj = 1, client = None, **kwargs):
        """
        seed, evaluator : optional, lets pymoo evaluate candidates itself through
                          evaluate_population. Without them the optimizer owns the
                          evaluation (ask / tell).
        """
        self.parametrization = parametrization
        self.seed_airfoil = seed
        self.evaluator = evaluator
        self.client = client

        super().__init__(n_var = parametrization.ndv, n_obj = n_obj,
                         xl = parametrization.xmin, xu = parametrization.xmax, **kwargs)

    def initial_population(self, pop_size, seed = None):
        """x0 followed by pop_size-1 designs drawn uniformly within the bounds."""
        rng = np.random.default_rng(seed)
        X = np.tile(self.parametrization.x0, (pop_size, 1))
        if pop_size > 1:
            X[1:] = rng.uniform(self.xl, self.xu, size = (pop_size - 1, self.n_var))
        return Population.new("X", X)

    def _evaluate(self, X, out, *args, **kwargs):
        if self.evaluator is None:
            raise RuntimeError("ShapeProblem without evaluator is evaluated by the caller")
        F, _ = evaluate_population(self.parametrization, self.seed_airfoil, X, self.evaluator,
                                   n_obj = self.n_obj, client = self.client, progress = False)
        out["F"] = F


class SideConstraintRepair(Repair):
    """Clamps bump locations, widths and flap variables into their bounds."""

    def __init__(self, parametrization):
        super().__init__()
        self.parametrization = parametrization

    def _do(self, problem, X, **kwargs):
        return self.parametrization.clip(X)
