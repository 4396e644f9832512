"""
SeedFoil.parametrization

The parameterization of one optimization run: family, mode counts and
symmetry are fixed when it is created, design variable counts, x0, bounds
and constrained indices are computed once.
"""

import logging
from typing import NamedTuple

import numpy as np

from SeedFoil.airfoil import create_airfoil
from SeedFoil.store import worker_store
from SeedFoil.variables import constrained_dvs, design_bounds, initial_design, parametrization_dvs

logger = logging.getLogger(__name__)


class DesignSplit(NamedTuple):
    """A design vector cut into its blocks, flaps in physical units."""
    modes_top: np.ndarray
    modes_bot: np.ndarray
    flap_degrees: np.ndarray
    x_flap: float


class Parametrization:
    def __init__(self, config, nfunctions_top, nfunctions_bot, symmetrical = False):
        self.config = config
        self.family = config.family
        self.shape = config.shape

        self.nfunctions_top = nfunctions_top
        self.nfunctions_bot = nfunctions_bot
        self.symmetrical = symmetrical

        nbot_actual = 0 if symmetrical else nfunctions_bot
        self.ndv_top, self.ndv_bot = parametrization_dvs(nfunctions_top, nbot_actual, self.family)
        self.ndv = self.ndv_top + self.ndv_bot + config.nflap_optimize + config.int_x_flap_spec
        self.n_var = self.ndv

        self.x0 = initial_design(self.ndv, config)
        self.xmin, self.xmax = design_bounds(self.ndv, config)
        self.constrained = constrained_dvs(self.family, nfunctions_top, nfunctions_bot, symmetrical,
                                           config.nflap_optimize, config.int_x_flap_spec)

        logger.debug(
            f"{self.family.value} parameterization: {self.ndv} design variables "
            f"({self.ndv_top} top, {self.ndv_bot} bottom), {len(self.constrained)} constrained"
        )

    def side_constraints(self):
        """Bounds of the constrained design variables, +-inf for the others."""
        xl = np.full(self.ndv, -np.inf)
        xu = np.full(self.ndv, np.inf)
        idx = np.array(self.constrained, dtype=int) - 1
        xl[idx] = self.xmin[idx]
        xu[idx] = self.xmax[idx]
        return xl, xu

    def clip(self, x):
        """Clamp the constrained design variables into their bounds."""
        return np.clip(x, *self.side_constraints())

    def split(self, x):
        x = np.asarray(x, dtype=float)
        if len(x) != self.ndv:
            raise ValueError(f"Design vector has {len(x)} entries, expected {self.ndv}")

        config = self.config
        _, _, ffact, fxfact = config.scale_factors

        nshape = self.ndv_top + self.ndv_bot
        modes_top = x[:self.ndv_top]
        modes_bot = x[self.ndv_top:nshape]

        flap_degrees = np.array(config.flap_degrees, dtype=float)
        flap_degrees[config.flap_optimize_points] = x[nshape:nshape + config.nflap_optimize]/ffact

        if config.int_x_flap_spec == 1:
            x_flap = config.min_flap_x + x[-1]/fxfact
        else:
            x_flap = config.x_flap

        return DesignSplit(modes_top, modes_bot, flap_degrees, x_flap)

    def setup_worker(self, seed, store = None):
        """First time build of the calling thread's shape functions for the seed grids."""
        if store is None:
            store = worker_store()
        modes = self.split(self.x0)
        store.create_shape_functions(seed.x_top, seed.x_bot, modes.modes_top, modes.modes_bot,
                                     self.shape, first_time = True)
        return store

    def ensure_worker(self, seed, store = None):
        """Store of the calling thread, rebuilt unless it holds this seed and parameterization."""
        if store is None:
            store = worker_store()
        nfunctions_bot = 0 if self.symmetrical else self.nfunctions_bot
        if not store.built_for(self.shape, seed.x_top, seed.x_bot, self.nfunctions_top, nfunctions_bot):
            self.setup_worker(seed, store)
        return store

    def create_airfoil(self, seed, x, store = None):
        """Perturbed copy of the seed airfoil and the split design vector."""
        split = self.split(x)
        store = self.ensure_worker(seed, store)
        zt_new, zb_new = create_airfoil(seed.x_top, seed.z_top, seed.x_bot, seed.z_bot,
                                        split.modes_top, split.modes_bot, self.shape,
                                        self.symmetrical, store = store)
        return seed.with_surfaces(zt_new, zb_new), split
