"""
SeedFoil

Perturbs a seed airfoil with NACA or Hicks-Henne shape functions for shape
optimization. A Parametrization is created once per run; every worker
thread then builds its own shape functions and reconstructs candidates.
"""

from SeedFoil.airfoil import Airfoil, create_airfoil
from SeedFoil.basis import Family, HicksHenne, NACA, hicks_henne_shape, naca_shape
from SeedFoil.config import ParametrizationConfig
from SeedFoil.errors import BasisNotBuilt, ParametrizationError, UnrecognizedParametrization
from SeedFoil.parametrization import DesignSplit, Parametrization
from SeedFoil.store import BasisFunctionStore, release_worker_store, worker_store
from SeedFoil.variables import constrained_dvs, design_bounds, initial_design, parametrization_dvs
