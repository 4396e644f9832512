"""Configuration for SeedFoil.

This module provides the parameterization settings shared by the setup phase
(design variable counts, initial guess, bounds) and the reconstruction of
candidate airfoils.
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, NamedTuple, Union

from SeedFoil.basis import Family, bump_factors, shape_class

logger = logging.getLogger(__name__)


class ScaleFactors(NamedTuple):
    """Factors between design variable units and physical quantities."""
    t1fact: float
    t2fact: float
    ffact: float
    fxfact: float


@dataclass
class ParametrizationConfig:
    """Parameterization settings, read-only once an optimization is running.

    Attributes:
        shape_functions: 'naca' or 'hicks-henne' (case-insensitive)
        initial_perturb: Perturbation scale of the design variables
        min_bump_width: Smallest allowed Hicks-Henne bump width
        min_flap_degrees: Lower flap deflection bound in degrees
        max_flap_degrees: Upper flap deflection bound in degrees
        flap_degrees: Target flap deflection of every operating point
        flap_optimize_points: 0-based operating points whose flap deflection is optimized
        x_flap: Flap hinge position as a chord fraction
        min_flap_x: Lower hinge position bound
        max_flap_x: Upper hinge position bound
        optimize_flap_hinge: Whether the hinge position is a design variable
    """

    shape_functions: Union[Family, str] = Family.HICKS_HENNE
    initial_perturb: float = 0.025
    min_bump_width: float = 0.1
    min_flap_degrees: float = -5.0
    max_flap_degrees: float = 15.0
    flap_degrees: List[float] = field(default_factory=list)
    flap_optimize_points: List[int] = field(default_factory=list)
    x_flap: float = 0.75
    min_flap_x: float = 0.65
    max_flap_x: float = 0.85
    optimize_flap_hinge: bool = False

    def __post_init__(self) -> None:
        """Validate the configuration after initialization."""
        self.shape_functions = Family.parse(self.shape_functions)

        if self.initial_perturb <= 0:
            raise ValueError("initial_perturb must be positive")

        if self.min_bump_width >= 10:
            raise ValueError("min_bump_width must be smaller than 10")

        if self.max_flap_degrees <= self.min_flap_degrees:
            raise ValueError("max_flap_degrees must be larger than min_flap_degrees")

        if self.max_flap_x <= self.min_flap_x:
            raise ValueError("max_flap_x must be larger than min_flap_x")

        self.flap_degrees = [float(degrees) for degrees in self.flap_degrees]
        self.flap_optimize_points = [int(point) for point in self.flap_optimize_points]
        for point in self.flap_optimize_points:
            if not 0 <= point < len(self.flap_degrees):
                raise ValueError(f"Flap optimize point {point} has no target flap deflection")

    @classmethod
    def from_dict(cls, settings: Mapping[str, Any]) -> "ParametrizationConfig":
        """Create a configuration from a mapping, ignoring unknown keys."""
        names = {f.name for f in fields(cls)}
        unknown = set(settings) - names
        if unknown:
            logger.debug(f"Ignoring unknown parameterization settings: {sorted(unknown)}")
        return cls(**{key: value for key, value in settings.items() if key in names})

    def to_dict(self) -> Dict[str, Any]:
        settings = {f.name: getattr(self, f.name) for f in fields(self)}
        settings["shape_functions"] = self.shape_functions.value
        return settings

    @property
    def family(self) -> Family:
        return self.shape_functions

    @property
    def shape(self):
        """Shape class of the configured family."""
        return shape_class(self.shape_functions, self.initial_perturb, self.min_bump_width)

    @property
    def nflap_optimize(self) -> int:
        return len(self.flap_optimize_points)

    @property
    def int_x_flap_spec(self) -> int:
        return int(self.optimize_flap_hinge)

    @property
    def scale_factors(self) -> ScaleFactors:
        t1fact, t2fact = bump_factors(self.initial_perturb, self.min_bump_width)
        ffact = self.initial_perturb/(self.max_flap_degrees - self.min_flap_degrees)
        fxfact = self.initial_perturb/(self.max_flap_x - self.min_flap_x)
        return ScaleFactors(t1fact, t2fact, ffact, fxfact)
