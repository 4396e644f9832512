"""
SeedFoil.variables

Design variable bookkeeping for the optimizer setup phase.

Design vector layout (1-based positions as reported to the optimizer):
    NACA        | top strengths | bottom strengths | flap deflections | flap hinge
    Hicks-Henne | (strength, location, width) per top mode, then per bottom mode,
                  followed by the same flap block

Bottom entries are omitted for symmetrical airfoils. Flap deflections are
scaled by ffact, the hinge position by fxfact relative to min_flap_x.
"""

import logging

import numpy as np

from SeedFoil.basis import Family

logger = logging.getLogger(__name__)


def parametrization_dvs(nparams_top, nparams_bot, parametrization_type):
    """Number of design variables of the top and bottom surface."""
    family = Family.parse(parametrization_type)
    return nparams_top*family.dvs_per_mode, nparams_bot*family.dvs_per_mode


def constrained_dvs(parametrization_type, nfunctions_top, nfunctions_bot, symmetrical,
                    nflap_optimize = 0, int_x_flap_spec = 0):
    """
    1-based indices of the design variables with side constraints.

    For NACA only the flap variables are constrained, for Hicks-Henne also the
    location and width of every bump. Mode strengths are never constrained.
    """
    family = Family.parse(parametrization_type)

    # bottom modes actually used
    nbot_actual = 0 if symmetrical else nfunctions_bot
    nfuncs = nfunctions_top + nbot_actual

    constrained = []
    if family is Family.NACA:
        first_flap = nfuncs + 1
    else:
        for i in range(1, nfuncs + 1):
            constrained.append(3*(i-1) + 2)     # bump location
            constrained.append(3*(i-1) + 3)     # bump width
        first_flap = 3*nfuncs + 1

    constrained += list(range(first_flap, first_flap + nflap_optimize + int_x_flap_spec))
    return constrained


def initial_design(ndv, config):
    """
    Initial design vector x0.

    Mode strengths are 0 so x0 reproduces the seed airfoil. Bumps sit at
    mid-chord with the default width and flaps start at their configured
    deflection and hinge position.
    """
    t1fact, t2fact, ffact, fxfact = config.scale_factors
    nflap_optimize = config.nflap_optimize
    int_x_flap_spec = config.int_x_flap_spec

    x0 = np.zeros(ndv)
    if config.family is Family.NACA:
        nshape = ndv - nflap_optimize - int_x_flap_spec
    else:
        nfuncs = (ndv - nflap_optimize - int_x_flap_spec)//3
        nshape = 3*nfuncs
        x0[1:nshape:3] = 0.5*t1fact
        x0[2:nshape:3] = 1.0*t2fact

    for i, point in enumerate(config.flap_optimize_points):
        x0[nshape + i] = config.flap_degrees[point]*ffact
    if int_x_flap_spec == 1:
        x0[ndv-1] = (config.x_flap - config.min_flap_x)*fxfact

    return x0


def design_bounds(ndv, config):
    """
    Lower and upper bounds (xmin, xmax) of the design vector.

    The number of shape variables is derived as ndv - nflap_optimize for NACA
    and (ndv - 2*nflap_optimize)/3 modes for Hicks-Henne. Whenever this differs
    from the layout used by initial_design a warning is logged and the shape or
    flap bounds spill over into the neighbouring block.
    """
    t1fact, t2fact, ffact, fxfact = config.scale_factors
    initial_perturb = config.initial_perturb
    nflap_optimize = config.nflap_optimize
    int_x_flap_spec = config.int_x_flap_spec

    xmin = np.zeros(ndv)
    xmax = np.zeros(ndv)

    if config.family is Family.NACA:
        nshape = ndv - nflap_optimize
        expected = ndv - nflap_optimize - int_x_flap_spec

        xmin[:nshape] = -0.5*initial_perturb
        xmax[:nshape] = 0.5*initial_perturb
    else:
        nfuncs = max(int((ndv - nflap_optimize - nflap_optimize)/3), 0)
        nshape = 3*nfuncs
        expected = 3*((ndv - nflap_optimize - int_x_flap_spec)//3)

        xmin[0:nshape:3] = -initial_perturb/2
        xmax[0:nshape:3] = initial_perturb/2
        xmin[1:nshape:3] = 0.0001*t1fact
        xmax[1:nshape:3] = 1.0*t1fact
        xmin[2:nshape:3] = config.min_bump_width*t2fact
        xmax[2:nshape:3] = 10.0*t2fact

    if nshape != expected:
        logger.warning(
            f"{config.family.value} bounds use {nshape} shape variables but the design vector "
            f"holds {expected} (nflap_optimize = {nflap_optimize}, hinge = {int_x_flap_spec})"
        )

    xmin[nshape:ndv-int_x_flap_spec] = config.min_flap_degrees*ffact
    xmax[nshape:ndv-int_x_flap_spec] = config.max_flap_degrees*ffact
    if int_x_flap_spec == 1:
        xmin[ndv-1] = (config.min_flap_x - config.min_flap_x)*fxfact
        xmax[ndv-1] = (config.max_flap_x - config.min_flap_x)*fxfact

    return xmin, xmax
