"""
SeedFoil.basis

A collection of seed airfoil perturbation shape functions.

A shape class includes the following:

1. A method to build the basis of one surface | construct_A(x, modes, out=None)
    Inputs are the surface x grid (leading edge to trailing edge) and the
    design variables of that surface. Returns an (n_modes, n_points) array.
2. A method to perturb a seed surface           | perturb(z, A, modes)
    Returns the new z values on the same grid.

NACA rows only depend on the grid and are normalized to a unit peak, the
strengths are applied in perturb. Hicks-Henne rows already carry their bump
strength and have to be rebuilt whenever bump location or width change.

"""

from enum import Enum

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.cm as cm

from SeedFoil.errors import UnrecognizedParametrization


class Family(Enum):
    NACA = "naca"
    HICKS_HENNE = "hicks-henne"

    @classmethod
    def parse(cls, name):
        """Family from a case-insensitive name, UnrecognizedParametrization otherwise."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise UnrecognizedParametrization(name) from None

    @property
    def dvs_per_mode(self):
        return 1 if self is Family.NACA else 3


def bump_factors(initial_perturb, min_bump_width):
    """Scale factors between design variable units and bump location / width."""
    t1fact = initial_perturb/(1.0 - 0.001)
    t2fact = initial_perturb/(10.0 - min_bump_width)
    return t1fact, t2fact


def normalized_coordinate(x):
    x = np.asarray(x, dtype=float)
    chord = x[-1] - x[0]
    return (x - x[0])/chord


def _buffer(out, n_modes, n_points):
    # reuse the caller's array when it already has the right shape
    if out is not None and out.shape == (n_modes, n_points):
        return out
    return np.zeros((n_modes, n_points))


## NACA SHAPE FUNCTIONS ##
def naca_shape(x, n_modes, out=None):
    """
    Polynomial modes on the grid x, each row scaled to a peak magnitude of 1.

    Mode 1 is sqrt(xs) - xs. From mode 2 on whole-powered xs**p*(1-xs) and
    fractional-powered xs**(1/(p+2)) - xs**(1/(p+1)) modes alternate, p
    starting at 1 and advancing after every fractional mode.
    """
    xs = normalized_coordinate(x)
    A = _buffer(out, n_modes, len(xs))
    if n_modes == 0:
        return A

    A[0] = np.sqrt(xs) - xs

    power = 1
    whole = True
    for i in range(1, n_modes):
        if whole:
            A[i] = xs**power * (1 - xs)
        else:
            A[i] = xs**(1/(power + 2)) - xs**(1/(power + 1))
            power += 1
        whole = not whole

    A /= np.vstack(np.amax(np.abs(A), axis=1))
    return A


## HICKS-HENNE SHAPE FUNCTIONS ##
def hicks_henne_shape(x, modes, initial_perturb, min_bump_width, out=None):
    """
    Hicks-Henne bumps on the grid x, one row per (strength, location, width) triple.

    The first and last grid points get no contribution.
    """
    xs = normalized_coordinate(x)[1:-1]
    modes = np.asarray(modes, dtype=float).reshape(-1, 3)
    t1fact, t2fact = bump_factors(initial_perturb, min_bump_width)

    A = _buffer(out, len(modes), len(xs) + 2)
    A[:, 0] = 0.0
    A[:, -1] = 0.0

    for i, (st, t1, t2) in enumerate(modes):
        t1 = t1/t1fact
        t2 = t2/t2fact

        # bump location strictly inside the chord, width strictly positive
        if t1 <= 0:
            t1 = 0.001
        if t1 >= 1:
            t1 = 0.999
        if t2 <= 0:
            t2 = 0.001

        power = np.log10(0.5)/np.log10(t1)
        A[i, 1:-1] = st*np.sin(np.pi*xs**power)**t2

    return A


class NACA:
    """Polynomial basis: built once per thread, strengths applied on reconstruction."""
    family = Family.NACA
    dvs_per_mode = 1
    rebuild_every_call = False

    def __init__(self, initial_perturb = 0.025, min_bump_width = 0.1):
        self.initial_perturb = initial_perturb
        self.min_bump_width = min_bump_width

    def n_modes(self, modes):
        return len(modes)

    def construct_A(self, x, modes, out = None):
        return naca_shape(x, self.n_modes(modes), out = out)

    def perturb(self, z, A, modes):
        return np.asarray(z, dtype=float) + np.asarray(modes, dtype=float) @ A


class HicksHenne:
    """Bump basis: rebuilt on every reconstruction, rows already scaled by strength."""
    family = Family.HICKS_HENNE
    dvs_per_mode = 3
    rebuild_every_call = True

    def __init__(self, initial_perturb = 0.025, min_bump_width = 0.1):
        self.initial_perturb = initial_perturb
        self.min_bump_width = min_bump_width

    def n_modes(self, modes):
        return len(modes)//3

    def construct_A(self, x, modes, out = None):
        return hicks_henne_shape(x, modes, self.initial_perturb, self.min_bump_width, out = out)

    def perturb(self, z, A, modes):
        return np.asarray(z, dtype=float) + A.sum(axis = 0)


SHAPES = {
    Family.NACA: NACA,
    Family.HICKS_HENNE: HicksHenne,
}


def shape_class(shape, initial_perturb = 0.025, min_bump_width = 0.1):
    """Shape class instance for a family name, Family or an existing instance."""
    if isinstance(shape, (NACA, HicksHenne)):
        return shape
    return SHAPES[Family.parse(shape)](initial_perturb, min_bump_width)


def plot_shapes(x, shape, modes):
    shape = shape_class(shape)
    A = shape.construct_A(x, modes)

    fig = plt.figure()
    for i, (y, color) in enumerate(zip(A, cm.hsv(np.linspace(0, 1, len(A), endpoint = False)))):
        plt.plot(x, y, color = color)
        j = np.argmax(np.abs(y))
        plt.text(x[j], y[j], f"{i+1}")
    plt.xlabel("x")
    plt.title(shape.family.value)
    return fig
