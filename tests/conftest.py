import numpy as np
import pytest

from SeedFoil import Airfoil


def cosine_grid(n = 101):
    t = np.linspace(0, 1, n)
    return 0.5 - 0.5*np.cos(np.pi*t)


def naca0012(x):
    return 0.6*(0.2969*np.sqrt(x) - 0.1260*x - 0.3516*x**2 + 0.2843*x**3 - 0.1015*x**4)


@pytest.fixture
def x_grid():
    return cosine_grid()


@pytest.fixture
def seed():
    x = cosine_grid()
    z = naca0012(x)
    return Airfoil.from_surfaces(x, z, x, -z, name = "naca0012")
