import threading
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from SeedFoil.airfoil import create_airfoil
from SeedFoil.basis import bump_factors, naca_shape
from SeedFoil.errors import BasisNotBuilt
from SeedFoil.store import BasisFunctionStore, release_worker_store, worker_store

from conftest import cosine_grid, naca0012

t1fact, t2fact = bump_factors(0.025, 0.1)
x = cosine_grid()
z = naca0012(x)


def test_first_time_naca_build():
    store = BasisFunctionStore()
    assert not store.built
    store.create_shape_functions(x, x[::2], np.zeros(4), np.zeros(2), "naca", first_time = True)

    assert store.built
    assert store.top_shape_function.shape == (4, 101)
    assert store.bot_shape_function.shape == (2, 51)
    np.testing.assert_array_equal(store.bot_shape_function, naca_shape(x[::2], 2))


def test_first_time_hicks_henne_only_allocates():
    store = BasisFunctionStore()
    modes = [0.1, 0.5*t1fact, t2fact, 0.1, 0.2*t1fact, t2fact]
    store.create_shape_functions(x, x, modes, modes[:3], "hicks-henne", first_time = True)

    assert store.built
    assert store.top_shape_function.shape == (2, 101)
    assert np.all(store.top_shape_function == 0.0)

    store.create_shape_functions(x, x, modes, modes[:3], "hicks-henne", first_time = False)
    assert store.top_shape_function[0, 50] > 0.0


def test_deallocate():
    store = BasisFunctionStore()
    store.create_shape_functions(x, x, np.zeros(2), np.zeros(2), "naca", first_time = True)
    store.deallocate_shape_functions()
    assert not store.built
    assert store.family is None
    assert not store.built_for("naca", x, x, 2, 2)


def test_built_for():
    store = BasisFunctionStore()
    assert not store.built_for("naca", x, x, 2, 2)
    store.create_shape_functions(x, x, np.zeros(2), np.zeros(2), "naca", first_time = True)

    assert store.built_for("naca", x, x, 2, 2)
    assert store.built_for("NACA", x.copy(), x.copy(), 2, 2)
    assert not store.built_for("hicks-henne", x, x, 2, 2)
    assert not store.built_for("naca", x, x, 6, 2)
    assert not store.built_for("naca", x, x, 2, 0)
    assert not store.built_for("naca", np.linspace(0, 1, 101), x, 2, 2)


def test_recorded_grid_is_a_copy():
    grid = x.copy()
    store = BasisFunctionStore()
    store.create_shape_functions(grid, grid, np.zeros(2), np.zeros(2), "naca", first_time = True)
    grid[10] += 0.01
    assert not store.built_for("naca", grid, grid, 2, 2)


def test_rows_from_another_grid():
    store = BasisFunctionStore()
    store.create_shape_functions(x, x, np.zeros(2), np.zeros(2), "naca", first_time = True)
    other = np.linspace(0, 1, 101)

    top, bot = store.shape_functions("naca", x, x, 2, 1)
    assert top.shape == (2, 101) and bot.shape == (1, 101)
    with pytest.raises(BasisNotBuilt, match = "another seed grid"):
        store.shape_functions("naca", other, x, 2, 2)
    with pytest.raises(BasisNotBuilt, match = "another seed grid"):
        store.shape_functions("naca", x, x[::2], 2, 2)


def test_worker_store_is_per_thread():
    release_worker_store()
    store = worker_store()
    assert worker_store() is store

    others = []
    thread = threading.Thread(target = lambda: others.append(worker_store()))
    thread.start()
    thread.join()
    assert others[0] is not store

    release_worker_store()
    assert worker_store() is not store
    release_worker_store()


def _reconstruct(location):
    modes = [0.02, location*t1fact, t2fact]
    zt, _ = create_airfoil(x, z, x, -z, modes, modes, "hicks-henne", False)
    return zt


def test_concurrent_reconstruction_matches_serial():
    locations = np.tile(np.linspace(0.1, 0.9, 9), 8)

    serial_store = BasisFunctionStore()
    expected = [
        create_airfoil(x, z, x, -z, [0.02, loc*t1fact, t2fact], [0.0, 0.5*t1fact, t2fact],
                       "hicks-henne", False, store = serial_store)[0]
        for loc in locations
    ]

    with ThreadPoolExecutor(max_workers = 4) as executor:
        results = list(executor.map(_reconstruct, locations))

    for zt, zt_expected in zip(results, expected):
        np.testing.assert_array_equal(zt, zt_expected)
