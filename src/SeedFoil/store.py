"""
Per-thread storage of the top and bottom surface shape functions.

Every worker thread owns one BasisFunctionStore. Hicks-Henne rows are
rewritten in place on each reconstruction, so stores are never shared
between threads.
"""

import logging
import threading

import numpy as np

from SeedFoil.basis import shape_class
from SeedFoil.errors import BasisNotBuilt

logger = logging.getLogger(__name__)

# Thread-local storage holding each worker's store
_worker_context = threading.local()


class BasisFunctionStore:
    """Top and bottom basis arrays of shape (n_modes, n_points) for one thread."""

    def __init__(self):
        self.top_shape_function = None
        self.bot_shape_function = None
        self.family = None
        self.x_top = None
        self.x_bot = None
        self.n_modes = None

    @property
    def built(self):
        return self.top_shape_function is not None

    def allocate_shape_functions(self, nmodestop, nmodesbot, npointst, npointsb):
        self.top_shape_function = np.zeros((nmodestop, npointst))
        self.bot_shape_function = np.zeros((nmodesbot, npointsb))
        logger.debug(
            f"Allocated shape functions ({nmodestop}x{npointst} top, {nmodesbot}x{npointsb} bottom) "
            f"on {threading.current_thread().name}"
        )

    def deallocate_shape_functions(self):
        self.top_shape_function = None
        self.bot_shape_function = None
        self.family = None
        self.x_top = None
        self.x_bot = None
        self.n_modes = None

    def create_shape_functions(self, xtop, xbot, modestop, modesbot, shape, first_time):
        """
        Create the shape functions of both surfaces.

        On the first call of a thread the arrays are allocated. NACA shape
        functions are built on that first call, Hicks-Henne shape functions
        on every later call since they depend on the mode values.
        """
        shape = shape_class(shape)
        nmodestop = shape.n_modes(modestop)
        nmodesbot = shape.n_modes(modesbot)

        if first_time:
            self.allocate_shape_functions(nmodestop, nmodesbot, len(xtop), len(xbot))
            self._record(shape, xtop, xbot, nmodestop, nmodesbot)

        if not first_time or not shape.rebuild_every_call:
            self.top_shape_function = shape.construct_A(xtop, modestop, out = self.top_shape_function)
            self.bot_shape_function = shape.construct_A(xbot, modesbot, out = self.bot_shape_function)
            self._record(shape, xtop, xbot, nmodestop, nmodesbot)

    def _record(self, shape, xtop, xbot, nmodestop, nmodesbot):
        self.family = shape.family
        self.x_top = np.array(xtop, dtype=float)
        self.x_bot = np.array(xbot, dtype=float)
        self.n_modes = (nmodestop, nmodesbot)

    def built_for(self, shape, xtop, xbot, nmodestop, nmodesbot):
        """Whether the store was last built for this family, these grids and mode counts."""
        shape = shape_class(shape)
        return (
            self.built
            and self.family is shape.family
            and self.n_modes == (nmodestop, nmodesbot)
            and np.array_equal(self.x_top, xtop)
            and np.array_equal(self.x_bot, xbot)
        )

    def shape_functions(self, shape, xtop, xbot, nmodestop, nmodesbot):
        """Rows of the already built basis, BasisNotBuilt if the store cannot provide them."""
        shape = shape_class(shape)
        if not self.built:
            raise BasisNotBuilt(
                f"No {shape.family.value} shape functions on {threading.current_thread().name}; "
                "build them once before reconstructing airfoils"
            )
        if self.family is not shape.family:
            raise BasisNotBuilt(
                f"Shape functions were built for {self.family.value}, not {shape.family.value}"
            )
        if not (np.array_equal(self.x_top, xtop) and np.array_equal(self.x_bot, xbot)):
            raise BasisNotBuilt("Shape functions were built on another seed grid")

        top = self._rows(self.top_shape_function, nmodestop, len(xtop), "top")
        bot = self._rows(self.bot_shape_function, nmodesbot, len(xbot), "bottom")
        return top, bot

    @staticmethod
    def _rows(A, n_modes, n_points, side):
        if n_modes > A.shape[0] or n_points != A.shape[1]:
            raise BasisNotBuilt(
                f"{side} shape functions are {A.shape[0]}x{A.shape[1]}, "
                f"requested {n_modes} modes on {n_points} points"
            )
        return A[:n_modes]


def worker_store():
    """Store of the calling thread, created on first request."""
    store = getattr(_worker_context, "store", None)
    if store is None:
        store = BasisFunctionStore()
        _worker_context.store = store
        logger.debug(f"Created basis store for {threading.current_thread().name}")
    return store


def release_worker_store():
    """Drop the calling thread's store; the next request starts from scratch."""
    store = getattr(_worker_context, "store", None)
    if store is not None:
        store.deallocate_shape_functions()
        del _worker_context.store
        logger.debug(f"Released basis store of {threading.current_thread().name}")
