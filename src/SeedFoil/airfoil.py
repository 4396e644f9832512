from shapely.geometry import Polygon
import numpy as np

from SeedFoil.basis import shape_class
from SeedFoil.store import worker_store


class Airfoil:
    def __init__(self,
                 name = None, x = None, z = None):
        if name:
            self.name = name
        else:
            self.name = "Airfoil"
        self.x = np.asarray(x, dtype=float)
        self.z = np.asarray(z, dtype=float)

        le_index = np.argmin(self.x) # split top and bottom surfaces, both start at the LE
        self.x_top = np.flip(self.x[:le_index+1])
        self.z_top = np.flip(self.z[:le_index+1])
        self.x_bot = self.x[le_index:]
        self.z_bot = self.z[le_index:]

        for side, x_side in (("top", self.x_top), ("bottom", self.x_bot)):
            if len(x_side) < 2:
                raise ValueError(f"{self.name}: {side} surface needs at least 2 points")
            if x_side[-1] == x_side[0]:
                raise ValueError(f"{self.name}: {side} surface has zero chord")

    @classmethod
    def from_surfaces(cls, x_top, z_top, x_bot, z_bot, name = None):
        """Airfoil from LE-to-TE surfaces sharing the leading edge point."""
        x = np.concatenate([np.flip(x_top), np.asarray(x_bot)[1:]])
        z = np.concatenate([np.flip(z_top), np.asarray(z_bot)[1:]])
        return cls(name, x, z)

    def with_surfaces(self, z_top, z_bot, name = None):
        """Copy of this airfoil with new z values on the same grids."""
        x = np.concatenate([np.flip(self.x_top), self.x_bot[1:]])
        z = np.concatenate([np.flip(z_top), np.asarray(z_bot)[1:]])
        return Airfoil(name or self.name, x, z)

    def is_valid(self):
        return Polygon(np.column_stack([self.x,self.z])).is_valid

    def max_thickness(self):
        t = self.z_top - np.interp(self.x_top, self.x_bot, self.z_bot)
        t_index = np.argmax(t)
        return t[t_index], self.x_top[t_index]


def create_airfoil(xt_seed, zt_seed, xb_seed, zb_seed, modest, modesb, shapetype,
                   symmetrical = False, store = None):
    """
    Perturb the seed surfaces with the given modes, returns (zt_new, zb_new).

    Hicks-Henne shape functions are rebuilt from the modes on every call.
    NACA shape functions must already be built in the store of the calling
    thread (see BasisFunctionStore.create_shape_functions), otherwise
    BasisNotBuilt is raised. A symmetrical airfoil gets the mirrored top
    surface as its bottom surface.
    """
    shape = shape_class(shapetype)
    if store is None:
        store = worker_store()

    modest = np.asarray(modest, dtype=float)
    modesb = np.asarray(modesb, dtype=float)

    if shape.rebuild_every_call:
        store.create_shape_functions(xt_seed, xb_seed, modest, modesb, shape, first_time = False)
        top_shape_function = store.top_shape_function
        bot_shape_function = store.bot_shape_function
    else:
        nmodesb = 0 if symmetrical else shape.n_modes(modesb)
        top_shape_function, bot_shape_function = store.shape_functions(
            shape, xt_seed, xb_seed, shape.n_modes(modest), nmodesb)

    zt_new = shape.perturb(zt_seed, top_shape_function, modest)

    if symmetrical:
        zb_new = -zt_new[:len(zb_seed)]
    else:
        zb_new = shape.perturb(zb_seed, bot_shape_function, modesb)

    return zt_new, zb_new
