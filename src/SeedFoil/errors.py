"""
SeedFoil.errors

Exceptions raised by the parameterization core.
"""


class ParametrizationError(Exception):
    """Base class for parameterization errors."""


class UnrecognizedParametrization(ParametrizationError, ValueError):
    """A shape function family name is neither 'naca' nor 'hicks-henne'."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Shape function {str(name).strip()} not recognized.")


class BasisNotBuilt(ParametrizationError, RuntimeError):
    """The calling thread has no (or a mismatched) basis for the requested modes."""
