"""
Exception types raised by the simulation routines

All of them derive from ``ValueError`` so callers that already guard
parameter handling with ``except ValueError`` keep working.
"""


class SimulationError(ValueError):
    """Base class for parameter failures in genarch"""


class InvalidParameter(SimulationError):
    """Out-of-range frequency, proportion, count or array shape"""


class NonPositiveVariance(SimulationError):
    """Heritability or genetic variance leaves the noise model degenerate"""


class NoCausalVariants(SimulationError):
    """Causal proportion rounds down to zero variants"""
