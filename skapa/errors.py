"""Exception hierarchy for the enclosure generator."""


class SkapaError(Exception):
    """Base class for all generator errors."""


class KernelError(SkapaError):
    """The CSG kernel could not be loaded or initialized."""


class GenerationError(SkapaError):
    """A generation pass failed and produced no model."""
