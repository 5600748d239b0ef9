"""
Exception and warning types raised by the genome evolution models.
"""


class ValidationError(ValueError):
    """Raised when a locus, genotype or configuration violates its invariants."""


class SamplingInfeasibilityError(RuntimeError):
    """Raised when more insertion sites are requested than the genome has loci."""


class GenotypeConfigurationWarning(UserWarning):
    """Explicit genotype supplied together with genotype generation parameters."""


class DegenerateWeightsWarning(UserWarning):
    """Ancestor sampling fell back to uniform weights."""
