"""
Models package for transposon-driven bacterial genome evolution.

This package contains the data models and simulation logic for:
- Loci and their fragmentation by transposon insertion
- Genomes, fitness aggregation and default genotype generation
- Individual bacteria and their copy-on-reproduction semantics
- The transposition mutation engine
- Fitness-weighted ancestor selection and the Wright-Fisher population loop
- Per-bacterium composition summaries
"""

from .errors import (
    ValidationError, SamplingInfeasibilityError,
    GenotypeConfigurationWarning, DegenerateWeightsWarning
)
from .locus import Locus, LocusType
from .genome import Genome, build_default_genotype
from .bacterium import Bacterium
from .mutation import MutationEngine, MutationRecord, MutationTracker, TranspositionEvent
from .selection import sample_ancestors, selection_probabilities
from .population import Population, PopulationConfig, PopulationStats
from .composition import CompositionRow, composition_for_bacterium, summarize_population

__all__ = [
    # Errors
    "ValidationError", "SamplingInfeasibilityError",
    "GenotypeConfigurationWarning", "DegenerateWeightsWarning",

    # Genome model
    "Locus", "LocusType", "Genome", "build_default_genotype", "Bacterium",

    # Evolution
    "MutationEngine", "MutationRecord", "MutationTracker", "TranspositionEvent",
    "sample_ancestors", "selection_probabilities",
    "Population", "PopulationConfig", "PopulationStats",

    # Reporting
    "CompositionRow", "composition_for_bacterium", "summarize_population",
]
