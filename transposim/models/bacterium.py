"""
Bacterium class for individual bacterial cells in the simulation.
"""

import logging
import warnings
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Union

import numpy as np

from .errors import GenotypeConfigurationWarning, ValidationError
from .genome import Genome, build_default_genotype
from .locus import Locus, LocusType, random_label
from transposim.config import settings
from transposim.utils.validation import validate_recombination_rate

logger = logging.getLogger(__name__)


@dataclass
class Bacterium:
    """
    Individual bacterium carrying one genome.

    Attributes:
        label: Lineage identity, copied to offspring
        strain: Population-structure grouping (non-unique)
        genotype: Genome owned by this bacterium
        recombination_rate: Stored scalar, not used by any algorithm
        fitness: Derived from the genotype; recomputed after every mutation
    """

    label: str
    strain: str
    genotype: Genome
    recombination_rate: float = 0.0
    fitness: float = field(default=0.0, init=False)

    def __post_init__(self):
        """Validate identity fields and derive fitness from the genotype."""
        if not isinstance(self.label, str):
            raise ValidationError(f"Bacterium label must be a string, got {self.label!r}")
        if not isinstance(self.strain, str):
            raise ValidationError(f"Bacterium strain must be a string, got {self.strain!r}")
        if not isinstance(self.genotype, Genome):
            self.genotype = Genome(self.genotype)
        if len(self.genotype) == 0:
            raise ValidationError(f"Bacterium '{self.label}' needs a non-empty genotype")
        try:
            self.recombination_rate = float(validate_recombination_rate(self.recombination_rate))
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        self.recalculate_fitness()

    @classmethod
    def create(
        cls,
        label: Optional[str] = None,
        strain: Optional[str] = None,
        genotype: Optional[Union[Genome, Iterable[Locus]]] = None,
        fitness: Optional[float] = None,
        recombination_rate: float = 0.0,
        genotype_length: Optional[int] = None,
        transposon_count: Optional[int] = None,
        disruption_cost: Optional[float] = None,
        transposition_rate: Optional[float] = None,
        rng: Optional[np.random.Generator] = None
    ) -> 'Bacterium':
        """
        Build a bacterium from an explicit genotype or a generated default one.

        Args:
            label: Lineage label, random token when omitted
            strain: Strain grouping, defaults to the configured strain
            genotype: Explicit genotype; generation parameters are then ignored
            fitness: Per-gene fitness of the generated genotype
            recombination_rate: Stored recombination rate
            genotype_length: Number of loci to generate (default 100)
            transposon_count: Transposons in the generated genotype (default 1)
            disruption_cost: Per-gene pseudogene penalty (default 0)
            transposition_rate: Per-transposon jump probability (default 0)
            rng: Random generator for labels and transposon placement

        Returns:
            New Bacterium with fitness computed from its genotype
        """
        rng = rng if rng is not None else np.random.default_rng()
        label = label if label is not None else random_label(rng)
        strain = strain if strain is not None else settings.default_strain

        generation_params = {
            "fitness": fitness,
            "genotype_length": genotype_length,
            "transposon_count": transposon_count,
            "disruption_cost": disruption_cost,
            "transposition_rate": transposition_rate,
        }

        if genotype is not None:
            supplied = sorted(name for name, value in generation_params.items() if value is not None)
            if supplied:
                message = (f"Explicit genotype supplied for bacterium '{label}'; "
                           f"ignoring generation parameters: {', '.join(supplied)}")
                logger.warning(message)
                warnings.warn(message, GenotypeConfigurationWarning, stacklevel=2)
            genome = genotype.copy() if isinstance(genotype, Genome) else Genome(genotype)
        else:
            genome = build_default_genotype(
                length=genotype_length if genotype_length is not None else settings.default_genotype_length,
                transposon_count=(transposon_count if transposon_count is not None
                                  else settings.default_transposon_count),
                fitness=fitness,
                disruption_cost=(disruption_cost if disruption_cost is not None
                                 else settings.default_disruption_cost),
                transposition_rate=(transposition_rate if transposition_rate is not None
                                    else settings.default_transposition_rate),
                rng=rng
            )

        return cls(
            label=label,
            strain=strain,
            genotype=genome,
            recombination_rate=recombination_rate
        )

    def recalculate_fitness(self) -> float:
        """Recompute and store fitness from the current genotype."""
        self.fitness = self.genotype.calculate_fitness()
        return self.fitness

    def replace_genotype(self, genotype: Genome) -> None:
        """Swap in a rebuilt genotype and refresh fitness."""
        if len(genotype) == 0:
            raise ValidationError(f"Bacterium '{self.label}' needs a non-empty genotype")
        self.genotype = genotype
        self.recalculate_fitness()

    def copy(self) -> 'Bacterium':
        """
        Create an offspring that owns an independent copy of the genotype.

        Siblings drawn from the same ancestor never share loci.
        """
        return Bacterium(
            label=self.label,
            strain=self.strain,
            genotype=self.genotype.copy(),
            recombination_rate=self.recombination_rate
        )

    @property
    def genotype_length(self) -> int:
        """Number of loci in the genotype."""
        return len(self.genotype)

    @property
    def gene_count(self) -> int:
        return self.genotype.count(LocusType.GENE)

    @property
    def transposon_count(self) -> int:
        return self.genotype.count(LocusType.TRANSPOSON)

    @property
    def pseudogene_count(self) -> int:
        return self.genotype.count(LocusType.PSEUDOGENE)

    def to_dict(self) -> Dict[str, Any]:
        """Field dump used by reporting collaborators."""
        return {
            "label": self.label,
            "strain": self.strain,
            "fitness": self.fitness,
            "recombination_rate": self.recombination_rate,
            "genotype_length": self.genotype_length,
            "gene_count": self.gene_count,
            "transposon_count": self.transposon_count,
            "pseudogene_count": self.pseudogene_count,
        }

    def __str__(self) -> str:
        """String representation of bacterium."""
        return (f"Bacterium {self.label} ({self.strain}): fitness={self.fitness:.3f}, "
                f"recombination_rate={self.recombination_rate:.3f}, "
                f"loci={self.genotype_length}, genes={self.gene_count}, "
                f"transposons={self.transposon_count}, pseudogenes={self.pseudogene_count}")

    def __repr__(self) -> str:
        """Detailed representation of bacterium."""
        return (f"Bacterium(label='{self.label}', strain='{self.strain}', "
                f"fitness={self.fitness}, genotype={self.genotype!r})")
