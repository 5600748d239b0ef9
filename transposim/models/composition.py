"""
Per-bacterium genome composition summaries.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List

from .bacterium import Bacterium
from .locus import LocusType


@dataclass
class CompositionRow:
    """Counts and summed lengths of loci by type for one bacterium."""
    label: str
    strain: str
    fitness: float
    gene_count: int = 0
    gene_length: int = 0
    transposon_count: int = 0
    transposon_length: int = 0
    pseudogene_count: int = 0
    pseudogene_length: int = 0
    intergenic_count: int = 0
    intergenic_length: int = 0

    @property
    def total_length(self) -> int:
        return (self.gene_length + self.transposon_length +
                self.pseudogene_length + self.intergenic_length)

    @property
    def locus_count(self) -> int:
        return (self.gene_count + self.transposon_count +
                self.pseudogene_count + self.intergenic_count)

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result['total_length'] = self.total_length
        return result


def composition_for_bacterium(bacterium: Bacterium) -> CompositionRow:
    """Summarize the loci of one bacterium by type."""
    counts = bacterium.genotype.type_counts()
    lengths = bacterium.genotype.type_lengths()
    return CompositionRow(
        label=bacterium.label,
        strain=bacterium.strain,
        fitness=bacterium.fitness,
        gene_count=counts[LocusType.GENE],
        gene_length=lengths[LocusType.GENE],
        transposon_count=counts[LocusType.TRANSPOSON],
        transposon_length=lengths[LocusType.TRANSPOSON],
        pseudogene_count=counts[LocusType.PSEUDOGENE],
        pseudogene_length=lengths[LocusType.PSEUDOGENE],
        intergenic_count=counts[LocusType.INTERGENIC],
        intergenic_length=lengths[LocusType.INTERGENIC],
    )


def summarize_population(bacteria: Iterable[Bacterium]) -> List[CompositionRow]:
    """
    Tabulate composition for every bacterium of a population snapshot.

    Accepts a Population or any iterable of bacteria; rows follow
    population order.
    """
    return [composition_for_bacterium(bacterium) for bacterium in bacteria]
