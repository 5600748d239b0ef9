"""
Genome class holding the ordered loci of one bacterium.
"""

from collections import Counter
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Union

import numpy as np

from .errors import ValidationError
from .locus import Locus, LocusType


class Genome:
    """
    Ordered sequence of loci.

    Order is meaningful: adjacency defines the linear insertion-site model.
    Labels may repeat. A genome owns its list of loci; copies never share it.
    """

    def __init__(self, loci: Optional[Iterable[Locus]] = None):
        self.loci: List[Locus] = list(loci) if loci is not None else []
        for position, locus in enumerate(self.loci):
            if not isinstance(locus, Locus):
                raise ValidationError(
                    f"Genome position {position} holds {type(locus).__name__}, expected Locus"
                )

    def __len__(self) -> int:
        return len(self.loci)

    def __iter__(self) -> Iterator[Locus]:
        return iter(self.loci)

    def __getitem__(self, index: Union[int, slice]):
        return self.loci[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Genome):
            return NotImplemented
        return self.loci == other.loci

    def copy(self) -> 'Genome':
        """Deep copy: new list and new Locus records."""
        return Genome(locus.copy() for locus in self.loci)

    @property
    def lengths(self) -> np.ndarray:
        return np.array([locus.length for locus in self.loci], dtype=float)

    @property
    def total_length(self) -> int:
        return sum(locus.length for locus in self.loci)

    def count(self, locus_type: LocusType) -> int:
        return sum(1 for locus in self.loci if locus.type == locus_type)

    def type_counts(self) -> Dict[LocusType, int]:
        """Number of loci of every type (zero for absent types)."""
        counts = Counter(locus.type for locus in self.loci)
        return {locus_type: counts.get(locus_type, 0) for locus_type in LocusType}

    def type_lengths(self) -> Dict[LocusType, int]:
        """Summed locus length of every type (zero for absent types)."""
        lengths = {locus_type: 0 for locus_type in LocusType}
        for locus in self.loci:
            lengths[locus.type] += locus.length
        return lengths

    def calculate_fitness(self) -> float:
        """
        Aggregate host fitness from the current loci.

        Intact loci add their fitness. A pseudogene is charged its disruption
        cost only while it is the first fragment (index 1) of the disrupted
        locus, so later re-fragmentation is not charged again.

        Returns:
            Total fitness of the genome
        """
        fitness = 0.0
        for locus in self.loci:
            if locus.type == LocusType.PSEUDOGENE:
                if locus.index == 1:
                    fitness -= locus.disruption_cost
            else:
                fitness += locus.fitness
        return fitness

    def insert_transposons(self, replacements: Dict[int, Sequence[Locus]]) -> 'Genome':
        """
        Rebuild the genome with target loci replaced by their fragments.

        Args:
            replacements: Mapping of target position to the fragment list that
                replaces the locus at that position

        Returns:
            New Genome; untouched loci keep their relative order
        """
        for position in replacements:
            if not 0 <= position < len(self.loci):
                raise IndexError(f"Insertion target {position} outside genome of {len(self.loci)} loci")

        rebuilt: List[Locus] = []
        start = 0
        for position in sorted(replacements):
            rebuilt.extend(self.loci[start:position])
            rebuilt.extend(replacements[position])
            start = position + 1
        rebuilt.extend(self.loci[start:])
        return Genome(rebuilt)

    def to_list(self) -> List[Dict]:
        return [locus.to_dict() for locus in self.loci]

    def __repr__(self) -> str:
        return f"Genome(loci={len(self.loci)}, total_length={self.total_length})"


def build_default_genotype(
    length: int = 100,
    transposon_count: int = 1,
    fitness: Optional[float] = None,
    disruption_cost: float = 0.0,
    transposition_rate: float = 0.0,
    rng: Optional[np.random.Generator] = None
) -> Genome:
    """
    Generate a synthetic genotype of alternating genes and intergenic spacers.

    The sequence starts with a gene, so an odd trailing slot is a gene.
    ``transposon_count`` distinct gene positions are recoloured as
    transposons. Remaining genes share ``fitness`` (default ``1 / genes`` so
    an intact genotype sums to 1) and ``disruption_cost``; transposons carry
    ``transposition_rate``.

    Args:
        length: Number of loci
        transposon_count: Number of gene positions turned into transposons
        fitness: Per-gene fitness, derived from the gene count when omitted
        disruption_cost: Per-gene pseudogene penalty
        transposition_rate: Per-transposon jump probability
        rng: Random generator used to pick transposon positions

    Returns:
        New Genome

    Raises:
        ValidationError: If the parameters cannot produce a genotype
    """
    if isinstance(length, bool) or not isinstance(length, (int, np.integer)) or length < 1:
        raise ValidationError(f"Genotype length must be a positive integer, got {length!r}")
    if isinstance(transposon_count, bool) or not isinstance(transposon_count, (int, np.integer)) \
            or transposon_count < 0:
        raise ValidationError(f"Transposon count must be a non-negative integer, got {transposon_count!r}")

    rng = rng if rng is not None else np.random.default_rng()

    gene_positions = list(range(0, length, 2))
    if transposon_count > len(gene_positions):
        raise ValidationError(
            f"Cannot place {transposon_count} transposons in a genotype with "
            f"{len(gene_positions)} gene positions"
        )

    transposon_positions = set()
    if transposon_count:
        transposon_positions = {
            int(p) for p in rng.choice(gene_positions, size=transposon_count, replace=False)
        }

    gene_count = len(gene_positions) - transposon_count
    if fitness is None:
        fitness = 1.0 / gene_count if gene_count else 0.0

    loci = []
    for position in range(length):
        if position % 2 == 1:
            loci.append(Locus(
                type=LocusType.INTERGENIC,
                label=f"intergenic_{position // 2 + 1}"
            ))
        elif position in transposon_positions:
            loci.append(Locus(
                type=LocusType.TRANSPOSON,
                label=f"transposon_{position // 2 + 1}",
                transposition_rate=transposition_rate
            ))
        else:
            loci.append(Locus(
                type=LocusType.GENE,
                label=f"gene_{position // 2 + 1}",
                fitness=fitness,
                disruption_cost=disruption_cost
            ))
    return Genome(loci)
