"""
Transposition mutation system for bacterial genome evolution.

This module decides which transposons jump in a generation, picks insertion
targets weighted by locus length, and rewrites the genome by fragmenting the
targets around the inserted copies.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .bacterium import Bacterium
from .errors import SamplingInfeasibilityError
from .genome import Genome
from .locus import Locus

logger = logging.getLogger(__name__)


@dataclass
class TranspositionEvent:
    """A transposon copy waiting to be inserted elsewhere in the genome."""
    source_index: int
    transposon: Locus

    @property
    def length(self) -> int:
        return self.transposon.length


@dataclass
class MutationRecord:
    """Summary of the transpositions applied to one bacterium."""
    bacterium_label: str
    generation: int = 0
    events: List[TranspositionEvent] = field(default_factory=list)
    target_positions: List[int] = field(default_factory=list)
    length_before: int = 0
    length_after: int = 0
    fitness_before: float = 0.0
    fitness_after: float = 0.0

    @property
    def event_count(self) -> int:
        return len(self.events)

    @property
    def inserted_length(self) -> int:
        return sum(event.length for event in self.events)

    @property
    def fitness_change(self) -> float:
        return self.fitness_after - self.fitness_before

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bacterium_label": self.bacterium_label,
            "generation": self.generation,
            "event_count": self.event_count,
            "source_positions": [event.source_index for event in self.events],
            "target_positions": list(self.target_positions),
            "inserted_length": self.inserted_length,
            "length_before": self.length_before,
            "length_after": self.length_after,
            "fitness_change": self.fitness_change,
        }


class MutationEngine:
    """Engine for generating and applying transposition events."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def generate_events(self, genome: Genome) -> List[TranspositionEvent]:
        """
        Evaluate every locus for a transposition in genome order.

        Args:
            genome: Genome to scan

        Returns:
            Events in the order of their source loci
        """
        events = []
        for position, locus in enumerate(genome):
            copy = locus.maybe_transpose(self.rng)
            if copy is not None:
                events.append(TranspositionEvent(source_index=position, transposon=copy))
        return events

    def select_insertion_sites(self, genome: Genome, count: int) -> List[int]:
        """
        Sample distinct insertion targets, weighted by locus length.

        Args:
            genome: Genome providing the candidate loci
            count: Number of targets to draw

        Returns:
            Target positions in draw order

        Raises:
            SamplingInfeasibilityError: If count exceeds the number of loci
        """
        if count > len(genome):
            raise SamplingInfeasibilityError(
                f"Cannot choose {count} distinct insertion sites in a genome of "
                f"{len(genome)} loci"
            )
        if count == 0:
            return []

        lengths = genome.lengths
        targets = self.rng.choice(
            len(genome),
            size=count,
            replace=False,
            p=lengths / lengths.sum()
        )
        return [int(t) for t in targets]

    def apply_events(self, genome: Genome, events: List[TranspositionEvent]) -> Tuple[Genome, List[int]]:
        """
        Insert every event's transposon into a distinct target locus.

        All targets are sampled first; one insertion point is then drawn per
        target in the order the targets were sampled.

        Args:
            genome: Genome to rewrite (left untouched)
            events: Transposition events of this generation

        Returns:
            Tuple of (rebuilt genome, target positions in draw order)
        """
        if not events:
            return genome, []

        targets = self.select_insertion_sites(genome, len(events))
        replacements = {
            target: genome[target].split(event.transposon, self.rng)
            for target, event in zip(targets, events)
        }
        return genome.insert_transposons(replacements), targets

    def mutate(self, bacterium: Bacterium, generation: int = 0) -> MutationRecord:
        """
        Run one generation of transposition on a bacterium in place.

        Args:
            bacterium: Offspring owning its own genotype copy
            generation: Current generation number, for the record

        Returns:
            MutationRecord describing the change
        """
        record = MutationRecord(
            bacterium_label=bacterium.label,
            generation=generation,
            length_before=bacterium.genotype.total_length,
            fitness_before=bacterium.fitness
        )

        events = self.generate_events(bacterium.genotype)
        if events:
            genome, targets = self.apply_events(bacterium.genotype, events)
            bacterium.replace_genotype(genome)
            record.events = events
            record.target_positions = targets
            logger.debug(
                "Bacterium %s: %d transposition(s) into positions %s",
                bacterium.label, len(events), targets
            )
        else:
            bacterium.recalculate_fitness()

        record.length_after = bacterium.genotype.total_length
        record.fitness_after = bacterium.fitness
        return record


class MutationTracker:
    """Tracks transposition records across generations."""

    def __init__(self):
        self.records_by_generation: Dict[int, List[MutationRecord]] = {}

    def record(self, record: MutationRecord) -> None:
        """Store a record, skipping bacteria that did not mutate."""
        if record.event_count == 0:
            return
        self.records_by_generation.setdefault(record.generation, []).append(record)

    def get_generation_records(self, generation: int) -> List[MutationRecord]:
        return self.records_by_generation.get(generation, [])

    def get_lineage_records(self, label: str) -> List[MutationRecord]:
        """All records for bacteria carrying a lineage label."""
        return [
            record
            for generation in sorted(self.records_by_generation)
            for record in self.records_by_generation[generation]
            if record.bacterium_label == label
        ]

    def event_count(self, generation: Optional[int] = None) -> int:
        if generation is not None:
            return sum(r.event_count for r in self.get_generation_records(generation))
        return sum(
            r.event_count for records in self.records_by_generation.values() for r in records
        )

    def get_mutation_statistics(self) -> Dict[str, Any]:
        """Get statistics about transpositions across all generations."""
        all_records = [r for records in self.records_by_generation.values() for r in records]

        if not all_records:
            return {'total_events': 0}

        return {
            'total_events': sum(r.event_count for r in all_records),
            'mutated_bacteria': len(all_records),
            'generations_with_events': len(self.records_by_generation),
            'total_inserted_length': sum(r.inserted_length for r in all_records),
            'average_fitness_change': float(np.mean([r.fitness_change for r in all_records])),
        }

    def clear(self) -> None:
        self.records_by_generation.clear()
