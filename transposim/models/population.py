"""
Population class running the Wright-Fisher generation loop.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

import numpy as np

from .bacterium import Bacterium
from .errors import ValidationError
from .locus import LocusType
from .mutation import MutationEngine, MutationTracker
from .selection import sample_ancestors
from transposim.config import settings
from transposim.utils.validation import (
    validate_genotype_length,
    validate_number_of_generations,
    validate_population_size,
    validate_recombination_rate,
    validate_transposition_rate,
    validate_transposon_count,
)

logger = logging.getLogger(__name__)


@dataclass
class PopulationStats:
    """Statistics for tracking population metrics."""
    generation: int = 0
    size: int = 0
    average_fitness: float = 0.0
    min_fitness: float = 0.0
    max_fitness: float = 0.0
    average_genome_length: float = 0.0
    average_locus_count: float = 0.0
    average_transposon_count: float = 0.0
    average_pseudogene_count: float = 0.0
    transposition_events: int = 0
    lineage_count: int = 0


@dataclass
class PopulationConfig:
    """Configuration for population initialization and the generation loop."""

    population_size: int = settings.default_population_size
    number_of_generations: int = settings.default_number_of_generations

    # Randomization
    random_seed: Optional[int] = settings.random_seed

    # Default bacterium and genotype generation
    strain: str = settings.default_strain
    genotype_length: int = settings.default_genotype_length
    transposon_count: int = settings.default_transposon_count
    fitness: Optional[float] = None
    disruption_cost: float = settings.default_disruption_cost
    transposition_rate: float = settings.default_transposition_rate
    recombination_rate: float = settings.default_recombination_rate

    # Keep per-bacterium mutation records
    track_mutations: bool = True

    def __post_init__(self):
        """Validate configuration parameters."""
        try:
            validate_population_size(self.population_size)
            validate_number_of_generations(self.number_of_generations)
            validate_genotype_length(self.genotype_length)
            validate_transposon_count(self.transposon_count)
            validate_transposition_rate(self.transposition_rate)
            validate_recombination_rate(self.recombination_rate)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        if self.transposon_count > (self.genotype_length + 1) // 2:
            raise ValidationError("Transposon count cannot exceed the number of gene positions")


class Population:
    """
    Fixed-size population evolved by Wright-Fisher resampling.

    Each generation draws ``N`` ancestors with replacement weighted by
    fitness, copies their genomes into offspring, applies transposition to
    every offspring and replaces the population. The size never changes.
    """

    def __init__(
        self,
        config: Optional[PopulationConfig] = None,
        bacteria: Optional[List[Bacterium]] = None,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Initialize population manager.

        Args:
            config: Population configuration parameters
            bacteria: Explicit founding bacteria; generated from config when omitted
            rng: Random generator, seeded from ``config.random_seed`` when omitted
        """
        if config is None:
            config = (PopulationConfig(population_size=len(bacteria)) if bacteria is not None
                      else PopulationConfig())
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(self.config.random_seed)
        self.mutation_engine = MutationEngine(self.rng)
        self.mutation_tracker = MutationTracker()
        self.generation = 0
        self.bacteria: List[Bacterium] = []
        self.stats_history: List[PopulationStats] = []
        self._next_id = 0

        if bacteria is not None:
            self.initialize_population(bacteria)

    @property
    def size(self) -> int:
        return len(self.bacteria)

    def __len__(self) -> int:
        return len(self.bacteria)

    def __iter__(self) -> Iterator[Bacterium]:
        return iter(self.bacteria)

    def __getitem__(self, index: int) -> Bacterium:
        return self.bacteria[index]

    def _generate_id(self) -> str:
        """Generate a founder label."""
        self._next_id += 1
        return f"bact_{self._next_id:06d}"

    def _create_bacterium(self) -> Bacterium:
        return Bacterium.create(
            label=self._generate_id(),
            strain=self.config.strain,
            fitness=self.config.fitness,
            recombination_rate=self.config.recombination_rate,
            genotype_length=self.config.genotype_length,
            transposon_count=self.config.transposon_count,
            disruption_cost=self.config.disruption_cost,
            transposition_rate=self.config.transposition_rate,
            rng=self.rng
        )

    def initialize_population(self, bacteria: Optional[List[Bacterium]] = None) -> None:
        """
        Create the founding generation.

        Args:
            bacteria: Explicit founders; their count must match the configured
                population size
        """
        self.generation = 0
        self.stats_history.clear()
        self.mutation_tracker.clear()

        if bacteria is not None:
            bacteria = list(bacteria)
            if len(bacteria) != self.config.population_size:
                raise ValidationError(
                    f"Expected {self.config.population_size} founding bacteria, got {len(bacteria)}"
                )
            for bacterium in bacteria:
                if not isinstance(bacterium, Bacterium):
                    raise ValidationError(f"Population members must be Bacterium, got {type(bacterium).__name__}")
            self.bacteria = bacteria
        else:
            self.bacteria = [self._create_bacterium() for _ in range(self.config.population_size)]

        self.stats_history.append(self._calculate_statistics(transposition_events=0))
        logger.info(
            "Initialized population: %d bacteria, %d loci per founder genotype",
            self.size, len(self.bacteria[0].genotype)
        )

    @property
    def fitness_weights(self) -> np.ndarray:
        return np.array([b.fitness for b in self.bacteria], dtype=float)

    def sample_ancestors(self) -> List[int]:
        """Draw one ancestor index per population slot, weighted by fitness."""
        return sample_ancestors(self.fitness_weights, self.size, self.rng)

    def advance_generation(self) -> PopulationStats:
        """
        Advance the population by one Wright-Fisher generation.

        Returns:
            Statistics of the new generation
        """
        if not self.bacteria:
            raise ValidationError("Population has not been initialized")

        self.generation += 1
        ancestors = self.sample_ancestors()

        offspring = [self.bacteria[index].copy() for index in ancestors]

        events = 0
        for bacterium in offspring:
            record = self.mutation_engine.mutate(bacterium, generation=self.generation)
            events += record.event_count
            if self.config.track_mutations:
                self.mutation_tracker.record(record)

        self.bacteria = offspring

        stats = self._calculate_statistics(transposition_events=events)
        self.stats_history.append(stats)
        logger.debug(
            "Generation %d: mean fitness %.4f, %d transposition(s)",
            self.generation, stats.average_fitness, events
        )
        return stats

    def run(self, number_of_generations: Optional[int] = None) -> PopulationStats:
        """
        Run the configured number of generations.

        Args:
            number_of_generations: Overrides the configured number of steps

        Returns:
            Statistics of the terminal population
        """
        if number_of_generations is None:
            number_of_generations = self.config.number_of_generations
        try:
            validate_number_of_generations(number_of_generations)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        if not self.bacteria:
            self.initialize_population()

        for _ in range(number_of_generations):
            self.advance_generation()

        stats = self.get_statistics()
        logger.info(
            "Completed %d generation(s): mean fitness %.4f, mean transposons %.2f",
            number_of_generations, stats.average_fitness, stats.average_transposon_count
        )
        return stats

    def get_statistics(self) -> PopulationStats:
        """Statistics of the current generation."""
        if self.stats_history and self.stats_history[-1].generation == self.generation:
            return self.stats_history[-1]
        return self._calculate_statistics(transposition_events=0)

    def _calculate_statistics(self, transposition_events: int) -> PopulationStats:
        if not self.bacteria:
            return PopulationStats(generation=self.generation)

        fitness = self.fitness_weights
        return PopulationStats(
            generation=self.generation,
            size=self.size,
            average_fitness=float(fitness.mean()),
            min_fitness=float(fitness.min()),
            max_fitness=float(fitness.max()),
            average_genome_length=float(np.mean([b.genotype.total_length for b in self.bacteria])),
            average_locus_count=float(np.mean([len(b.genotype) for b in self.bacteria])),
            average_transposon_count=float(np.mean(
                [b.genotype.count(LocusType.TRANSPOSON) for b in self.bacteria])),
            average_pseudogene_count=float(np.mean(
                [b.genotype.count(LocusType.PSEUDOGENE) for b in self.bacteria])),
            transposition_events=transposition_events,
            lineage_count=len({b.label for b in self.bacteria})
        )

    def __repr__(self) -> str:
        return (f"Population(size={self.size}, generation={self.generation}, "
                f"mean_fitness={self.get_statistics().average_fitness:.3f})")
