"""
Pydantic schemas for simulation requests and results.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from transposim.config import settings
from transposim.models.population import PopulationConfig
from transposim.utils.validation import (
    validate_population_size,
    validate_number_of_generations,
    validate_transposition_rate,
)


class SimulationCreateRequest(BaseModel):
    """Request model for creating a new simulation."""

    population_size: int = Field(
        default=settings.default_population_size,
        ge=1,
        description="Number of bacteria, constant across generations"
    )
    number_of_generations: int = Field(
        default=settings.default_number_of_generations,
        ge=0,
        description="Number of Wright-Fisher generations to simulate"
    )
    genotype_length: int = Field(
        default=settings.default_genotype_length,
        ge=1,
        description="Loci in each founding genotype"
    )
    transposon_count: int = Field(
        default=settings.default_transposon_count,
        ge=0,
        description="Transposons seeded into each founding genotype"
    )
    fitness: Optional[float] = Field(
        default=None,
        description="Per-gene fitness; 1 / gene count when omitted"
    )
    disruption_cost: float = Field(
        default=settings.default_disruption_cost,
        description="Fitness penalty for a disrupted gene"
    )
    transposition_rate: float = Field(
        default=settings.default_transposition_rate,
        ge=0.0,
        description="Per-generation transposition probability of each transposon"
    )
    recombination_rate: float = Field(
        default=settings.default_recombination_rate,
        ge=0.0,
        description="Stored recombination rate"
    )
    strain: str = Field(default=settings.default_strain, description="Strain of founding bacteria")
    random_seed: Optional[int] = Field(default=settings.random_seed, description="Seed for reproducible runs")

    @field_validator('population_size')
    @classmethod
    def validate_pop_size(cls, v):
        return validate_population_size(v)

    @field_validator('number_of_generations')
    @classmethod
    def validate_generations(cls, v):
        return validate_number_of_generations(v)

    @field_validator('transposition_rate')
    @classmethod
    def validate_rate(cls, v):
        return validate_transposition_rate(v)

    @field_validator('transposon_count')
    @classmethod
    def validate_transposon_fit(cls, v, info):
        genotype_length = info.data.get('genotype_length')
        if genotype_length is not None and v > (genotype_length + 1) // 2:
            raise ValueError(
                f"Transposon count {v} exceeds the {(genotype_length + 1) // 2} gene positions "
                f"of a {genotype_length}-locus genotype"
            )
        return v

    def to_population_config(self) -> PopulationConfig:
        """Build the dataclass configuration consumed by Population."""
        return PopulationConfig(
            population_size=self.population_size,
            number_of_generations=self.number_of_generations,
            random_seed=self.random_seed,
            strain=self.strain,
            genotype_length=self.genotype_length,
            transposon_count=self.transposon_count,
            fitness=self.fitness,
            disruption_cost=self.disruption_cost,
            transposition_rate=self.transposition_rate,
            recombination_rate=self.recombination_rate
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "population_size": 100,
                "number_of_generations": 50,
                "genotype_length": 100,
                "transposon_count": 1,
                "disruption_cost": 0.01,
                "transposition_rate": 0.05,
                "random_seed": 42
            }
        }
    }


class CompositionSummary(BaseModel):
    """Per-bacterium locus composition."""

    label: str
    strain: str
    fitness: float
    gene_count: int
    gene_length: int
    transposon_count: int
    transposon_length: int
    pseudogene_count: int
    pseudogene_length: int
    intergenic_count: int
    intergenic_length: int
    total_length: int


class SimulationResults(BaseModel):
    """Simulation results model."""

    simulation_id: str
    generations_completed: int = Field(ge=0)
    population_size: int = Field(ge=1)
    fitness_history: List[float] = Field(description="Mean fitness per generation, founders first")
    transposon_history: List[float] = Field(description="Mean transposon count per generation")
    genome_length_history: List[float] = Field(description="Mean total genome length per generation")
    transposition_events: List[int] = Field(description="Transposition events per generation")
    final_composition: List[CompositionSummary] = Field(default_factory=list)

    @field_validator('genome_length_history')
    @classmethod
    def validate_genome_length_history(cls, v):
        if any(length <= 0 for length in v):
            raise ValueError("Genome lengths must be positive")
        return v

    @field_validator('transposition_events')
    @classmethod
    def validate_transposition_events(cls, v):
        if any(count < 0 for count in v):
            raise ValueError("Transposition event counts cannot be negative")
        return v


class SimulationResponse(BaseModel):
    """Response model for simulation creation and runs."""

    simulation_id: str
    status: str
    message: str
    parameters: SimulationCreateRequest
