"""
Application settings and configuration.
"""

import os
from typing import Optional


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else None


class Settings:
    """Simulation settings"""

    # Package metadata
    project_name: str = "transposim"
    project_description: str = "Wright-Fisher simulation of transposon-driven bacterial genome evolution"
    version: str = "1.0.0"
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Logging Configuration
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Randomization
    random_seed: Optional[int] = _optional_int("TRANSPOSIM_RANDOM_SEED")

    # Limits
    max_population_size: int = int(os.getenv("MAX_POPULATION_SIZE", "100000"))
    max_generations: int = int(os.getenv("MAX_GENERATIONS", "100000"))

    # Default genotype generation
    default_genotype_length: int = 100
    default_transposon_count: int = 1
    default_disruption_cost: float = 0.0
    default_transposition_rate: float = 0.0
    default_recombination_rate: float = 0.0
    default_strain: str = "ancestral"

    # Default run size
    default_population_size: int = 100
    default_number_of_generations: int = 100


# Create global settings instance
settings = Settings()
