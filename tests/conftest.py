"""
Pytest fixtures for model and service testing.
"""

import pytest
import numpy as np

from transposim.models.locus import Locus, LocusType
from transposim.models.genome import Genome
from transposim.models.bacterium import Bacterium
from transposim.services.simulation_service import SimulationService


@pytest.fixture
def rng():
    """Seeded random generator for reproducible draws."""
    return np.random.default_rng(42)


@pytest.fixture
def gene_locus():
    """Intact gene with a disruption cost."""
    return Locus(
        type=LocusType.GENE,
        label="gene_1",
        fitness=0.5,
        disruption_cost=0.2
    )


@pytest.fixture
def active_transposon():
    """Transposon that jumps every generation."""
    return Locus(
        type=LocusType.TRANSPOSON,
        label="tn_1",
        length=1200,
        transposition_rate=1.0
    )


@pytest.fixture
def simple_genome(gene_locus, active_transposon):
    """Gene / intergenic / transposon / intergenic / gene."""
    return Genome([
        gene_locus,
        Locus(type=LocusType.INTERGENIC, label="ig_1"),
        active_transposon,
        Locus(type=LocusType.INTERGENIC, label="ig_2"),
        Locus(type=LocusType.GENE, label="gene_2", fitness=0.5, disruption_cost=0.2),
    ])


@pytest.fixture
def mobile_bacterium(simple_genome):
    """Bacterium whose transposon is certain to jump."""
    return Bacterium(label="mobile", strain="A", genotype=simple_genome)


@pytest.fixture
def simulation_service():
    """Clean simulation service fixture."""
    service = SimulationService()
    service.active_simulations.clear()
    return service
