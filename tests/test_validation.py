"""
Tests for validation utilities and Pydantic schemas.
"""

import warnings

import pytest
import numpy as np
from pydantic import ValidationError as SchemaValidationError

from transposim.utils.validation import (
    is_finite_real,
    is_positive_int,
    is_real,
    validate_population_size,
    validate_number_of_generations,
    validate_genotype_length,
    validate_transposon_count,
    validate_transposition_rate,
    validate_recombination_rate,
)
from transposim.schemas.simulation import SimulationCreateRequest, SimulationResults


class TestValidationUtilities:
    """Test custom validation utility functions."""

    def test_type_checks(self):
        """Test numeric type predicates."""
        assert is_real(1) and is_real(0.5) and is_real(np.float32(0.5))
        assert not is_real(True)
        assert not is_real("1")
        assert is_finite_real(0.5) and is_finite_real(np.float64(2.0))
        assert not is_finite_real(float("nan"))
        assert not is_finite_real(float("-inf"))
        assert is_positive_int(3) and is_positive_int(np.int64(3))
        assert not is_positive_int(0)
        assert not is_positive_int(2.0)
        assert not is_positive_int(True)

    def test_validate_population_size(self):
        """Test population size validation."""
        assert validate_population_size(1) == 1
        assert validate_population_size(1000) == 1000
        with pytest.raises(ValueError, match="must be a positive integer"):
            validate_population_size(0)
        with pytest.raises(ValueError, match="cannot exceed"):
            validate_population_size(10 ** 9)

    def test_validate_number_of_generations(self):
        """Test generation count validation."""
        assert validate_number_of_generations(0) == 0
        assert validate_number_of_generations(50) == 50
        with pytest.raises(ValueError, match="non-negative integer"):
            validate_number_of_generations(-1)
        with pytest.raises(ValueError, match="cannot exceed"):
            validate_number_of_generations(10 ** 9)

    def test_validate_genotype_parameters(self):
        """Test genotype length and transposon count validation."""
        assert validate_genotype_length(4) == 4
        assert validate_transposon_count(0) == 0
        with pytest.raises(ValueError):
            validate_genotype_length(0)
        with pytest.raises(ValueError):
            validate_transposon_count(-2)

    def test_validate_transposition_rate(self):
        """Test transposition rate validation."""
        assert validate_transposition_rate(0.0) == 0.0
        assert validate_transposition_rate(1.0) == 1.0
        with pytest.raises(ValueError, match="cannot be negative"):
            validate_transposition_rate(-0.01)
        with pytest.raises(ValueError, match="must be a real number"):
            validate_transposition_rate("often")
        with pytest.raises(ValueError, match="must be finite"):
            validate_transposition_rate(float("nan"))

    def test_validate_transposition_rate_warning(self):
        """Test rates above one trigger a warning."""
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            validate_transposition_rate(1.5)
            assert len(w) == 1
            assert "treated as certain transposition" in str(w[0].message)

    def test_validate_recombination_rate(self):
        """Test recombination rate validation."""
        assert validate_recombination_rate(0.2) == 0.2
        with pytest.raises(ValueError, match="cannot be negative"):
            validate_recombination_rate(-1.0)
        with pytest.raises(ValueError, match="must be finite"):
            validate_recombination_rate(float("inf"))


class TestSimulationSchemas:
    """Test Pydantic request and result models."""

    def test_default_request(self):
        """Test default request values."""
        request = SimulationCreateRequest()

        assert request.population_size == 100
        assert request.number_of_generations == 100
        assert request.genotype_length == 100
        assert request.transposon_count == 1
        assert request.fitness is None

    def test_request_to_population_config(self):
        """Test conversion into the population dataclass."""
        request = SimulationCreateRequest(
            population_size=20,
            number_of_generations=5,
            transposition_rate=0.1,
            disruption_cost=0.05,
            random_seed=3
        )
        config = request.to_population_config()

        assert config.population_size == 20
        assert config.number_of_generations == 5
        assert config.transposition_rate == 0.1
        assert config.disruption_cost == 0.05
        assert config.random_seed == 3

    @pytest.mark.parametrize("kwargs", [
        {"population_size": 0},
        {"number_of_generations": -1},
        {"genotype_length": 0},
        {"transposon_count": -1},
        {"transposition_rate": -0.5},
        {"recombination_rate": -0.1},
        {"genotype_length": 4, "transposon_count": 3},
    ])
    def test_invalid_request(self, kwargs):
        """Test invalid parameters are rejected."""
        with pytest.raises(SchemaValidationError):
            SimulationCreateRequest(**kwargs)

    def test_results_validation(self):
        """Test result histories are validated."""
        base = {
            "simulation_id": "sim",
            "generations_completed": 1,
            "population_size": 2,
            "fitness_history": [1.0, 0.9],
            "transposon_history": [1.0, 1.5],
            "genome_length_history": [1000.0, 1500.0],
            "transposition_events": [0, 1],
        }
        assert SimulationResults(**base).final_composition == []

        with pytest.raises(SchemaValidationError):
            SimulationResults(**{**base, "transposition_events": [0, -1]})
        with pytest.raises(SchemaValidationError):
            SimulationResults(**{**base, "genome_length_history": [0.0]})
