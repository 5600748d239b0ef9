"""
Tests for the simulation service.
"""

import pytest

from transposim.schemas.simulation import SimulationCreateRequest, SimulationResults


@pytest.fixture
def quick_parameters():
    """Quick simulation parameters for fast testing."""
    return SimulationCreateRequest(
        population_size=8,
        number_of_generations=5,
        genotype_length=16,
        transposon_count=2,
        transposition_rate=0.3,
        disruption_cost=0.02,
        random_seed=12
    )


class TestSimulationService:
    """Test simulation lifecycle."""

    def test_create_simulation(self, simulation_service, quick_parameters):
        """Test creation registers an initialized population."""
        response = simulation_service.create_simulation(quick_parameters, simulation_id="sim_a")

        assert response.simulation_id == "sim_a"
        assert response.status == "initialized"
        assert response.parameters == quick_parameters
        assert simulation_service.get_status("sim_a") == "initialized"
        assert simulation_service.get_results("sim_a") is None

    def test_generated_id(self, simulation_service, quick_parameters):
        """Test an identifier is generated when omitted."""
        response = simulation_service.create_simulation(quick_parameters)
        assert response.simulation_id in simulation_service.active_simulations

    def test_duplicate_id(self, simulation_service, quick_parameters):
        """Test simulation identifiers are unique."""
        simulation_service.create_simulation(quick_parameters, simulation_id="dup")
        with pytest.raises(ValueError, match="already exists"):
            simulation_service.create_simulation(quick_parameters, simulation_id="dup")

    def test_run_simulation(self, simulation_service, quick_parameters):
        """Test running collects per-generation results."""
        simulation_service.create_simulation(quick_parameters, simulation_id="sim_b")
        results = simulation_service.run_simulation("sim_b")

        assert isinstance(results, SimulationResults)
        assert results.generations_completed == 5
        assert results.population_size == 8
        assert len(results.fitness_history) == 6
        assert len(results.transposition_events) == 6
        assert results.transposition_events[0] == 0
        assert len(results.final_composition) == 8
        assert simulation_service.get_status("sim_b") == "completed"
        assert len(simulation_service.result_collector.get_metrics("sim_b")) == 6

    def test_rerun_returns_cached_results(self, simulation_service, quick_parameters):
        """Test a completed simulation is not run again."""
        simulation_service.create_simulation(quick_parameters, simulation_id="sim_c")
        first = simulation_service.run_simulation("sim_c")
        second = simulation_service.run_simulation("sim_c")

        assert first is second

    def test_seeded_runs_match(self, simulation_service, quick_parameters):
        """Test identical seeded parameters give identical results."""
        simulation_service.create_simulation(quick_parameters, simulation_id="one")
        simulation_service.create_simulation(quick_parameters, simulation_id="two")

        first = simulation_service.run_simulation("one")
        second = simulation_service.run_simulation("two")

        assert first.fitness_history == second.fitness_history
        assert first.genome_length_history == second.genome_length_history

    def test_failed_simulation_not_rerun(self, simulation_service, quick_parameters, monkeypatch):
        """Test a failed run is not resumed past the configured generations."""
        simulation_service.create_simulation(quick_parameters, simulation_id="sim_e")
        population = simulation_service.active_simulations["sim_e"]["population"]

        def broken_generation():
            raise RuntimeError("generation step failed")

        monkeypatch.setattr(population, "advance_generation", broken_generation)
        with pytest.raises(RuntimeError, match="generation step failed"):
            simulation_service.run_simulation("sim_e")
        assert simulation_service.get_status("sim_e") == "failed"

        monkeypatch.undo()
        with pytest.raises(ValueError, match="failed"):
            simulation_service.run_simulation("sim_e")
        assert population.generation == 0
        assert simulation_service.get_results("sim_e") is None

    def test_unknown_simulation(self, simulation_service):
        """Test missing simulations raise KeyError."""
        with pytest.raises(KeyError, match="not found"):
            simulation_service.run_simulation("missing")

    def test_delete_simulation(self, simulation_service, quick_parameters):
        """Test deletion removes the simulation and metrics."""
        simulation_service.create_simulation(quick_parameters, simulation_id="sim_d")
        simulation_service.run_simulation("sim_d")

        assert simulation_service.delete_simulation("sim_d") is True
        assert "sim_d" not in simulation_service.active_simulations
        assert simulation_service.result_collector.get_metrics("sim_d") == []
        assert simulation_service.delete_simulation("sim_d") is False
