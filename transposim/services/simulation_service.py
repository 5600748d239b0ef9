"""
Simulation service for creating and running transposon evolution simulations.
"""

import logging
import uuid
from typing import Any, Dict, Optional

from transposim.models.composition import summarize_population
from transposim.models.population import Population
from transposim.schemas.simulation import (
    CompositionSummary,
    SimulationCreateRequest,
    SimulationResponse,
    SimulationResults,
)
from transposim.utils.result_collection import ResultCollector

logger = logging.getLogger(__name__)


class SimulationService:
    """Service class for managing in-memory simulations."""

    def __init__(self):
        self.active_simulations: Dict[str, Dict[str, Any]] = {}
        self.result_collector = ResultCollector()

    def create_simulation(
        self,
        parameters: Optional[SimulationCreateRequest] = None,
        simulation_id: Optional[str] = None
    ) -> SimulationResponse:
        """
        Create a new simulation with the given parameters.

        Args:
            parameters: Validated simulation parameters (defaults when omitted)
            simulation_id: Identifier, generated when omitted

        Returns:
            SimulationResponse describing the created simulation
        """
        parameters = parameters if parameters is not None else SimulationCreateRequest()
        simulation_id = simulation_id or str(uuid.uuid4())
        if simulation_id in self.active_simulations:
            raise ValueError(f"Simulation {simulation_id} already exists")

        population = Population(config=parameters.to_population_config())
        population.initialize_population()

        self.active_simulations[simulation_id] = {
            "parameters": parameters,
            "population": population,
            "status": "initialized",
            "results": None,
        }
        logger.info(f"Created simulation {simulation_id} with {parameters.population_size} bacteria")

        return SimulationResponse(
            simulation_id=simulation_id,
            status="initialized",
            message="Simulation created",
            parameters=parameters
        )

    def run_simulation(self, simulation_id: str) -> SimulationResults:
        """
        Run a created simulation to completion.

        Args:
            simulation_id: Simulation to run

        Returns:
            SimulationResults of the completed run

        Raises:
            ValueError: If the simulation already failed; its population is
                left partially evolved and must be recreated
        """
        simulation = self._get(simulation_id)
        if simulation["status"] == "completed":
            return simulation["results"]
        if simulation["status"] == "failed":
            raise ValueError(f"Simulation {simulation_id} failed; create a new simulation to rerun it")

        population: Population = simulation["population"]
        simulation["status"] = "running"
        try:
            population.run(simulation["parameters"].number_of_generations)
        except Exception as e:
            simulation["status"] = "failed"
            logger.error(f"Simulation {simulation_id} failed at generation {population.generation}: {e}")
            raise

        results = self._build_results(simulation_id, population)
        simulation["status"] = "completed"
        simulation["results"] = results
        logger.info(f"Simulation {simulation_id} completed after {population.generation} generations")
        return results

    def get_results(self, simulation_id: str) -> Optional[SimulationResults]:
        return self._get(simulation_id)["results"]

    def get_status(self, simulation_id: str) -> str:
        return self._get(simulation_id)["status"]

    def delete_simulation(self, simulation_id: str) -> bool:
        """Remove a simulation and its collected metrics."""
        if simulation_id not in self.active_simulations:
            return False
        del self.active_simulations[simulation_id]
        self.result_collector.clear_metrics(simulation_id)
        return True

    def _get(self, simulation_id: str) -> Dict[str, Any]:
        try:
            return self.active_simulations[simulation_id]
        except KeyError:
            raise KeyError(f"Simulation {simulation_id} not found") from None

    def _build_results(self, simulation_id: str, population: Population) -> SimulationResults:
        history = population.stats_history
        self.result_collector.collect_history(simulation_id, history)
        return SimulationResults(
            simulation_id=simulation_id,
            generations_completed=population.generation,
            population_size=population.size,
            fitness_history=[s.average_fitness for s in history],
            transposon_history=[s.average_transposon_count for s in history],
            genome_length_history=[s.average_genome_length for s in history],
            transposition_events=[s.transposition_events for s in history],
            final_composition=[
                CompositionSummary(**row.to_dict()) for row in summarize_population(population)
            ]
        )
