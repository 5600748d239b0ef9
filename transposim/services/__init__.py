"""
Services package for running simulations.
"""

from .simulation_service import SimulationService

__all__ = ["SimulationService"]
