"""
Pydantic schemas for simulation parameters and results.
"""

from .simulation import (
    SimulationCreateRequest,
    SimulationResults,
    SimulationResponse,
    CompositionSummary
)

__all__ = [
    "SimulationCreateRequest",
    "SimulationResults",
    "SimulationResponse",
    "CompositionSummary"
]
