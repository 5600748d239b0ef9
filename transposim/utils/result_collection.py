"""
Result collection for transposon evolution runs.

Collects per-generation metrics and composition tables and exports them as
JSON or CSV without pulling in heavier table libraries.
"""

import csv
import json
import logging
from dataclasses import dataclass, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from transposim.models.composition import CompositionRow
from transposim.models.population import PopulationStats

logger = logging.getLogger(__name__)


class ResultFormat(Enum):
    """Supported result export formats."""
    JSON = "json"
    CSV = "csv"


@dataclass
class GenerationMetrics:
    """Container for one generation's metrics in a named run."""
    simulation_id: str
    generation: int
    population_size: int
    average_fitness: float
    min_fitness: float
    max_fitness: float
    average_genome_length: float
    average_transposon_count: float
    average_pseudogene_count: float
    transposition_events: int
    lineage_count: int

    @classmethod
    def from_stats(cls, simulation_id: str, stats: PopulationStats) -> 'GenerationMetrics':
        return cls(
            simulation_id=simulation_id,
            generation=stats.generation,
            population_size=stats.size,
            average_fitness=stats.average_fitness,
            min_fitness=stats.min_fitness,
            max_fitness=stats.max_fitness,
            average_genome_length=stats.average_genome_length,
            average_transposon_count=stats.average_transposon_count,
            average_pseudogene_count=stats.average_pseudogene_count,
            transposition_events=stats.transposition_events,
            lineage_count=stats.lineage_count
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary format."""
        return asdict(self)


class ResultCollector:
    """Collects generation metrics for one or more runs."""

    def __init__(self):
        self.metrics: Dict[str, List[GenerationMetrics]] = {}

    def collect_history(self, simulation_id: str, history: Sequence[PopulationStats]) -> List[GenerationMetrics]:
        """Convert a population's stats history into metrics records."""
        records = [GenerationMetrics.from_stats(simulation_id, stats) for stats in history]
        self.metrics[simulation_id] = records
        return records

    def get_metrics(self, simulation_id: str) -> List[GenerationMetrics]:
        return self.metrics.get(simulation_id, [])

    def clear_metrics(self, simulation_id: str) -> None:
        self.metrics.pop(simulation_id, None)


def _rows_to_dicts(rows: Sequence[Union[GenerationMetrics, CompositionRow, Dict[str, Any]]]) -> List[Dict[str, Any]]:
    return [row if isinstance(row, dict) else row.to_dict() for row in rows]


def save_records(
    rows: Sequence[Union[GenerationMetrics, CompositionRow, Dict[str, Any]]],
    filepath: Union[str, Path],
    format_type: ResultFormat = ResultFormat.JSON
) -> Path:
    """
    Write metrics or composition rows to disk.

    Args:
        rows: Records to write; all rows must share the same fields
        filepath: Output file path
        format_type: JSON or CSV

    Returns:
        Path of the written file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    records = _rows_to_dicts(rows)

    if format_type == ResultFormat.JSON:
        with open(filepath, 'w') as f:
            json.dump(records, f, indent=2)
    elif format_type == ResultFormat.CSV:
        with open(filepath, 'w', newline='') as f:
            if records:
                writer = csv.DictWriter(f, fieldnames=list(records[0].keys()))
                writer.writeheader()
                writer.writerows(records)
    else:
        raise ValueError(f"Unsupported format: {format_type}")

    logger.info(f"Saved {len(records)} records to {filepath}")
    return filepath


def load_records(filepath: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load records written by ``save_records`` (CSV values come back as strings)."""
    filepath = Path(filepath)
    if filepath.suffix == '.json':
        with open(filepath, 'r') as f:
            return json.load(f)
    if filepath.suffix == '.csv':
        with open(filepath, 'r', newline='') as f:
            return list(csv.DictReader(f))
    raise ValueError(f"Unsupported file format: {filepath.suffix}")
