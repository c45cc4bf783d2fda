"""Reading simulation and history helpers."""

from agrisignal.services.utilities.reading_history import CSV_COLUMNS, ReadingHistory
from agrisignal.services.utilities.reading_simulator import SIMULATION_RANGES, ReadingSimulator

__all__ = ["CSV_COLUMNS", "ReadingHistory", "ReadingSimulator", "SIMULATION_RANGES"]
