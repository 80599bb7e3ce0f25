"""
IO module - Data loading and saving utilities

Provides unified interfaces for:
- NPZ loading/saving of model outputs
- CSV reading/writing of decoded poses with dataclasses
"""

from .data_loader import OutputsLoader
from .csv_handler import (
    CSVWriter,
    CSVReader,
    PoseRow,
)

__all__ = [
    "OutputsLoader",
    "CSVWriter",
    "CSVReader",
    "PoseRow",
]
