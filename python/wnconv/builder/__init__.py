"""Builder module.

Loads parsed dictionary records into the store:
- BatchLoader: one file class into one table, in batched transactions
- Converter: all file classes in dependency order
"""

from .loader import COMMIT_THRESHOLD, BatchLoader, ConversionAborted
from .pipeline import (
    ConversionSummary,
    Converter,
    Fileset,
    FilesetSummary,
    Reporter,
)

__all__ = [
    "COMMIT_THRESHOLD",
    "BatchLoader",
    "ConversionAborted",
    "ConversionSummary",
    "Converter",
    "Fileset",
    "FilesetSummary",
    "Reporter",
]
