"""
Data ingestion components for demos and rule evaluation.
"""

from .data_simulator import TransactionSimulator
from .dataset_loader import TransactionDatasetLoader

__all__ = ["TransactionSimulator", "TransactionDatasetLoader"]
