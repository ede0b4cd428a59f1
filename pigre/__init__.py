"""
PIGRE Mission Control

Deterministic resource-conversion engine for a mission-operations
dashboard: converts waste batches into fuel, recovered metal or reduced
volume and folds the results into a running mission ledger.
"""

__version__ = "0.1.0"
