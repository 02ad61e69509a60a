"""Commitment ledger module for DenimFlow.

This module records open order demand keyed by exact and universal SKU, and
turns "order created" events into stock reservations or commitments.
"""

from .models import Commitment
from .ports import CommitmentRepositoryPort
from .ledger import CommitmentLedger
from .intake import OrderCreated, OrderIntakeResult, OrderIntakeService

__all__ = [
    "Commitment",
    "CommitmentRepositoryPort",
    "CommitmentLedger",
    "OrderCreated",
    "OrderIntakeResult",
    "OrderIntakeService",
]
