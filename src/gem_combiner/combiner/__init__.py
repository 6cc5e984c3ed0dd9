"""
Module: combiner

Purpose:
    Stateful layer over the pure gem model: usage bookkeeping for shared
    gem nodes and the workbench that fuses gems while recording it.

Key Classes:
    - CombinerConfig: Configuration
    - UsageLedger: Use counts and slots keyed by gem identity
    - Workbench: Base gem creation, fusion and recipe parsing

Used By:
    - External slot assignment / search components
"""

from .config import CombinerConfig, NOT_SLOTTED
from .ledger import UsageLedger
from .workbench import Workbench

__all__ = [
    "CombinerConfig",
    "NOT_SLOTTED",
    "UsageLedger",
    "Workbench",
]
