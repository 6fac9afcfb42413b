# MIT License
# Copyright (c) 2025 Hashborn

"""
Genesis Migration

Converts the bonded stake of an exported provider genesis into the
accounts and balances of a consumer chain genesis.
"""

from .aggregator import DelegationAggregator
from .classifier import AccountClassifier
from .pipeline import migrate_files, run_migration
from .supply import SupplyAdjuster
from .types import AllocationMap, MigrationResult, MigrationSummary
from .vesting import VestingSchedule, VestingScheduleBuilder
from .writer import GenesisDocumentWriter

__all__ = [
    "AllocationMap",
    "DelegationAggregator",
    "SupplyAdjuster",
    "AccountClassifier",
    "VestingSchedule",
    "VestingScheduleBuilder",
    "GenesisDocumentWriter",
    "MigrationResult",
    "MigrationSummary",
    "run_migration",
    "migrate_files",
]
