# MIT License
# Copyright (c) 2025 Hashborn

"""
Migration Data Structures
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple
from pydantic import BaseModel, Field

from ..protocol.types.accounts import BalanceRecord, BaseAccount, VestingAccount
from ..protocol.types.common import InvariantViolation
from ..protocol.types.uint import checked_add, checked_sum, narrow_u128


class AllocationMap:
    """
    address -> u128 amount, always iterated in lexicographic address order.

    Iteration order decides the order of accounts in the genesis document,
    so it must not depend on insertion order.
    """

    def __init__(self, items: Optional[Dict[str, int]] = None):
        self._amounts: Dict[str, int] = {}
        for address, amount in (items or {}).items():
            self.insert(address, amount)

    def __contains__(self, address: str) -> bool:
        return address in self._amounts

    def __len__(self) -> int:
        return len(self._amounts)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._amounts))

    def __eq__(self, other) -> bool:
        if not isinstance(other, AllocationMap):
            return NotImplemented
        return self._amounts == other._amounts

    def __repr__(self) -> str:
        return f"AllocationMap({dict(self.items())!r})"

    def get(self, address: str) -> Optional[int]:
        return self._amounts.get(address)

    def items(self) -> List[Tuple[str, int]]:
        return [(address, self._amounts[address]) for address in sorted(self._amounts)]

    def values(self) -> List[int]:
        return [amount for _, amount in self.items()]

    def insert(self, address: str, amount: int):
        """Inserts under an address that must not be present yet."""
        if address in self._amounts:
            raise InvariantViolation(f"address {address} already has an allocation")
        self._amounts[address] = narrow_u128(amount)

    def accumulate(self, address: str, amount: int):
        """Adds to the address' allocation, creating it if needed."""
        self._amounts[address] = checked_add(self._amounts.get(address, 0), narrow_u128(amount))

    def remove(self, address: str) -> int:
        if address not in self._amounts:
            raise InvariantViolation(f"address {address} has no allocation")
        return self._amounts.pop(address)

    def total(self) -> int:
        return checked_sum(self.values())

    def copy(self) -> "AllocationMap":
        clone = AllocationMap()
        clone._amounts = dict(self._amounts)
        return clone


@dataclass
class Classification:
    """Output of the classifier: immediate accounts plus what is left to vest."""
    base_accounts: List[BaseAccount]
    base_balances: List[BalanceRecord]
    vesting_allocations: AllocationMap
    dropped: Dict[str, int] = field(default_factory=dict)


@dataclass
class VestingOutput:
    accounts: List[VestingAccount]
    balances: List[BalanceRecord]
    truncation_loss: int = 0


class MigrationSummary(BaseModel):
    """
    Figures of one migration run (logged, optionally saved next to the genesis).
    """
    denom: str = Field(..., description="Genesis denomination")
    bonded_supply: int = Field(..., description="Sum of delegated tokens before the special allocation")
    special_allocation: int = Field(..., description="Reserved allocation added for the special address")
    total_supply: int = Field(..., description="Bonded supply plus special allocation")
    base_accounts: int = Field(..., description="Number of vesting-exempt accounts")
    vesting_accounts: int = Field(..., description="Number of periodic vesting accounts")
    dropped_accounts: int = Field(..., description="Allocations under the dust threshold")
    dropped_amount: int = Field(..., description="Base units held by dropped allocations")
    truncation_loss: int = Field(..., description="Base units lost to per-period division")
    genesis_balance: int = Field(..., description="Sum of all balances written to genesis")
    start_time: int = Field(..., description="Vesting start, UNIX seconds")
    end_time: int = Field(..., description="Vesting end, UNIX seconds")
    genesis_hash: str = Field(..., description="SHA256 of the serialized genesis document")


@dataclass
class MigrationResult:
    document: Dict[str, Any]
    text: str
    summary: MigrationSummary
