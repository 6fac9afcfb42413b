# MIT License
# Copyright (c) 2025 Hashborn

import logging
from dataclasses import dataclass

from .types import AllocationMap
from ..protocol.types.uint import checked_add, narrow_u128

logger = logging.getLogger(__name__)


def special_allocation(total_supply: int, numerator: float = 0.05, denominator: float = 0.95) -> int:
    """
    Reserved allocation as a fraction of the bonded supply.

    Evaluated in IEEE-754 doubles and truncated toward zero. Published
    genesis files were produced this way; exact rational arithmetic gives
    different low digits and would not reproduce them.
    """
    ratio = float(numerator) / float(denominator)
    return narrow_u128(int(ratio * float(total_supply)))


@dataclass
class SupplyAdjustment:
    allocations: AllocationMap
    bonded_supply: int
    special_allocation: int
    total_supply: int


class SupplyAdjuster:
    def __init__(self, special_address: str, numerator: float = 0.05, denominator: float = 0.95, decimals: int = 18):
        self.special_address = special_address
        self.numerator = numerator
        self.denominator = denominator
        self.decimals = decimals

    def _whole(self, amount: int) -> int:
        return amount // 10**self.decimals

    def adjust(self, allocations: AllocationMap) -> SupplyAdjustment:
        """
        Adds the special allocation on top of the bonded supply.

        The input map is left unchanged.

        Raises:
            InvariantViolation: If the special address already has an allocation
            ArithmeticOverflow: If the supply does not fit u128
        """
        bonded = allocations.total()
        logger.info(f"total supply: {bonded} ({self._whole(bonded)} * 10^{self.decimals})")

        special = special_allocation(bonded, self.numerator, self.denominator)
        adjusted = allocations.copy()
        adjusted.insert(self.special_address, special)
        logger.info(f"special address: {special} ({self._whole(special)} * 10^{self.decimals})")

        total = checked_add(bonded, special)
        logger.info(
            f"total supply with special address: {total} ({self._whole(total)} * 10^{self.decimals})"
        )
        return SupplyAdjustment(
            allocations=adjusted,
            bonded_supply=bonded,
            special_allocation=special,
            total_supply=total,
        )
