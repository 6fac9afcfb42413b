# MIT License
# Copyright (c) 2025 Hashborn

import logging
from typing import Iterable, List

from .types import AllocationMap, Classification
from ..protocol.types.accounts import BalanceRecord, BaseAccount, Coin

logger = logging.getLogger(__name__)


class AccountClassifier:
    """
    Splits allocations into vesting-exempt base accounts and accounts that
    will vest, dropping dust along the way.
    """

    def __init__(self, base_addresses: Iterable[str], min_allocation: int, denom: str):
        self.base_addresses: List[str] = sorted(set(base_addresses))
        self.min_allocation = min_allocation
        self.denom = denom

    def classify(self, allocations: AllocationMap) -> Classification:
        remaining = allocations.copy()

        base_accounts = []
        base_balances = []
        for address in self.base_addresses:
            # every configured base address must have received an allocation
            balance = remaining.remove(address)
            base_accounts.append(BaseAccount(address=address, balance=balance))
            base_balances.append(BalanceRecord(address=address, coins=[Coin(denom=self.denom, amount=balance)]))

        vesting = AllocationMap()
        dropped = {}
        for address, amount in remaining.items():
            if amount < self.min_allocation:
                logger.debug(f"Dropping {address}: {amount} below minimum {self.min_allocation}")
                dropped[address] = amount
                continue
            vesting.insert(address, amount)

        logger.info(
            f"{len(base_accounts)} base accounts, {len(vesting)} vesting accounts, "
            f"{len(dropped)} allocations below minimum dropped"
        )
        return Classification(
            base_accounts=base_accounts,
            base_balances=base_balances,
            vesting_allocations=vesting,
            dropped=dropped,
        )
