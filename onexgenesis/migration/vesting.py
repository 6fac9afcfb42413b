# MIT License
# Copyright (c) 2025 Hashborn

"""
Vesting Schedule Builder

Every remaining allocation becomes a periodic vesting account. The first
1/N of the balance is liquid at genesis: the account gets N-1 real vesting
periods and `original_vesting` excludes one period's worth.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Tuple

from .types import AllocationMap, VestingOutput
from ..protocol.types.accounts import BalanceRecord, Coin, VestingAccount, VestingPeriod
from ..protocol.types.common import InvariantViolation
from ..protocol.types.uint import checked_add, checked_mul, checked_sub, narrow_u128, U128_BITS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VestingSchedule:
    start_time: int       # UNIX seconds
    period_length: int    # Seconds
    period_count: int

    def __post_init__(self):
        if self.period_count < 2:
            raise InvariantViolation(f"vesting needs at least 2 periods, got {self.period_count}")
        if self.period_length <= 0:
            raise InvariantViolation(f"vesting period length must be positive, got {self.period_length}")
        if self.start_time < 0:
            raise InvariantViolation(f"genesis time before UNIX epoch: {self.start_time}")

    @classmethod
    def from_datetime(cls, start: datetime, period_length: int, period_count: int) -> "VestingSchedule":
        return cls(start_time=int(start.timestamp()), period_length=period_length, period_count=period_count)

    @property
    def end_time(self) -> int:
        return self.start_time + self.period_length * self.period_count

    def split(self, allocation: int) -> Tuple[int, int, int]:
        """
        Returns (per_period, total_balance, original_vesting).

        total_balance is a whole number of periods, so up to N-1 base units
        of the allocation are lost to the division.
        """
        n = self.period_count
        per_period = allocation // n
        total_balance = narrow_u128(checked_mul(per_period, n, U128_BITS))
        original_vesting = narrow_u128(checked_mul(per_period, n - 1, U128_BITS))
        return per_period, total_balance, original_vesting


class VestingScheduleBuilder:
    def __init__(self, schedule: VestingSchedule, denom: str):
        self.schedule = schedule
        self.denom = denom

    def log_schedule(self):
        start = datetime.fromtimestamp(self.schedule.start_time, tz=timezone.utc)
        logger.info(f"genesis time: {start.isoformat(timespec='milliseconds').replace('+00:00', 'Z')}")
        logger.info(f"UNIX genesis time: {self.schedule.start_time}")
        logger.info(f"length of each vesting period in seconds: {self.schedule.period_length}")
        logger.info(f"number of vesting periods: {self.schedule.period_count}")

    def build_account(self, address: str, allocation: int) -> Tuple[VestingAccount, BalanceRecord]:
        per_period, total_balance, original_vesting = self.schedule.split(allocation)
        periods = [
            VestingPeriod(length=self.schedule.period_length, amount=[Coin(denom=self.denom, amount=per_period)])
            for _ in range(self.schedule.period_count - 1)
        ]
        account = VestingAccount(
            address=address,
            original_vesting=[Coin(denom=self.denom, amount=original_vesting)],
            start_time=self.schedule.start_time,
            end_time=self.schedule.end_time,
            vesting_periods=periods,
        )
        balance = BalanceRecord(address=address, coins=[Coin(denom=self.denom, amount=total_balance)])
        return account, balance

    def build(self, allocations: AllocationMap) -> VestingOutput:
        self.log_schedule()
        out = VestingOutput(accounts=[], balances=[])
        for address, allocation in allocations.items():
            account, balance = self.build_account(address, allocation)
            out.accounts.append(account)
            out.balances.append(balance)
            out.truncation_loss = checked_add(
                out.truncation_loss, checked_sub(allocation, balance.coins[0].amount)
            )
        return out
