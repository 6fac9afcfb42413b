# MIT License
# Copyright (c) 2025 Hashborn

"""
Genesis account and balance records.

`to_genesis()` produces the exact JSON shape the Cosmos SDK auth and bank
modules import. Amounts, times and lengths are strings there, so the u128
values never pass through a JSON number.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List

from .common import AccountType


def _base_account_json(address: str) -> Dict[str, Any]:
    return {
        "address": address,
        "pub_key": None,
        "account_number": "0",
        "sequence": "0",
    }


class Coin(BaseModel):
    model_config = ConfigDict(frozen=True)

    denom: str
    amount: int

    def to_genesis(self) -> Dict[str, Any]:
        return {"denom": self.denom, "amount": str(self.amount)}


class VestingPeriod(BaseModel):
    model_config = ConfigDict(frozen=True)

    length: int           # Seconds
    amount: List[Coin]

    def to_genesis(self) -> Dict[str, Any]:
        return {
            "length": str(self.length),
            "amount": [c.to_genesis() for c in self.amount],
        }


class BaseAccount(BaseModel):
    """Account with no lock, fully liquid at genesis."""
    model_config = ConfigDict(frozen=True)

    address: str
    balance: int

    def to_genesis(self) -> Dict[str, Any]:
        return {"@type": AccountType.BASE.value, **_base_account_json(self.address)}


class VestingAccount(BaseModel):
    """Periodic vesting account; each period unlocks a further amount."""
    model_config = ConfigDict(frozen=True)

    address: str
    original_vesting: List[Coin]
    start_time: int       # UNIX seconds
    end_time: int         # UNIX seconds
    vesting_periods: List[VestingPeriod] = Field(default_factory=list)
    delegated_free: List[Coin] = Field(default_factory=list)
    delegated_vesting: List[Coin] = Field(default_factory=list)

    def to_genesis(self) -> Dict[str, Any]:
        return {
            "@type": AccountType.PERIODIC_VESTING.value,
            "base_vesting_account": {
                "base_account": _base_account_json(self.address),
                "original_vesting": [c.to_genesis() for c in self.original_vesting],
                "delegated_free": [c.to_genesis() for c in self.delegated_free],
                "delegated_vesting": [c.to_genesis() for c in self.delegated_vesting],
                "end_time": str(self.end_time),
            },
            "start_time": str(self.start_time),
            "vesting_periods": [p.to_genesis() for p in self.vesting_periods],
        }


class BalanceRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    coins: List[Coin]

    def to_genesis(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "coins": [c.to_genesis() for c in self.coins],
        }
