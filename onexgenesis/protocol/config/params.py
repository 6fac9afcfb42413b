# MIT License
# Copyright (c) 2025 Hashborn

import math
from datetime import datetime, timezone
from typing import Dict, FrozenSet, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .module_accounts import module_account_addresses

# Global Constants
DENOM = "aonex"
DECIMALS = 18

# Seconds in one vesting period (30 days)
VESTING_PERIOD_SECONDS = 24 * 3600 * 30
VESTING_PERIOD_COUNT = 12

# Allocations below this many base units get no genesis account
MIN_ALLOCATION = 100 * 10**DECIMALS


def parse_genesis_time(value: str, tz_name: Optional[str] = None) -> datetime:
    """
    Parses an ISO 8601 instant.

    A naive timestamp is read as wall-clock time in `tz_name` (an IANA zone
    such as "US/Central") and must then have exactly one UTC meaning.
    """
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        if tz_name is None:
            raise ValueError(f"genesis time {value!r} has no UTC offset and no time zone was given")
        from zoneinfo import ZoneInfo
        zone = ZoneInfo(tz_name)
        dt = dt.replace(tzinfo=zone)
        # Ambiguous or skipped wall-clock times change meaning with `fold`
        if dt.astimezone(timezone.utc) != dt.replace(fold=1).astimezone(timezone.utc):
            raise ValueError(f"genesis time {value!r} is ambiguous in {tz_name}")
    return dt.astimezone(timezone.utc)


class MigrationConfig(BaseModel):
    """Parameters of one snapshot -> genesis migration."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="custom", description="Preset name")
    denom: str = Field(default=DENOM, description="Denomination of every genesis coin")
    decimals: int = Field(default=DECIMALS, description="Decimals of the denom (logging only)")

    account_prefix: str = Field(default="onomy", description="Bech32 prefix of snapshot accounts")
    target_prefix: Optional[str] = Field(default=None, description="Bech32 prefix of genesis accounts (default: account_prefix)")
    validate_addresses: bool = Field(default=True, description="Reject delegators that are not valid bech32")

    # Special allocation: numerator/denominator of total bonded supply
    special_address: str = Field(..., description="Receives the reserved allocation")
    special_ratio_numerator: float = Field(default=0.05)
    special_ratio_denominator: float = Field(default=0.95)

    base_account_addresses: List[str] = Field(default_factory=list, description="Vesting-exempt addresses")
    module_accounts: Optional[List[str]] = Field(default=None, description="Addresses that must never delegate")

    min_allocation: int = Field(default=MIN_ALLOCATION, description="Dust threshold in base units")

    genesis_time: datetime = Field(..., description="Vesting start, an absolute instant")
    vesting_period_seconds: int = Field(default=VESTING_PERIOD_SECONDS)
    vesting_period_count: int = Field(default=VESTING_PERIOD_COUNT)

    @field_validator("genesis_time", mode="before")
    @classmethod
    def _parse_time(cls, v):
        if isinstance(v, str):
            return parse_genesis_time(v)
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return datetime.fromtimestamp(v, tz=timezone.utc)
        return v

    @field_validator("genesis_time")
    @classmethod
    def _require_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("genesis_time must carry a UTC offset")
        return v.astimezone(timezone.utc)

    @field_validator("special_ratio_numerator")
    @classmethod
    def _check_numerator(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError(f"special_ratio_numerator must be finite and non-negative, got {v}")
        return v

    @field_validator("special_ratio_denominator")
    @classmethod
    def _check_denominator(cls, v: float) -> float:
        if not math.isfinite(v) or v <= 0:
            raise ValueError(f"special_ratio_denominator must be finite and positive, got {v}")
        return v

    @property
    def genesis_unix_time(self) -> int:
        return int(self.genesis_time.timestamp())

    @property
    def output_prefix(self) -> str:
        return self.target_prefix or self.account_prefix

    def get_module_accounts(self) -> FrozenSet[str]:
        if self.module_accounts is not None:
            return frozenset(self.module_accounts)
        return module_account_addresses(self.account_prefix)


ONEX_SPECIAL_ADDRESS = "onomy1cn8dfn77allkgte2hdfcpsypmsasy3lzeq9kcj"

PRESETS: Dict[str, MigrationConfig] = {
    "onex-mainnet": MigrationConfig(
        name="onex-mainnet",
        denom="aonex",
        account_prefix="onomy",
        special_address=ONEX_SPECIAL_ADDRESS,
        base_account_addresses=[ONEX_SPECIAL_ADDRESS],
        # 2024-03-04 10:00 US/Central
        genesis_time=datetime(2024, 3, 4, 16, 0, 0, tzinfo=timezone.utc),
    ),
}

DEFAULT_PRESET = "onex-mainnet"
