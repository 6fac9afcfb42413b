# MIT License
# Copyright (c) 2025 Hashborn

from enum import Enum


class AccountType(str, Enum):
    BASE = "/cosmos.auth.v1beta1.BaseAccount"
    PERIODIC_VESTING = "/cosmos.vesting.v1beta1.PeriodicVestingAccount"


class ProtocolError(Exception):
    pass


class ParseError(ProtocolError):
    """Malformed or missing document field, or a non-numeric amount."""
    pass


class ArithmeticOverflow(ProtocolError):
    """A token amount does not fit the integer width it must be stored in."""
    pass


class InvariantViolation(ProtocolError):
    pass


class GenesisIOError(ProtocolError):
    pass
