# MIT License
# Copyright (c) 2025 Hashborn

"""
Delegation Aggregator

Turns the staking section of an exported provider genesis into bonded token
allocations per delegator address.
"""

import logging
import re
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from .loader import Json, get_list, get_str
from .types import AllocationMap
from ..protocol.crypto.addresses import is_valid_address, reprefix_address
from ..protocol.types.common import ArithmeticOverflow, InvariantViolation, ParseError
from ..protocol.types.staking import Delegation, ValidatorTotals
from ..protocol.types.uint import U256_BITS, U256_MAX, check_width, mul_div_floor

logger = logging.getLogger(__name__)

_DEC_RE = re.compile(r"[0-9]+")
_HEX_RE = re.compile(r"0x[0-9a-fA-F]+")

# Longest digit strings that can still hold a u256 (leading zeros aside)
_MAX_DEC_DIGITS = len(str(U256_MAX))
_MAX_HEX_DIGITS = U256_BITS // 4


def parse_truncated_uint(value: Any, field: str = "value") -> int:
    """
    Parse a decimal string as an unsigned integer, dropping any fraction.

    "500.5" -> 500, "2000" -> 2000. The fraction is cut off, never rounded.
    A 0x-prefixed hex string is accepted as well.

    Raises:
        ParseError: Missing, empty, signed or non-numeric value
        ArithmeticOverflow: Value wider than 256 bits
    """
    if not isinstance(value, str):
        raise ParseError(f"{field} must be a decimal string, got {value!r}")

    head = value.split(".", 1)[0]
    if _DEC_RE.fullmatch(head):
        digits, base = head.lstrip("0") or "0", 10
        limit = _MAX_DEC_DIGITS
    elif _HEX_RE.fullmatch(head):
        digits, base = head[2:].lstrip("0") or "0", 16
        limit = _MAX_HEX_DIGITS
    else:
        raise ParseError(f"{field} is not a decimal number: {value!r}")

    # reject before int() so oversized strings never reach the conversion
    if len(digits) > limit:
        raise ArithmeticOverflow(f"{field} does not fit in u{U256_BITS}: {len(digits)} digits")
    parsed = int(digits, base)

    return check_width(parsed, U256_BITS, field)


def parse_validators(snapshot: Json) -> Dict[str, ValidatorTotals]:
    validators: Dict[str, ValidatorTotals] = {}
    for i, rec in enumerate(get_list(snapshot, "app_state", "staking", "validators")):
        where = f"validators[{i}]"
        operator = get_str(rec, "operator_address", where)
        if operator in validators:
            raise ParseError(f"duplicate validator {operator}")
        validators[operator] = ValidatorTotals(
            id=operator,
            total_shares=parse_truncated_uint(get_str(rec, "delegator_shares", where), f"{where}.delegator_shares"),
            total_tokens=parse_truncated_uint(get_str(rec, "tokens", where), f"{where}.tokens"),
        )
    return validators


def parse_delegations(snapshot: Json) -> List[Delegation]:
    delegations = []
    for i, rec in enumerate(get_list(snapshot, "app_state", "staking", "delegations")):
        where = f"delegations[{i}]"
        delegations.append(Delegation(
            delegator=get_str(rec, "delegator_address", where),
            validator=get_str(rec, "validator_address", where),
            shares=parse_truncated_uint(get_str(rec, "shares", where), f"{where}.shares"),
        ))
    return delegations


def delegated_tokens(delegation: Delegation, validator: ValidatorTotals) -> int:
    """floor(shares * total_tokens / total_shares), checked to fit u128."""
    return mul_div_floor(delegation.shares, validator.total_tokens, validator.total_shares)


class DelegationAggregator:
    """
    Sums bonded tokens per delegator.

    Only bonded amounts count; unbonding entries and liquid balances of the
    snapshot are ignored.
    """

    def __init__(
        self,
        module_accounts: Iterable[str],
        account_prefix: Optional[str] = None,
        target_prefix: Optional[str] = None,
        validate_addresses: bool = False,
    ):
        """
        Args:
            module_accounts: Addresses that must never appear as delegators
            account_prefix: Expected bech32 prefix of delegators
            target_prefix: Prefix to re-encode delegators under (None keeps them)
            validate_addresses: Reject delegators that do not decode as bech32
        """
        self.module_accounts: FrozenSet[str] = frozenset(module_accounts)
        self.account_prefix = account_prefix
        self.target_prefix = target_prefix
        self.validate_addresses = validate_addresses

    def _output_address(self, delegator: str) -> str:
        if self.validate_addresses and not is_valid_address(delegator, self.account_prefix):
            raise ParseError(f"invalid delegator address {delegator!r}")
        if self.target_prefix and self.target_prefix != self.account_prefix:
            try:
                return reprefix_address(delegator, self.target_prefix)
            except ValueError as e:
                raise ParseError(str(e)) from e
        return delegator

    def aggregate(
        self,
        validators: Dict[str, ValidatorTotals],
        delegations: Iterable[Delegation],
    ) -> AllocationMap:
        allocations = AllocationMap()
        count = 0
        for delegation in delegations:
            if delegation.delegator in self.module_accounts:
                # module accounts never delegate; a snapshot where one does is corrupt
                raise InvariantViolation(
                    f"module account {delegation.delegator} appears as a delegator"
                )

            validator = validators.get(delegation.validator)
            if validator is None:
                raise ParseError(
                    f"delegation from {delegation.delegator} references unknown validator {delegation.validator}"
                )

            amount = delegated_tokens(delegation, validator)
            allocations.accumulate(self._output_address(delegation.delegator), amount)
            count += 1

        logger.info(f"Aggregated {count} delegations into {len(allocations)} allocations")
        return allocations

    def from_snapshot(self, snapshot: Json) -> AllocationMap:
        validators = parse_validators(snapshot)
        delegations = parse_delegations(snapshot)
        logger.info(f"Snapshot has {len(validators)} validators and {len(delegations)} delegations")
        return self.aggregate(validators, delegations)
