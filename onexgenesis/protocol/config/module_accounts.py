# MIT License
# Copyright (c) 2025 Hashborn

"""
Module accounts of the provider chain.

Module accounts hold protocol-owned funds (fee pool, bonded pool, ...) and
must never show up as delegators in an exported snapshot.
"""

from typing import FrozenSet, Iterable
from ..crypto.addresses import module_address

MODULE_ACCOUNT_NAMES = (
    "fee_collector",
    "distribution",
    "mint",
    "bonded_tokens_pool",
    "not_bonded_tokens_pool",
    "gov",
    "transfer",
    "gravity",
    "dao",
    "provider",
    "interchainaccounts",
)


def module_account_addresses(prefix: str, names: Iterable[str] = MODULE_ACCOUNT_NAMES) -> FrozenSet[str]:
    return frozenset(module_address(name, prefix) for name in names)
