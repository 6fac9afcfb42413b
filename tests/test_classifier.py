import pytest
from onexgenesis.migration.classifier import AccountClassifier
from onexgenesis.migration.types import AllocationMap
from onexgenesis.protocol.config.params import MIN_ALLOCATION
from onexgenesis.protocol.types.common import InvariantViolation
from conftest import TOKEN


def test_base_accounts_split_off(addr, special_address):
    allocations = AllocationMap({
        special_address: 5 * TOKEN,  # below minimum but exempt
        addr("alice"): 500 * TOKEN,
    })
    result = AccountClassifier([special_address], MIN_ALLOCATION, "aonex").classify(allocations)

    assert [a.address for a in result.base_accounts] == [special_address]
    assert result.base_accounts[0].balance == 5 * TOKEN
    assert result.base_balances[0].coins[0].amount == 5 * TOKEN
    assert result.base_balances[0].coins[0].denom == "aonex"
    assert result.vesting_allocations.items() == [(addr("alice"), 500 * TOKEN)]


def test_dust_filter_boundary(addr, special_address):
    allocations = AllocationMap({
        special_address: 1,
        addr("exact"): 100 * TOKEN,
        addr("under"): 100 * TOKEN - 1,
        addr("zero"): 0,
    })
    result = AccountClassifier([special_address], 100 * TOKEN, "aonex").classify(allocations)

    assert list(result.vesting_allocations) == [addr("exact")]
    assert result.dropped == {addr("under"): 100 * TOKEN - 1, addr("zero"): 0}


def test_missing_base_address(addr, special_address):
    allocations = AllocationMap({addr("alice"): 500 * TOKEN})
    with pytest.raises(InvariantViolation):
        AccountClassifier([special_address], MIN_ALLOCATION, "aonex").classify(allocations)


def test_multiple_base_addresses_sorted(addr):
    a, b = sorted([addr("x"), addr("y")])
    allocations = AllocationMap({a: 1, b: 2, addr("z"): 200 * TOKEN})
    result = AccountClassifier([b, a], MIN_ALLOCATION, "aonex").classify(allocations)
    assert [acc.address for acc in result.base_accounts] == [a, b]
    assert len(result.vesting_allocations) == 1
