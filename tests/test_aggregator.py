import pytest
from onexgenesis.migration.aggregator import (
    DelegationAggregator, delegated_tokens, parse_delegations, parse_truncated_uint, parse_validators,
)
from onexgenesis.protocol.config.module_accounts import module_account_addresses
from onexgenesis.protocol.crypto.addresses import decode_address, module_address
from onexgenesis.protocol.types.common import ArithmeticOverflow, InvariantViolation, ParseError
from onexgenesis.protocol.types.staking import Delegation, ValidatorTotals

VAL1 = "onomyvaloper1first"
VAL2 = "onomyvaloper1second"


@pytest.fixture
def aggregator():
    return DelegationAggregator(module_accounts=module_account_addresses("onomy"))


@pytest.mark.parametrize("raw,expected", [
    ("500.5", 500),
    ("500.999999999999999999", 500),
    ("2000", 2000),
    ("0.000000000000000001", 0),
    ("1000000000000000000000.000000000000000000", 10**21),
    ("0x10", 16),
])
def test_parse_truncated_uint(raw, expected):
    assert parse_truncated_uint(raw) == expected


@pytest.mark.parametrize("raw", [None, 5, "", ".5", "abc", "-5", "+5", " 5", "1_000", "5e3"])
def test_parse_truncated_uint_rejects(raw):
    with pytest.raises(ParseError):
        parse_truncated_uint(raw)


def test_parse_truncated_uint_too_wide():
    with pytest.raises(ArithmeticOverflow):
        parse_truncated_uint(str(2**256))


@pytest.mark.parametrize("raw", ["1" * 5000 + ".0", "9" * 79, "0x" + "f" * 65])
def test_parse_truncated_uint_long_strings(raw):
    # rejected by length, before any int conversion limit applies
    with pytest.raises(ArithmeticOverflow):
        parse_truncated_uint(raw)


def test_parse_truncated_uint_leading_zeros():
    assert parse_truncated_uint("0" * 5000 + "42.5") == 42
    assert parse_truncated_uint(str(2**256 - 1)) == 2**256 - 1
    assert parse_truncated_uint("0x" + "f" * 64) == 2**256 - 1


def test_scenario_a_fractional_shares(aggregator, addr, snapshot_factory):
    # 500.5 shares -> 500 -> 500 * 2000 / 1000
    snap = snapshot_factory(
        [(VAL1, "1000.000000000000000000", "2000")],
        [(addr("alice"), VAL1, "500.5")],
    )
    allocations = aggregator.from_snapshot(snap)
    assert allocations.items() == [(addr("alice"), 1000)]


def test_delegated_tokens():
    v = ValidatorTotals(id=VAL1, total_shares=3000, total_tokens=1000)
    d = Delegation(delegator="x", validator=VAL1, shares=1500)
    assert delegated_tokens(d, v) == 500


def test_accumulates_across_validators(aggregator, addr, snapshot_factory):
    alice, bob = addr("alice"), addr("bob")
    snap = snapshot_factory(
        [(VAL1, "1000.0", "2000"), (VAL2, "3000.5", "1000")],
        [
            (alice, VAL1, "100.0"),
            (bob, VAL2, "30.0"),
            (alice, VAL2, "1500.9"),
            (alice, VAL1, "50.0"),
        ],
    )
    allocations = aggregator.from_snapshot(snap)
    assert allocations.get(alice) == 200 + 500 + 100
    assert allocations.get(bob) == 10
    assert len(allocations) == 2
    assert list(allocations) == sorted([alice, bob])


def test_scenario_c_module_account_delegator(aggregator, addr, snapshot_factory):
    pool = module_address("bonded_tokens_pool", "onomy")
    snap = snapshot_factory(
        [(VAL1, "1000.0", "2000")],
        [(addr("alice"), VAL1, "100.0"), (pool, VAL1, "10.0")],
    )
    with pytest.raises(InvariantViolation):
        aggregator.from_snapshot(snap)


def test_unknown_validator(aggregator, addr, snapshot_factory):
    snap = snapshot_factory([(VAL1, "1000.0", "2000")], [(addr("alice"), VAL2, "1.0")])
    with pytest.raises(ParseError):
        aggregator.from_snapshot(snap)


def test_zero_share_validator(aggregator, addr, snapshot_factory):
    snap = snapshot_factory([(VAL1, "0.0", "2000")], [(addr("alice"), VAL1, "1.0")])
    with pytest.raises(ArithmeticOverflow):
        aggregator.from_snapshot(snap)


def test_allocation_must_fit_u128(aggregator, addr, snapshot_factory):
    snap = snapshot_factory(
        [(VAL1, "1.0", str(2**128))],
        [(addr("alice"), VAL1, "1.0")],
    )
    with pytest.raises(ArithmeticOverflow):
        aggregator.from_snapshot(snap)


def test_sum_must_fit_u128(aggregator, addr, snapshot_factory):
    big = str(2**127)
    snap = snapshot_factory(
        [(VAL1, "1.0", big)],
        [(addr("alice"), VAL1, "1.0"), (addr("alice"), VAL1, "1.0")],
    )
    with pytest.raises(ArithmeticOverflow):
        aggregator.from_snapshot(snap)


def test_missing_fields(snapshot_factory):
    with pytest.raises(ParseError):
        parse_validators({"app_state": {}})
    with pytest.raises(ParseError):
        parse_validators({"app_state": {"staking": {"validators": [{"operator_address": VAL1, "tokens": "1"}]}}})
    with pytest.raises(ParseError):
        parse_delegations({"app_state": {"staking": {"delegations": [{"delegator_address": "a", "shares": "1"}]}}})
    with pytest.raises(ParseError):
        parse_delegations({"app_state": {"staking": {"delegations": {}}}})


def test_duplicate_validator(snapshot_factory):
    snap = snapshot_factory([(VAL1, "1.0", "1"), (VAL1, "2.0", "2")], [])
    with pytest.raises(ParseError):
        parse_validators(snap)


def test_address_validation(addr, snapshot_factory):
    aggregator = DelegationAggregator(module_accounts=[], account_prefix="onomy", validate_addresses=True)
    snap = snapshot_factory([(VAL1, "1.0", "1")], [("onomy1garbage", VAL1, "1.0")])
    with pytest.raises(ParseError):
        aggregator.from_snapshot(snap)

    snap = snapshot_factory([(VAL1, "1.0", "1")], [(addr("alice", prefix="cosmos"), VAL1, "1.0")])
    with pytest.raises(ParseError):
        aggregator.from_snapshot(snap)


def test_reprefix_to_target(addr, snapshot_factory):
    aggregator = DelegationAggregator(
        module_accounts=[], account_prefix="onomy", target_prefix="onex", validate_addresses=True
    )
    snap = snapshot_factory([(VAL1, "1.0", "7")], [(addr("alice"), VAL1, "1.0")])
    allocations = aggregator.from_snapshot(snap)
    (address, amount), = allocations.items()
    assert address.startswith("onex1")
    assert decode_address(address)[1] == decode_address(addr("alice"))[1]
    assert amount == 7
