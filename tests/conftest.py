import pytest
from onexgenesis.protocol.config.params import MigrationConfig
from onexgenesis.protocol.crypto.addresses import module_address

TOKEN = 10**18


def make_address(seed: str, prefix: str = "onomy") -> str:
    # any 20-byte hash encodes to a valid account address
    return module_address(f"test-account-{seed}", prefix)


@pytest.fixture
def addr():
    return make_address


@pytest.fixture
def special_address():
    return make_address("special")


@pytest.fixture
def config(special_address):
    return MigrationConfig(
        name="test",
        denom="aonex",
        account_prefix="onomy",
        special_address=special_address,
        base_account_addresses=[special_address],
        genesis_time="2024-03-04T16:00:00Z",
    )


@pytest.fixture
def template():
    return {
        "genesis_time": "2024-03-04T16:00:00Z",
        "chain_id": "onex-mainnet-1",
        "initial_height": "1",
        "app_state": {
            "auth": {
                "params": {"max_memo_characters": "256", "tx_sig_limit": "7"},
                "accounts": [],
            },
            "bank": {
                "params": {"default_send_enabled": True},
                "balances": [],
                "supply": [],
                "denom_metadata": [],
            },
            "staking": {"params": {"bond_denom": "aonex"}},
        },
    }


def make_snapshot(validators, delegations):
    """validators: [(operator, shares, tokens)], delegations: [(delegator, operator, shares)]"""
    return {
        "app_state": {
            "staking": {
                "validators": [
                    {"operator_address": op, "delegator_shares": shares, "tokens": tokens, "status": "BOND_STATUS_BONDED"}
                    for op, shares, tokens in validators
                ],
                "delegations": [
                    {"delegator_address": d, "validator_address": op, "shares": shares}
                    for d, op, shares in delegations
                ],
            }
        }
    }


@pytest.fixture
def snapshot_factory():
    return make_snapshot
