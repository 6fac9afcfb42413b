# MIT License
# Copyright (c) 2025 Hashborn

"""
Snapshot -> genesis pipeline.

Parse -> Aggregate -> AdjustSupply -> Classify -> BuildVesting -> Write.
Each stage either succeeds or raises; the destination file is written only
after the whole document has been built.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .aggregator import DelegationAggregator
from .classifier import AccountClassifier
from .loader import Json, load_json
from .supply import SupplyAdjuster
from .types import MigrationResult, MigrationSummary
from .vesting import VestingSchedule, VestingScheduleBuilder
from .writer import GenesisDocumentWriter, genesis_hash, render
from ..protocol.config.params import MigrationConfig
from ..protocol.types.uint import checked_sum

logger = logging.getLogger(__name__)


def run_migration(snapshot: Json, template: Json, config: MigrationConfig) -> MigrationResult:
    """
    Build the genesis document in memory.

    Args:
        snapshot: Exported provider genesis (app_state.staking is read)
        template: Partial genesis without accounts
        config: Migration parameters

    Returns:
        MigrationResult with the merged document, its canonical text and a summary
    """
    writer = GenesisDocumentWriter(template)
    schedule = VestingSchedule.from_datetime(
        config.genesis_time, config.vesting_period_seconds, config.vesting_period_count
    )

    aggregator = DelegationAggregator(
        module_accounts=config.get_module_accounts(),
        account_prefix=config.account_prefix,
        target_prefix=config.target_prefix,
        validate_addresses=config.validate_addresses,
    )
    allocations = aggregator.from_snapshot(snapshot)

    adjustment = SupplyAdjuster(
        config.special_address,
        config.special_ratio_numerator,
        config.special_ratio_denominator,
        config.decimals,
    ).adjust(allocations)

    classification = AccountClassifier(
        config.base_account_addresses, config.min_allocation, config.denom
    ).classify(adjustment.allocations)

    vesting = VestingScheduleBuilder(schedule, config.denom).build(classification.vesting_allocations)

    # base accounts first, then vesting accounts; each group in address order
    document = writer.merge(
        [*classification.base_accounts, *vesting.accounts],
        [*classification.base_balances, *vesting.balances],
    )
    text = render(document)

    summary = MigrationSummary(
        denom=config.denom,
        bonded_supply=adjustment.bonded_supply,
        special_allocation=adjustment.special_allocation,
        total_supply=adjustment.total_supply,
        base_accounts=len(classification.base_accounts),
        vesting_accounts=len(vesting.accounts),
        dropped_accounts=len(classification.dropped),
        dropped_amount=checked_sum(classification.dropped.values()),
        truncation_loss=vesting.truncation_loss,
        genesis_balance=checked_sum(
            b.coins[0].amount for b in [*classification.base_balances, *vesting.balances]
        ),
        start_time=schedule.start_time,
        end_time=schedule.end_time,
        genesis_hash=genesis_hash(text),
    )
    logger.info(f"genesis balance total: {summary.genesis_balance}, truncation loss: {summary.truncation_loss}")
    logger.info(f"genesis sha256: {summary.genesis_hash}")
    return MigrationResult(document=document, text=text, summary=summary)


def migrate_files(
    snapshot_path: Union[str, Path],
    template_path: Union[str, Path],
    output_path: Union[str, Path],
    config: MigrationConfig,
    summary_path: Optional[Union[str, Path]] = None,
) -> MigrationSummary:
    """
    Load both inputs, run the pipeline and replace `output_path`.

    Nothing is written unless every stage succeeded. The previous content
    of `output_path` is discarded, so keep it under version control.
    """
    snapshot = load_json(snapshot_path)
    template = load_json(template_path)

    result = run_migration(snapshot, template, config)

    GenesisDocumentWriter.write(output_path, result.text)
    if summary_path is not None:
        GenesisDocumentWriter.write(summary_path, result.summary.model_dump_json(indent=2))
    return result.summary
