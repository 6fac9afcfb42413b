# MIT License
# Copyright (c) 2025 Hashborn

"""
Process an exported provider snapshot into a consumer partial genesis.

NOTE: this overwrites the file at --partial-genesis-path, keep it under
source control.

Usage:
    onex-genesis \
        --partial-genesis-without-accounts-path ./environments/mainnet/partial-genesis-without-accounts.json \
        --exported-genesis-path ./mainnet-snapshot.json \
        --partial-genesis-path ./environments/mainnet/partial-genesis.json
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from ..migration.loader import load_json
from ..migration.pipeline import migrate_files
from ..migration.writer import GenesisDocumentWriter
from ..protocol.config.params import DEFAULT_PRESET, PRESETS, MigrationConfig, parse_genesis_time
from ..protocol.types.common import GenesisIOError, ParseError, ProtocolError

logger = logging.getLogger(__name__)


def build_config(args) -> MigrationConfig:
    """Preset, then --config file, then --genesis-time; later wins."""
    data = PRESETS[args.preset].model_dump()

    if args.config:
        overrides = load_json(args.config)
        data.update(overrides)

    if args.genesis_time:
        try:
            data["genesis_time"] = parse_genesis_time(args.genesis_time, args.genesis_timezone)
        except (ValueError, LookupError) as e:
            raise ParseError(f"invalid --genesis-time: {e}") from e

    try:
        return MigrationConfig.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"invalid migration config: {e}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Translate bonded amounts of an exported provider genesis into consumer genesis accounts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--partial-genesis-without-accounts-path",
        required=True,
        help="Template genesis whose accounts/balances arrays get extended",
    )
    parser.add_argument(
        "--exported-genesis-path",
        required=True,
        help="Exported provider genesis (snapshot)",
    )
    parser.add_argument(
        "--partial-genesis-path",
        required=True,
        help="Output path; any existing file is replaced",
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default=DEFAULT_PRESET,
        help=f"Migration parameters preset (default: {DEFAULT_PRESET})",
    )
    parser.add_argument("--config", help="JSON file overriding preset fields")
    parser.add_argument("--genesis-time", help="Vesting start, ISO 8601 (e.g. 2024-03-04T16:00:00Z)")
    parser.add_argument(
        "--genesis-timezone",
        help="IANA time zone for a --genesis-time without UTC offset (e.g. US/Central); "
             "uses the system tz database, or the tzdata package where there is none",
    )
    parser.add_argument("--summary-path", help="Also write the run summary as JSON")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    try:
        config = build_config(args)
        summary = migrate_files(
            snapshot_path=args.exported_genesis_path,
            template_path=args.partial_genesis_without_accounts_path,
            output_path=args.partial_genesis_path,
            config=config,
        )
    except ProtocolError as e:
        logger.error(f"{type(e).__name__}: {e}")
        logger.error(f"{args.partial_genesis_path} was not written")
        return 1

    if args.summary_path:
        try:
            GenesisDocumentWriter.write(args.summary_path, summary.model_dump_json(indent=2))
        except GenesisIOError as e:
            logger.error(f"{type(e).__name__}: {e}")
            logger.error(f"{args.partial_genesis_path} was written, but the summary was not")
            return 1

    logger.info(json.dumps(summary.model_dump(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
