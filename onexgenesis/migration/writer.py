# MIT License
# Copyright (c) 2025 Hashborn

"""
Genesis Document Writer

Appends computed accounts and balances to a partial genesis and renders it
canonically. Every node boots from this file, so rendering is byte-stable:
sorted keys, two-space indentation, no trailing newline.
"""

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, Union

from .loader import Json, get_list
from ..protocol.crypto.hash import sha256_hex
from ..protocol.types.accounts import BalanceRecord, BaseAccount, VestingAccount
from ..protocol.types.common import GenesisIOError

logger = logging.getLogger(__name__)

AnyAccount = Union[BaseAccount, VestingAccount]


def render(document: Dict[str, Any]) -> str:
    return json.dumps(document, indent=2, sort_keys=True, ensure_ascii=False)


def genesis_hash(text: str) -> str:
    return sha256_hex(text.encode("utf-8"))


class GenesisDocumentWriter:
    def __init__(self, template: Json):
        """
        Args:
            template: Partial genesis with app_state.auth.accounts and
                app_state.bank.balances arrays; it is not modified
        """
        # fail on a malformed template before any work is done
        get_list(template, "app_state", "auth", "accounts")
        get_list(template, "app_state", "bank", "balances")
        self.template = template

    def merge(self, accounts: Iterable[AnyAccount], balances: Iterable[BalanceRecord]) -> Json:
        """Returns a copy of the template with the records appended in the given order."""
        document = copy.deepcopy(self.template)
        acc_list = get_list(document, "app_state", "auth", "accounts")
        bal_list = get_list(document, "app_state", "bank", "balances")
        pre_accounts, pre_balances = len(acc_list), len(bal_list)

        acc_list.extend(a.to_genesis() for a in accounts)
        bal_list.extend(b.to_genesis() for b in balances)

        logger.info(
            f"Appended {len(acc_list) - pre_accounts} accounts and "
            f"{len(bal_list) - pre_balances} balances to template"
        )
        return document

    @staticmethod
    def write(path: Union[str, Path], text: str):
        """
        Replace `path` with `text` in one step.

        The content goes to a temporary file in the same directory first, so
        the destination holds either its previous content or the full new one.
        """
        dest = Path(path)
        directory = dest.parent
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{dest.name}.", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, dest)
            tmp_name = None
        except OSError as e:
            raise GenesisIOError(f"cannot write {dest}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.info(f"Wrote {len(text)} bytes to {dest}")
