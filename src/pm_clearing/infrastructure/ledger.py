"""In-memory value ledger.

Append-only record of every transfer the core emits. Each Transfer is
stored as one entry; balances are derived by replaying entries, never
stored separately.

Called from the application services while they hold the instance lock.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from src.pm_clearing.domain.models import Transfer
from src.pm_common.enums import LedgerEntryType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerEntry:
    seq: int                       # 1-based, strictly increasing
    entry_type: LedgerEntryType
    sender: str
    recipient: str
    amount: int                    # nano, always positive
    reference_id: str              # market address or registry address


class ValueLedger:
    def __init__(self) -> None:
        self._entries: list[LedgerEntry] = []

    def record(
        self,
        transfer: Transfer,
        entry_type: LedgerEntryType,
        reference_id: str,
    ) -> LedgerEntry:
        entry = LedgerEntry(
            seq=len(self._entries) + 1,
            entry_type=entry_type,
            sender=transfer.sender,
            recipient=transfer.recipient,
            amount=transfer.amount,
            reference_id=reference_id,
        )
        self._entries.append(entry)
        logger.debug(
            "Ledger #%d %s: %s -> %s amount=%d ref=%s",
            entry.seq, entry_type.value, entry.sender, entry.recipient,
            entry.amount, reference_id,
        )
        return entry

    def apply(
        self,
        transfers: Iterable[Transfer],
        entry_type: LedgerEntryType,
        reference_id: str,
    ) -> list[LedgerEntry]:
        return [self.record(t, entry_type, reference_id) for t in transfers]

    def net_for(self, address: str) -> int:
        """Value received minus value sent by ``address``."""
        net = 0
        for entry in self._entries:
            if entry.recipient == address:
                net += entry.amount
            if entry.sender == address:
                net -= entry.amount
        return net

    def entries_for(self, reference_id: str) -> list[LedgerEntry]:
        return [e for e in self._entries if e.reference_id == reference_id]

    def total(self, entry_type: LedgerEntryType, reference_id: str | None = None) -> int:
        return sum(
            e.amount
            for e in self._entries
            if e.entry_type is entry_type
            and (reference_id is None or e.reference_id == reference_id)
        )

    @property
    def entries(self) -> list[LedgerEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
