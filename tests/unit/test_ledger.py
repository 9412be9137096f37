"""Tests for pm_clearing.infrastructure.ledger: append-only value ledger."""

from src.pm_clearing.domain.models import Transfer
from src.pm_clearing.infrastructure.ledger import ValueLedger
from src.pm_common.enums import LedgerEntryType


class TestValueLedger:
    def test_empty(self) -> None:
        ledger = ValueLedger()
        assert len(ledger) == 0
        assert ledger.net_for("0:a") == 0

    def test_record_assigns_sequence(self) -> None:
        ledger = ValueLedger()
        first = ledger.record(Transfer("0:u", "0:m", 10), LedgerEntryType.TRADE_DEPOSIT, "0:m")
        second = ledger.record(Transfer("0:m", "0:u", 4), LedgerEntryType.SELL_PAYOUT, "0:m")
        assert (first.seq, second.seq) == (1, 2)
        assert second.sender == "0:m"
        assert second.recipient == "0:u"

    def test_net_for(self) -> None:
        ledger = ValueLedger()
        ledger.record(Transfer("0:u", "0:m", 10), LedgerEntryType.TRADE_DEPOSIT, "0:m")
        ledger.record(Transfer("0:m", "0:u", 4), LedgerEntryType.SELL_PAYOUT, "0:m")
        assert ledger.net_for("0:m") == 6
        assert ledger.net_for("0:u") == -6

    def test_apply_many(self) -> None:
        ledger = ValueLedger()
        entries = ledger.apply(
            [Transfer("0:m", "0:a", 3), Transfer("0:m", "0:b", 6)],
            LedgerEntryType.SETTLEMENT_PAYOUT,
            "0:m",
        )
        assert [e.seq for e in entries] == [1, 2]
        assert ledger.total(LedgerEntryType.SETTLEMENT_PAYOUT) == 9

    def test_apply_nothing(self) -> None:
        ledger = ValueLedger()
        assert ledger.apply([], LedgerEntryType.CLAIM_PAYOUT, "0:m") == []

    def test_filters(self) -> None:
        ledger = ValueLedger()
        ledger.record(Transfer("0:u", "0:m1", 10), LedgerEntryType.MARKET_DEPOSIT, "0:m1")
        ledger.record(Transfer("0:u", "0:m2", 20), LedgerEntryType.MARKET_DEPOSIT, "0:m2")
        ledger.record(Transfer("0:u", "0:f", 5), LedgerEntryType.FACTORY_DEPOSIT, "0:m2")
        assert len(ledger.entries_for("0:m2")) == 2
        assert ledger.total(LedgerEntryType.MARKET_DEPOSIT) == 30
        assert ledger.total(LedgerEntryType.MARKET_DEPOSIT, "0:m1") == 10

    def test_entries_is_a_copy(self) -> None:
        ledger = ValueLedger()
        ledger.record(Transfer("0:u", "0:m", 1), LedgerEntryType.TRADE_DEPOSIT, "0:m")
        ledger.entries.clear()
        assert len(ledger) == 1
